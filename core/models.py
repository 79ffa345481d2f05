"""
Domain records for the scoring pipeline.

Articles are owned by the caller; the pipeline only reads their input fields
and writes the scoring results (``sentiment_insights`` and ``rollup``) back
onto the same object.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

# Base sentiment literals carried by raw insights
POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"

SCORABLE_SENTIMENTS = (POSITIVE, NEGATIVE)


def normalize_sentiment(value: Any) -> str:
    """Trim and lowercase a raw sentiment label (None → "")."""
    if value is None:
        return ""
    return str(value).strip().lower()


@dataclass(frozen=True)
class Insight:
    """A ticker-scoped sentiment claim attached to an article upstream."""

    ticker: Optional[str]
    sentiment: str
    reasoning: str = ""


@dataclass
class ScoredInsight:
    """Per-insight scoring result, aligned by ``index`` with the raw insights."""

    index: int
    ticker: Optional[str]
    sentiment: str          # carried over from the raw insight, never altered
    score: int              # [-100, 100]
    confidence_model: float  # [0, 1]
    confidence_rule: float   # [0, 1]
    reasoning: str

    @property
    def is_scorable(self) -> bool:
        return normalize_sentiment(self.sentiment) in SCORABLE_SENTIMENTS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ArticleRollup:
    """Article-level aggregate of the scored insights."""

    scored: bool
    score: Optional[int] = None
    confidence_model: Optional[float] = None
    confidence_rule: Optional[float] = None
    reasoning: Optional[str] = None

    @classmethod
    def not_scored(cls) -> "ArticleRollup":
        """Rollup for an article with no scorable insights."""
        return cls(scored=False)


@dataclass
class Article:
    """A news article plus the scoring results written back by the pipeline."""

    url: Optional[str]
    title: str = ""
    description: str = ""
    published_utc: Optional[datetime] = None
    tickers: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    insights: List[Insight] = field(default_factory=list)

    # Written back by the pipeline
    sentiment_insights: Optional[List[ScoredInsight]] = None
    rollup: Optional[ArticleRollup] = None

    @property
    def published_iso(self) -> Optional[str]:
        return self.published_utc.isoformat() if self.published_utc else None

    @property
    def text(self) -> str:
        """Title and description joined, used for event classification."""
        return f"{self.title or ''} {self.description or ''}".strip()

    def to_record(self) -> Dict[str, Any]:
        """Outbound row for the persistence layer.

        Sentiment fields are null when the article was never scored or had no
        scorable insights, so "not scored" stays distinguishable from a
        computed score of 0.
        """
        rollup = self.rollup if self.rollup is not None else ArticleRollup.not_scored()
        return {
            "article_url": self.url,
            "title": self.title or None,
            "description": self.description or None,
            "published_utc": self.published_iso,
            "tickers": list(self.tickers),
            "keywords": list(self.keywords),
            "insights": [asdict(i) for i in self.insights],
            "sentiment_score": rollup.score if rollup.scored else None,
            "sentiment_confidence_model": rollup.confidence_model if rollup.scored else None,
            "sentiment_confidence_rule": rollup.confidence_rule if rollup.scored else None,
            "sentiment_reasoning": rollup.reasoning if rollup.scored else None,
            "sentiment_insights": (
                [s.to_dict() for s in self.sentiment_insights]
                if self.sentiment_insights
                else None
            ),
        }


@dataclass(frozen=True)
class WorkUnit:
    """One scorable insight queued for the external scorer. Never persisted."""

    article_index: int
    insight_index: int
    text: str
    sentiment: str  # positive | negative
    ticker: Optional[str]
    title: str
    published_utc: Optional[str]


@dataclass(frozen=True)
class ModelScore:
    """Validated scorer output for a single work unit."""

    score: int
    confidence: float
    reasoning: str
    fallback: bool = False


@dataclass(frozen=True)
class CircuitState:
    """Persisted scoring circuit flag."""

    disabled_until: Optional[datetime] = None
    reason: str = ""
