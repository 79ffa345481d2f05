"""
Alert candidate selection over scored articles.

An article is a strong-bullish candidate when at least one of its non-neutral
insights clears all three thresholds (score, model confidence, rule
confidence); strong-bearish is the mirror image on the score.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from config import (
    ALERT_MAX_PER_DIRECTION,
    ALERT_MODEL_CONFIDENCE_THRESHOLD,
    ALERT_RULE_CONFIDENCE_THRESHOLD,
    ALERT_SCORE_THRESHOLD,
)
from core.models import Article, ScoredInsight


@dataclass(frozen=True)
class AlertThresholds:
    score: int = ALERT_SCORE_THRESHOLD
    model_confidence: float = ALERT_MODEL_CONFIDENCE_THRESHOLD
    rule_confidence: float = ALERT_RULE_CONFIDENCE_THRESHOLD


@dataclass(frozen=True)
class AlertFlags:
    bullish: bool = False
    bearish: bool = False


@dataclass
class AlertSelection:
    """Alert candidates for one run, in original article order."""

    bullish: List[Article] = field(default_factory=list)
    bearish: List[Article] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.bullish and not self.bearish


def _confident(insight: ScoredInsight, thresholds: AlertThresholds) -> bool:
    return (
        insight.confidence_model >= thresholds.model_confidence
        and insight.confidence_rule >= thresholds.rule_confidence
    )


def strong_insights(
    article: Article,
    thresholds: AlertThresholds,
    bullish: bool,
) -> List[ScoredInsight]:
    """Non-neutral insights of *article* that clear the thresholds in one direction."""
    hits = []
    for insight in article.sentiment_insights or []:
        if not insight.is_scorable or not _confident(insight, thresholds):
            continue
        if bullish and insight.score >= thresholds.score:
            hits.append(insight)
        elif not bullish and insight.score <= -thresholds.score:
            hits.append(insight)
    return hits


def classify_article(article: Article, thresholds: Optional[AlertThresholds] = None) -> AlertFlags:
    thresholds = thresholds or AlertThresholds()
    return AlertFlags(
        bullish=bool(strong_insights(article, thresholds, bullish=True)),
        bearish=bool(strong_insights(article, thresholds, bullish=False)),
    )


def select_alerts(
    articles: Iterable[Article],
    thresholds: Optional[AlertThresholds] = None,
    limit: int = ALERT_MAX_PER_DIRECTION,
) -> AlertSelection:
    """First *limit* candidates per direction, in original order (no re-sorting)."""
    thresholds = thresholds or AlertThresholds()
    selection = AlertSelection()
    for article in articles:
        flags = classify_article(article, thresholds)
        if flags.bullish and len(selection.bullish) < limit:
            selection.bullish.append(article)
        if flags.bearish and len(selection.bearish) < limit:
            selection.bearish.append(article)
    return selection
