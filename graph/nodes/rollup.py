"""
Node: Roll each article's scored insights up into one ArticleRollup.

The aggregate score is the model-confidence-weighted mean of the scorable
insights, re-calibrated with the article's classifier outputs and dampened.
Articles without scorable insights get the distinct "not scored" rollup.
"""

import logging
from typing import Any, Dict, List, Optional

from config import REASONING_MAX_CHARS
from core.calibrator import clamp01, clamp_score, pseudo_calibrate, round_half_away
from core.classifier import classify_event, classify_source
from core.models import Article, ArticleRollup, ScoredInsight
from graph.state import PipelineState

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 0.5


def _weight(insight: ScoredInsight) -> float:
    conf = insight.confidence_model
    return DEFAULT_WEIGHT if conf is None else clamp01(conf)


def _summarize(scored: List[ScoredInsight]) -> str:
    """Distinct reasonings, strongest score first."""
    seen = set()
    parts = []
    for insight in sorted(scored, key=lambda s: abs(s.score), reverse=True):
        text = (insight.reasoning or "").strip()
        if text and text not in seen:
            seen.add(text)
            parts.append(f"{insight.ticker}: {text}" if insight.ticker else text)
    return " | ".join(parts)[:REASONING_MAX_CHARS]


def rollup_article(article: Article, short_return_abs: Optional[float] = None) -> ArticleRollup:
    scored = [s for s in (article.sentiment_insights or []) if s is not None and s.is_scorable]
    if not scored:
        return ArticleRollup.not_scored()

    weights = [_weight(s) for s in scored]
    total = sum(weights)
    if total > 0:
        mean = sum(s.score * w for s, w in zip(scored, weights)) / total
    else:
        mean = sum(s.score for s in scored) / len(scored)
    aggregate = clamp_score(round_half_away(mean))

    confidences = [s.confidence_model if s.confidence_model is not None else DEFAULT_WEIGHT for s in scored]
    confidence_model = clamp01(sum(confidences) / len(confidences))

    calibration = pseudo_calibrate(
        sentiment_score=aggregate,
        confidence_model=confidence_model,
        source=classify_source(article.url),
        event=classify_event(article.keywords, article.text),
        short_return_abs=short_return_abs,
    )
    return ArticleRollup(
        scored=True,
        score=calibration.score_pseudo,
        confidence_model=confidence_model,
        confidence_rule=calibration.confidence_rule,
        reasoning=_summarize(scored),
    )


def rollup_node(state: PipelineState) -> Dict[str, Any]:
    logger.info("---ROLLUP---")
    articles = state["articles"]
    scored = 0
    for article in articles:
        article.rollup = rollup_article(article)
        scored += article.rollup.scored
    logger.info("[ROLLUP] %d of %d article(s) have a sentiment rollup", scored, len(articles))
    return {"articles": articles}
