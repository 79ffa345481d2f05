"""
Node: Score queued work units through the ScoringClient, then calibrate each
result against the article's source tier and event category and write it
into the article's ``sentiment_insights`` slot.
"""

import logging
from typing import Any, Callable, Dict

from core.calibrator import pseudo_calibrate
from core.classifier import classify_event, classify_source
from core.models import ScoredInsight
from graph.scoring_client import ScoringClient
from graph.state import PipelineState

logger = logging.getLogger(__name__)


def make_score_insights_node(client: ScoringClient) -> Callable[[PipelineState], Dict[str, Any]]:
    """Bind a ScoringClient into the SCORE_INSIGHTS node."""

    def score_insights(state: PipelineState) -> Dict[str, Any]:
        logger.info("---SCORE INSIGHTS---")
        articles = state["articles"]
        units = state["work_units"]
        if not units:
            logger.info("[SCORE] Nothing to score")
            return {"articles": articles}

        scores = client.score_units(units)
        fallbacks = 0

        for unit, result in zip(units, scores):
            article = articles[unit.article_index]
            calibration = pseudo_calibrate(
                sentiment_score=result.score,
                confidence_model=result.confidence,
                source=classify_source(article.url),
                event=classify_event(article.keywords, article.text),
            )
            article.sentiment_insights[unit.insight_index] = ScoredInsight(
                index=unit.insight_index,
                ticker=unit.ticker,
                sentiment=article.insights[unit.insight_index].sentiment,
                score=result.score,
                confidence_model=result.confidence,
                confidence_rule=calibration.confidence_rule,
                reasoning=result.reasoning,
            )
            fallbacks += result.fallback

        logger.info("[SCORE] %d insight(s) scored (%d neutral fallback(s))", len(scores), fallbacks)
        return {"articles": articles}

    return score_insights
