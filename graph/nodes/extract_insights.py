"""
Node: Partition every article's raw insights into immediately-resolved
neutral results and scorable (positive / negative) work units.

Neutral insights never reach the scorer. Each article gets a
``sentiment_insights`` list with one slot per raw insight; slots for
scorable insights stay empty until SCORE_INSIGHTS fills them.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from core.models import (
    NEUTRAL,
    SCORABLE_SENTIMENTS,
    Article,
    ScoredInsight,
    WorkUnit,
    normalize_sentiment,
)
from graph.context.formatters import format_insight_text
from graph.state import PipelineState

logger = logging.getLogger(__name__)

NEUTRAL_SKIPPED = "Neutral insight; model scoring skipped."


def _skipped(index: int, ticker: Optional[str], sentiment: str, reasoning: str) -> ScoredInsight:
    return ScoredInsight(
        index=index,
        ticker=ticker,
        sentiment=sentiment,
        score=0,
        confidence_model=0.0,
        confidence_rule=0.0,
        reasoning=reasoning,
    )


def extract_insights(
    article: Article,
    article_index: int,
) -> Tuple[List[Optional[ScoredInsight]], List[WorkUnit]]:
    """Split one article's insights.

    Returns:
        (slots, units): ``slots`` has one entry per raw insight – a resolved
        ScoredInsight, or None where a work unit was queued; ``units`` holds
        the queued work units in insight order.
    """
    slots: List[Optional[ScoredInsight]] = []
    units: List[WorkUnit] = []

    for index, insight in enumerate(article.insights):
        sentiment = normalize_sentiment(insight.sentiment)

        if sentiment == NEUTRAL:
            slots.append(_skipped(index, insight.ticker, insight.sentiment, NEUTRAL_SKIPPED))
            continue

        if sentiment not in SCORABLE_SENTIMENTS:
            logger.warning(
                "[EXTRACT] Unrecognized sentiment %r on insight %d of %s; skipping model scoring",
                insight.sentiment, index, article.url,
            )
            slots.append(_skipped(
                index, insight.ticker, insight.sentiment,
                f"Unrecognized sentiment {insight.sentiment!r}; model scoring skipped.",
            ))
            continue

        slots.append(None)
        units.append(
            WorkUnit(
                article_index=article_index,
                insight_index=index,
                text=format_insight_text(insight.ticker, sentiment, insight.reasoning),
                sentiment=sentiment,
                ticker=insight.ticker,
                title=article.title or "",
                published_utc=article.published_iso,
            )
        )

    return slots, units


def extract_insights_node(state: PipelineState) -> Dict[str, Any]:
    logger.info("---EXTRACT INSIGHTS---")
    articles = state["articles"]
    work_units: List[WorkUnit] = []
    resolved = 0

    for article_index, article in enumerate(articles):
        slots, units = extract_insights(article, article_index)
        article.sentiment_insights = slots
        work_units.extend(units)
        resolved += len(slots) - len(units)

    logger.info("[EXTRACT] %d article(s): %d work unit(s) queued, %d insight(s) resolved without scoring",
                len(articles), len(work_units), resolved)
    return {"articles": articles, "work_units": work_units}
