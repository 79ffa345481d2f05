"""
Node: Select strong-bullish / strong-bearish alert candidates and render the
plain-text alert summary.
"""

import logging
from typing import Any, Callable, Dict, Optional

from config import ALERT_MAX_PER_DIRECTION
from core.alerts import AlertThresholds, select_alerts
from graph.context import AlertSummaryBuilder
from graph.state import PipelineState

logger = logging.getLogger(__name__)


def make_classify_alerts_node(
    thresholds: Optional[AlertThresholds] = None,
    limit: int = ALERT_MAX_PER_DIRECTION,
) -> Callable[[PipelineState], Dict[str, Any]]:
    thresholds = thresholds or AlertThresholds()
    summary_builder = AlertSummaryBuilder(thresholds=thresholds, limit=limit)

    def classify_alerts(state: PipelineState) -> Dict[str, Any]:
        logger.info("---CLASSIFY ALERTS---")
        selection = select_alerts(state["articles"], thresholds, limit)
        logger.info("[ALERT] %d bullish / %d bearish candidate(s)", len(selection.bullish), len(selection.bearish))
        return {
            "bullish": selection.bullish,
            "bearish": selection.bearish,
            "alert_summary": summary_builder.build(selection),
        }

    return classify_alerts
