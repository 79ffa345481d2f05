"""
LangGraph workflow for the sentiment scoring pipeline.

Pipeline: EXTRACT_INSIGHTS → SCORE_INSIGHTS → ROLLUP → CLASSIFY_ALERTS → NOTIFY
"""

from typing import Callable, Optional

from langgraph.graph import END, StateGraph

from config import ALERT_MAX_PER_DIRECTION
from core.alerts import AlertThresholds
from .consts import (
    EXTRACT_INSIGHTS,
    SCORE_INSIGHTS,
    ROLLUP,
    CLASSIFY_ALERTS,
    NOTIFY,
)
from .nodes import (
    extract_insights_node,
    make_score_insights_node,
    rollup_node,
    make_classify_alerts_node,
    make_notify_node,
)
from .scoring_client import ScoringClient
from .state import PipelineState


def build_graph(
    client: ScoringClient,
    thresholds: Optional[AlertThresholds] = None,
    alert_limit: int = ALERT_MAX_PER_DIRECTION,
    notifier: Optional[Callable[[str], bool]] = None,
):
    """Build and compile the scoring graph around an injected ScoringClient."""
    workflow = StateGraph(PipelineState)

    # Add nodes
    workflow.add_node(EXTRACT_INSIGHTS, extract_insights_node)
    workflow.add_node(SCORE_INSIGHTS, make_score_insights_node(client))
    workflow.add_node(ROLLUP, rollup_node)
    workflow.add_node(CLASSIFY_ALERTS, make_classify_alerts_node(thresholds, alert_limit))
    workflow.add_node(NOTIFY, make_notify_node(notifier))

    # Linear pipeline: extract → score → rollup → alerts → notify → END
    workflow.set_entry_point(EXTRACT_INSIGHTS)
    workflow.add_edge(EXTRACT_INSIGHTS, SCORE_INSIGHTS)
    workflow.add_edge(SCORE_INSIGHTS, ROLLUP)
    workflow.add_edge(ROLLUP, CLASSIFY_ALERTS)
    workflow.add_edge(CLASSIFY_ALERTS, NOTIFY)
    workflow.add_edge(NOTIFY, END)

    # Compile
    return workflow.compile()
