"""
Graph state definition for the scoring pipeline.
Flows through every node in the LangGraph.
"""

from typing import List, TypedDict

from core.models import Article, WorkUnit


class PipelineState(TypedDict):
    """
    Attributes:
        articles:       Articles of this run; scoring results are written back onto them.
        work_units:     Scorable insights queued for the external scorer.
        bullish:        Strong-bullish alert candidates, in original order.
        bearish:        Strong-bearish alert candidates, in original order.
        alert_summary:  Plain-text alert summary for the notification collaborator.
        notified:       Whether the alert summary was delivered.
    """

    articles: List[Article]
    work_units: List[WorkUnit]
    bullish: List[Article]
    bearish: List[Article]
    alert_summary: str
    notified: bool


def initial_state(articles: List[Article]) -> PipelineState:
    return {
        "articles": articles,
        "work_units": [],
        "bullish": [],
        "bearish": [],
        "alert_summary": "",
        "notified": False,
    }
