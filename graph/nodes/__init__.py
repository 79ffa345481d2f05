from .extract_insights import extract_insights, extract_insights_node
from .score_insights import make_score_insights_node
from .rollup import rollup_article, rollup_node
from .classify_alerts import make_classify_alerts_node
from .notify import make_notify_node

__all__ = [
    "extract_insights",
    "extract_insights_node",
    "make_score_insights_node",
    "rollup_article",
    "rollup_node",
    "make_classify_alerts_node",
    "make_notify_node",
]
