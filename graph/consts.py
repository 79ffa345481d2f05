"""Node / edge name constants for the scoring graph."""

EXTRACT_INSIGHTS = "extract_insights"
SCORE_INSIGHTS = "score_insights"
ROLLUP = "rollup"
CLASSIFY_ALERTS = "classify_alerts"
NOTIFY = "notify"
