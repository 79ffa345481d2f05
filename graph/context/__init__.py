"""Text context building - separates data selection from text layout."""

from .base import ContextBuilder
from .prompt import InsightBatchContextBuilder
from .alerts import AlertSummaryBuilder, format_alert_summary
from .formatters import (
    normalize_text,
    truncate,
    format_insight_text,
    format_insight_block,
    format_insight_blocks,
    format_alert_line,
    format_alert_section,
    format_no_alerts,
)

__all__ = [
    # Base interface
    "ContextBuilder",
    # Implementations
    "InsightBatchContextBuilder",
    "AlertSummaryBuilder",
    "format_alert_summary",
    # Formatters
    "normalize_text",
    "truncate",
    "format_insight_text",
    "format_insight_block",
    "format_insight_blocks",
    "format_alert_line",
    "format_alert_section",
    "format_no_alerts",
]
