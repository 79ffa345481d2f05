"""Alert summary builder for the notification collaborator."""

from typing import List, Optional

from config import ALERT_MAX_PER_DIRECTION
from core.alerts import AlertSelection, AlertThresholds, strong_insights
from core.models import Article
from graph.context.base import ContextBuilder
from graph.context.formatters import format_alert_line, format_alert_section, format_no_alerts


class AlertSummaryBuilder(ContextBuilder):
    """Plain-text summary listing up to N bullish and N bearish candidates."""

    def __init__(
        self,
        thresholds: Optional[AlertThresholds] = None,
        limit: int = ALERT_MAX_PER_DIRECTION,
    ):
        self.thresholds = thresholds or AlertThresholds()
        self.limit = limit

    def _line(self, article, bullish: bool) -> str:
        hits = strong_insights(article, self.thresholds, bullish=bullish)
        strongest = max(hits, key=lambda s: abs(s.score)) if hits else None
        return format_alert_line(article, strongest)

    def build(self, source: AlertSelection) -> str:
        if source.empty:
            return format_no_alerts()

        bullish = [self._line(a, True) for a in source.bullish[: self.limit]]
        bearish = [self._line(a, False) for a in source.bearish[: self.limit]]
        return "\n\n".join(
            [
                format_alert_section(f"📈 Strong bullish ({len(bullish)})", bullish),
                format_alert_section(f"📉 Strong bearish ({len(bearish)})", bearish),
            ]
        )


def format_alert_summary(
    bullish: List[Article],
    bearish: List[Article],
    thresholds: Optional[AlertThresholds] = None,
    limit: int = ALERT_MAX_PER_DIRECTION,
) -> str:
    """Alert summary text for already-selected candidates."""
    return AlertSummaryBuilder(thresholds, limit).build(AlertSelection(bullish=list(bullish), bearish=list(bearish)))
