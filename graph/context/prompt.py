"""Prompt body builder for a batch of work units."""

from typing import Sequence

from core.models import WorkUnit
from graph.context.base import ContextBuilder
from graph.context.formatters import format_insight_blocks


class InsightBatchContextBuilder(ContextBuilder):
    """Render a batch as numbered insight blocks.

    Block numbers are batch positions; the scorer is asked to echo them back
    as ``index`` so results can be reassembled regardless of output order.
    """

    def build(self, source: Sequence[WorkUnit]) -> str:
        return format_insight_blocks(source)
