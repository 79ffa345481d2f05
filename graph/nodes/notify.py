"""
Node: Hand the alert summary to the notification collaborator.
Skipped when the run produced no alert candidates.
"""

import logging
from typing import Any, Callable, Dict, Optional

from core.discord_notifier import send_alert_summary
from graph.state import PipelineState

logger = logging.getLogger(__name__)


def make_notify_node(
    notifier: Optional[Callable[[str], bool]] = None,
) -> Callable[[PipelineState], Dict[str, Any]]:
    send = notifier or send_alert_summary

    def notify(state: PipelineState) -> Dict[str, Any]:
        logger.info("---NOTIFY---")
        if not state["bullish"] and not state["bearish"]:
            logger.info("[NOTIFY] No alert candidates – nothing to send")
            return {"notified": False}
        return {"notified": bool(send(state["alert_summary"]))}

    return notify
