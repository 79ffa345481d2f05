"""
Discord webhook notifier.
Sends the run's alert summary to a Discord channel.
"""

import logging
from typing import Optional

import requests

from config import DISCORD_USERNAME, DISCORD_WEBHOOK_URL

logger = logging.getLogger(__name__)

# Discord rejects message content longer than this
_MAX_CONTENT = 2000


def send_alert_summary(
    summary: str,
    webhook_url: Optional[str] = None,
    username: str = DISCORD_USERNAME,
) -> bool:
    """
    Post the plain-text alert summary to Discord.
    Skips (returns False) if no webhook URL is configured; delivery failures
    are logged and reported as False rather than aborting the run.
    """
    url = webhook_url if webhook_url is not None else DISCORD_WEBHOOK_URL
    if not url:
        logger.warning("[DISCORD] No webhook URL configured – skipping notification")
        return False

    content = summary if len(summary) <= _MAX_CONTENT else summary[: _MAX_CONTENT - 1] + "…"
    payload = {"username": username, "content": content}

    try:
        resp = requests.post(url, json=payload, timeout=10)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.error("[DISCORD] Failed to send notification: %s", exc)
        return False

    logger.info("[DISCORD] Alert summary sent (%d chars)", len(content))
    return True
