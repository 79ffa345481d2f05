"""Formatting helpers for converting pipeline data to text for the scorer and for alerts."""

import re
from typing import Iterable, List, Optional

from config import ALERT_TITLE_MAX_CHARS
from core.models import Article, ScoredInsight, WorkUnit

_WS = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace runs and trim."""
    return _WS.sub(" ", text or "").strip()


def truncate(text: str, max_length: int) -> str:
    """Truncate text to *max_length* characters, marking the cut with an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 1, 0)] + "…"


def format_insight_text(ticker: Optional[str], sentiment: str, reasoning: str) -> str:
    """Display text for a single insight, as shown to the scorer.

    Args:
        ticker: Ticker the insight is about (may be None)
        sentiment: Upstream base sentiment label
        reasoning: Upstream free-text rationale

    Returns:
        One-line insight description
    """
    prefix = f"[{ticker}] " if ticker else ""
    body = normalize_text(reasoning) or "(no rationale given)"
    return f"{prefix}{sentiment}: {body}"


def format_insight_block(position: int, unit: WorkUnit) -> str:
    """Numbered prompt block for one work unit.

    Args:
        position: Index of the unit inside its batch (the scorer echoes it back)
        unit: Work unit to describe

    Returns:
        Multi-line block for the scorer prompt
    """
    return "\n".join(
        [
            f"--- INSIGHT {position} ---",
            f"Title: {normalize_text(unit.title)}",
            f"Ticker: {unit.ticker or ''}",
            f"Base sentiment: {unit.sentiment}",
            f"Insight: {unit.text}",
            f"Published UTC: {unit.published_utc or ''}",
        ]
    )


def format_insight_blocks(batch: Iterable[WorkUnit]) -> str:
    return "\n\n".join(format_insight_block(i, unit) for i, unit in enumerate(batch))


def format_alert_line(article: Article, insight: Optional[ScoredInsight] = None) -> str:
    """One alert entry: truncated title, tickers, score/confidences and link.

    Args:
        article: Alerted article
        insight: Strongest insight that triggered the alert, if known

    Returns:
        Single alert line
    """
    title = truncate(normalize_text(article.title) or "(untitled)", ALERT_TITLE_MAX_CHARS)
    tickers = ", ".join(article.tickers) if article.tickers else "-"
    if insight is not None:
        metrics = (
            f"score {insight.score:+d} | model {insight.confidence_model:.2f} | "
            f"rule {insight.confidence_rule:.2f}"
        )
    elif article.rollup is not None and article.rollup.scored:
        metrics = (
            f"score {article.rollup.score:+d} | model {article.rollup.confidence_model:.2f} | "
            f"rule {article.rollup.confidence_rule:.2f}"
        )
    else:
        metrics = "not scored"
    link = article.url or "(no link)"
    return f"• {title} [{tickers}] {metrics}\n  {link}"


def format_alert_section(header: str, lines: List[str]) -> str:
    if not lines:
        return f"{header}\n(none)"
    return f"{header}\n" + "\n".join(lines)


def format_no_alerts() -> str:
    return "No strong sentiment alerts this run."
