"""
News fetcher – pulls the latest articles (with their analyst insights) from the
news REST API and maps them onto ``Article`` records for the scoring pipeline.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests

from config import (
    NEWS_API_BASE,
    NEWS_API_KEY,
    NEWS_LIMIT,
    NEWS_LOOKBACK_MINUTES,
    NEWS_REQUEST_TIMEOUT,
)
from core.models import Article, Insight

logger = logging.getLogger(__name__)

_NEWS_PATH = "/v2/reference/news"


class NewsAPIError(RuntimeError):
    """Raised when the news API answers with a non-2xx status or an unexpected body."""


# ── Helpers ──────────────────────────────────────────────────────────────────

def window_start(now: Optional[datetime] = None, minutes: int = NEWS_LOOKBACK_MINUTES) -> str:
    """ISO timestamp *minutes* before *now* (UTC)."""
    now = now or datetime.now(timezone.utc)
    return (now - timedelta(minutes=minutes)).astimezone(timezone.utc).isoformat()


def parse_timestamp(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    try:
        ts = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("[NEWS] Unparseable timestamp %r", raw)
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _string_list(value: Any) -> List[str]:
    return [str(v) for v in value if v] if isinstance(value, list) else []


def parse_insights(raw: Any) -> List[Insight]:
    """Map the API's insight entries onto Insight records (non-lists → no insights)."""
    if not isinstance(raw, list):
        return []
    insights = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        insights.append(
            Insight(
                ticker=entry.get("ticker") or None,
                sentiment=str(entry.get("sentiment") or ""),
                reasoning=str(entry.get("sentiment_reasoning") or entry.get("reasoning") or ""),
            )
        )
    return insights


def map_to_articles(items: List[Dict[str, Any]]) -> List[Article]:
    """Map raw API results onto Article records."""
    articles = []
    for r in items:
        if not isinstance(r, dict):
            logger.warning("[NEWS] Skipping non-object result %r", r)
            continue
        published = r.get("published_utc") or r.get("published_at") or r.get("date")
        articles.append(
            Article(
                url=r.get("article_url"),
                title=r.get("title") or "",
                description=r.get("description") or r.get("summary") or "",
                published_utc=parse_timestamp(published),
                tickers=_string_list(r.get("tickers")),
                keywords=_string_list(r.get("keywords")),
                insights=parse_insights(r.get("insights")),
            )
        )
    return articles


# ── Public entry point ───────────────────────────────────────────────────────

def fetch_news(
    gte_iso: str,
    ticker: Optional[str] = None,
    api_base: str = NEWS_API_BASE,
    api_key: str = NEWS_API_KEY,
    limit: int = NEWS_LIMIT,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """Return raw news results published at or after *gte_iso*, oldest first."""
    if not api_base:
        raise NewsAPIError("NEWS_API_BASE is not configured")

    params = {
        "sort": "published_utc",
        "order": "asc",
        "limit": str(limit),
        "published_utc.gte": gte_iso,
    }
    if ticker:
        params["ticker"] = ticker
    headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}

    http = session or requests
    resp = http.get(urljoin(api_base, _NEWS_PATH), params=params, headers=headers, timeout=NEWS_REQUEST_TIMEOUT)
    if not resp.ok:
        raise NewsAPIError(f"News API {resp.status_code}: {resp.text}")

    try:
        payload = resp.json()
    except ValueError as e:
        raise NewsAPIError(f"News API returned a non-JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise NewsAPIError(f"News API returned {type(payload).__name__}, expected an object")

    results = payload.get("results") or []
    if not isinstance(results, list):
        raise NewsAPIError(f"News API results is {type(results).__name__}, expected a list")
    logger.info("[NEWS] Fetched %d article(s) since %s", len(results), gte_iso)
    return results


def fetch_articles(gte_iso: Optional[str] = None, **kwargs) -> List[Article]:
    """Fetch the latest window of news and map it onto Articles."""
    return map_to_articles(fetch_news(gte_iso or window_start(), **kwargs))
