"""
Main entry point for the sentiment scoring pipeline.

One bounded run per invocation (schedule it with cron or similar):
  prune old record files → fetch the last window of news → extract insights
  → score in batches → calibrate & roll up → select alerts → notify → persist records
"""

import sys
from pathlib import Path

# Ensure the package root is importable when launched as a script
_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from config import (
    CIRCUIT_STATE_FILE,
    ENABLE_SCORING,
    LLM_MODEL,
    LOG_LEVEL,
    OPENAI_API_KEY,
    SCORE_BATCH_SIZE,
)
from core.alerts import AlertThresholds
from core.circuit_breaker import CircuitBreaker
from core.models import Article
from core.news_fetcher import fetch_articles, window_start
from core.state import JsonFileStateStore
from core.storage import cleanup_old_records, save_records
from graph.chains import ChainFactory
from graph.graph import build_graph
from graph.scoring_client import ScoringClient
from graph.state import PipelineState, initial_state

logger = logging.getLogger("main")


def run_pipeline(
    articles: List[Article],
    client: ScoringClient,
    thresholds: Optional[AlertThresholds] = None,
    notifier: Optional[Callable[[str], bool]] = None,
) -> PipelineState:
    """Score, roll up and alert on *articles* in place; returns the final graph state."""
    app = build_graph(client, thresholds=thresholds, notifier=notifier)
    return app.invoke(initial_state(articles))


def create_scoring_client() -> ScoringClient:
    """ScoringClient wired to the configured model and the on-disk circuit state."""
    chain = ChainFactory.build_chain_by_name("insight_scoring")
    breaker = CircuitBreaker(JsonFileStateStore(CIRCUIT_STATE_FILE))
    return ScoringClient(chain=chain, breaker=breaker, batch_size=SCORE_BATCH_SIZE)


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if ENABLE_SCORING and not OPENAI_API_KEY:
        logger.error("❌ ENABLE_SCORING is on but OPENAI_API_KEY is not set")
        return 1

    run_at = datetime.now(timezone.utc)
    cleanup_old_records(now=run_at)

    gte_iso = window_start(run_at)
    articles = fetch_articles(gte_iso)
    if not articles:
        logger.info("[OK] No items. window=%s", gte_iso)
        return 0

    if ENABLE_SCORING:
        logger.info("[SCORE] Scoring enabled. model=%s, batch=%d", LLM_MODEL, SCORE_BATCH_SIZE)
        result = run_pipeline(articles, create_scoring_client())
        logger.info("[ALERT] notified=%s\n%s", result["notified"], result["alert_summary"])
    else:
        logger.info("[SCORE] Skipped (ENABLE_SCORING=false).")

    save_records([a.to_record() for a in articles], run_at=run_at)
    logger.info("[OK] stored=%d window=%s", len(articles), gte_iso)
    return 0


if __name__ == "__main__":
    sys.exit(main())
