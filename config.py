"""
Central configuration for the sentiment scoring pipeline.
All tunables live here so they're easy to find and override via env vars.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ────────────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).parent          # project root
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(DATA_DIR / "scored")))
CIRCUIT_STATE_FILE = Path(os.getenv("CIRCUIT_STATE_FILE", str(DATA_DIR / "circuit_state.json")))

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ── OpenAI (scorer) ──────────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.1"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# ── Scoring ──────────────────────────────────────────────────────────────────
ENABLE_SCORING = os.getenv("ENABLE_SCORING", "true").lower() != "false"
SCORE_BATCH_SIZE = int(os.getenv("SCORE_BATCH_SIZE", "20"))
SCORING_MAX_RETRIES = int(os.getenv("SCORING_MAX_RETRIES", "4"))
SCORING_BACKOFF_BASE_SECONDS = float(os.getenv("SCORING_BACKOFF_BASE_SECONDS", "2"))
SCORING_BACKOFF_MAX_SECONDS = float(os.getenv("SCORING_BACKOFF_MAX_SECONDS", "15"))
SCORING_FALLBACK_CONFIDENCE = float(os.getenv("SCORING_FALLBACK_CONFIDENCE", "0.3"))
REASONING_MAX_CHARS = 300

# ── Circuit breaker ──────────────────────────────────────────────────────────
# Hour of day (UTC) at which the provider's daily quota resets
CIRCUIT_RESET_HOUR_UTC = int(os.getenv("CIRCUIT_RESET_HOUR_UTC", "7"))
CIRCUIT_STATE_KEY = "llm_scoring"

# ── Alerts ───────────────────────────────────────────────────────────────────
ALERT_SCORE_THRESHOLD = int(os.getenv("ALERT_SCORE_THRESHOLD", "60"))
ALERT_MODEL_CONFIDENCE_THRESHOLD = float(os.getenv("ALERT_MODEL_CONFIDENCE_THRESHOLD", "0.75"))
ALERT_RULE_CONFIDENCE_THRESHOLD = float(os.getenv("ALERT_RULE_CONFIDENCE_THRESHOLD", "0.70"))
ALERT_MAX_PER_DIRECTION = int(os.getenv("ALERT_MAX_PER_DIRECTION", "5"))
ALERT_TITLE_MAX_CHARS = int(os.getenv("ALERT_TITLE_MAX_CHARS", "90"))

# ── News API ─────────────────────────────────────────────────────────────────
NEWS_API_BASE = os.getenv("NEWS_API_BASE", "")
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
NEWS_LOOKBACK_MINUTES = int(os.getenv("NEWS_LOOKBACK_MINUTES", "60"))
NEWS_LIMIT = int(os.getenv("NEWS_LIMIT", "300"))
NEWS_REQUEST_TIMEOUT = float(os.getenv("NEWS_REQUEST_TIMEOUT", "15"))

# ── Storage ──────────────────────────────────────────────────────────────────
# Scored-record files older than this are deleted at the start of each run
RETENTION_DAYS = int(os.getenv("RETENTION_DAYS", "2"))

# ── Discord ──────────────────────────────────────────────────────────────────
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL", "")
DISCORD_USERNAME = os.getenv("DISCORD_USERNAME", "Sentiment Desk")
