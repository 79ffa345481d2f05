"""
Persisted circuit breaker for the external scorer.

Once tripped by quota exhaustion the breaker stays open until the next daily
reset boundary (a configured UTC hour), even across process restarts, because
its state lives in a ``StateStore`` rather than in memory.
"""

import logging
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Optional

from config import CIRCUIT_RESET_HOUR_UTC, CIRCUIT_STATE_KEY
from core.models import CircuitState
from core.state import StateStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(raw) -> Optional[datetime]:
    if not raw:
        return None
    try:
        ts = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("[CIRCUIT] Ignoring unparseable disabled_until=%r", raw)
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def next_reset_boundary(now: datetime, reset_hour_utc: int) -> datetime:
    """First ``reset_hour_utc``:00 UTC strictly after *now*."""
    now_utc = now.astimezone(timezone.utc)
    boundary = datetime.combine(now_utc.date(), time(hour=reset_hour_utc), tzinfo=timezone.utc)
    if boundary <= now_utc:
        boundary += timedelta(days=1)
    return boundary


class CircuitBreaker:
    """Gate deciding whether the external scorer may be called."""

    def __init__(
        self,
        store: StateStore,
        reset_hour_utc: int = CIRCUIT_RESET_HOUR_UTC,
        key: str = CIRCUIT_STATE_KEY,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Parameters:
            store: Where the circuit record is persisted
            reset_hour_utc: Hour of day (0-23, UTC) at which a trip expires
            key: Record key inside the store
            clock: Returns the current aware datetime (injectable for tests)
        """
        if not 0 <= reset_hour_utc <= 23:
            raise ValueError(f"reset_hour_utc must be in [0, 23], got {reset_hour_utc}")
        self.store = store
        self.reset_hour_utc = reset_hour_utc
        self.key = key
        self._clock = clock

    def state(self) -> CircuitState:
        record = self.store.read(self.key) or {}
        return CircuitState(
            disabled_until=_parse_timestamp(record.get("disabled_until")),
            reason=str(record.get("reason") or ""),
        )

    def is_open(self) -> bool:
        """True while the recorded ``disabled_until`` lies in the future."""
        disabled_until = self.state().disabled_until
        return disabled_until is not None and self._clock() < disabled_until

    def trip(self, reason: str) -> datetime:
        """Open the circuit until the next daily boundary and persist it."""
        until = next_reset_boundary(self._clock(), self.reset_hour_utc)
        self.store.write(self.key, {"disabled_until": until.isoformat(), "reason": reason})
        logger.warning("[CIRCUIT] Scoring disabled until %s: %s", until.isoformat(), reason)
        return until
