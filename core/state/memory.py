"""In-memory state store with thread safety."""

import copy
import threading
from typing import Any, Dict, Optional

from .base import StateStore


class InMemoryStateStore(StateStore):
    """Thread-safe in-memory state store.

    Suitable for tests and single-process runs; nothing survives a restart.
    """

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records.get(key)
            return copy.deepcopy(record) if record is not None else None

    def write(self, key: str, value: Dict[str, Any]) -> None:
        with self._lock:
            self._records[key] = copy.deepcopy(value)

    def clear(self) -> None:
        """Drop all records."""
        with self._lock:
            self._records.clear()
