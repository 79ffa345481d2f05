"""JSON-file state store shared by every run on the same host."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .base import StateStore

logger = logging.getLogger(__name__)


class JsonFileStateStore(StateStore):
    """State store persisted to a single JSON document on disk.

    The document maps keys to records. Writes go to a temp file that is then
    renamed over the target, so a concurrent reader sees either the old or the
    new document, never a partial one. A missing or unreadable file reads as
    empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("[STATE] Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._load().get(key)
        return record if isinstance(record, dict) else None

    def write(self, key: str, value: Dict[str, Any]) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
