"""
File persistence for scored articles.

Stands in for the database insert: each run's outbound records are written
to a timestamped JSON file, and files past the retention window are pruned
at the start of each run. Write and delete errors propagate and abort the run.
"""

import json
import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import OUTPUT_DIR, RETENTION_DAYS

logger = logging.getLogger(__name__)

_STAMP = "%Y%m%dT%H%M%SZ"
_FILE_NAME = re.compile(r"news-(\d{8}T\d{6}Z)\.json")


def save_records(
    records: List[Dict[str, Any]],
    output_dir: Union[str, Path] = OUTPUT_DIR,
    run_at: Optional[datetime] = None,
) -> Path:
    """Write *records* to ``<output_dir>/news-<UTC timestamp>.json`` and return the path."""
    run_at = run_at or datetime.now(timezone.utc)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"news-{run_at.astimezone(timezone.utc).strftime(_STAMP)}.json"

    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)

    logger.info("[STORE] Saved %d record(s) to %s", len(records), path)
    return path


def load_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load records previously written by ``save_records``."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _run_time(path: Path) -> Optional[datetime]:
    """Run timestamp encoded in a ``news-<UTC timestamp>.json`` file name."""
    match = _FILE_NAME.fullmatch(path.name)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), _STAMP).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def cleanup_old_records(
    output_dir: Union[str, Path] = OUTPUT_DIR,
    days: int = RETENTION_DAYS,
    now: Optional[datetime] = None,
) -> List[Path]:
    """Delete record files from runs more than *days* before *now*; returns the removed paths.

    Files whose names don't carry a run timestamp are left alone.
    """
    out_dir = Path(output_dir)
    if not out_dir.is_dir():
        return []

    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days)
    logger.info("[CLEANUP] Deleting records older than %s", cutoff.isoformat())

    removed = []
    for path in sorted(out_dir.glob("news-*.json")):
        run_at = _run_time(path)
        if run_at is not None and run_at < cutoff:
            path.unlink()
            removed.append(path)

    logger.info("[CLEANUP] Removed %d record file(s)", len(removed))
    return removed
