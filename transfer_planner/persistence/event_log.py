"""Append-only JSON lines log of planning and apply outcomes.

Each line is ``{"seq", "event_type", "data"}``. A file that grows past the
``cache.log_retention_mb`` threshold is gzipped next to itself with a UTC
timestamp and a fresh file is started.
"""

from __future__ import annotations

import gzip
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Union

from ..config import CONFIG

logger = logging.getLogger(__name__)

PLAN_CREATED = "PLAN_CREATED"
PLAN_FAILED = "PLAN_FAILED"
PLAN_APPLIED = "PLAN_APPLIED"
PLAN_REJECTED = "PLAN_REJECTED"

Destination = Union[str, Path, List[Dict[str, Any]]]


def _retention_bytes() -> int:
    cache = CONFIG.cache or {}
    try:
        megabytes = int(cache.get("log_retention_mb", 50))
    except (TypeError, ValueError):
        logger.warning("Bad cache.log_retention_mb %r; using 50", cache.get("log_retention_mb"))
        megabytes = 50
    return megabytes * 1024 * 1024


def _archive(path: Path) -> Path:
    """Gzip ``path`` to a timestamped sibling and remove the original."""

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    archive = path.with_name(f"{path.stem}_{stamp}{path.suffix}.gz")
    n = 1
    while archive.exists():
        archive = path.with_name(f"{path.stem}_{stamp}_{n}{path.suffix}.gz")
        n += 1
    with gzip.open(archive, "wb") as out:
        out.write(path.read_bytes())
    path.unlink()
    logger.info("Archived event log to %s", archive)
    return archive


def append_event(dest: Destination, seq: int, event_type: str, data: Any) -> None:
    """Append one event to ``dest``, a file path or an in-memory list."""

    event = {"seq": seq, "event_type": event_type, "data": data}
    if isinstance(dest, list):
        dest.append(event)
        return

    path = Path(dest)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.is_file() and path.stat().st_size >= _retention_bytes():
        _archive(path)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(event, ensure_ascii=False) + "\n")


def iter_events(path: str | Path) -> Iterator[Dict[str, Any]]:
    """Yield the events stored at ``path``; unreadable lines are skipped."""

    path = Path(path)
    if not path.is_file():
        return
    with path.open(encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, 1):
            if not raw.strip():
                continue
            try:
                yield json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Skipping malformed event at %s:%s", path, lineno)


def _last_seq(events: Iterable[Dict[str, Any]]) -> int:
    last = 0
    for event in events:
        seq = event.get("seq") if isinstance(event, dict) else None
        if isinstance(seq, int) and not isinstance(seq, bool):
            last = max(last, seq)
    return last


class EventLog:
    """Numbers events and forwards them to :func:`append_event`.

    Numbering continues from the last event already stored in ``dest``.
    """

    def __init__(self, dest: Destination) -> None:
        self.dest = dest if isinstance(dest, list) else Path(dest)
        self._seq = _last_seq(self)

    def append(self, event_type: str, data: Any) -> int:
        self._seq += 1
        append_event(self.dest, self._seq, event_type, data)
        return self._seq

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        if isinstance(self.dest, list):
            return iter(list(self.dest))
        return iter_events(self.dest)


__all__ = [
    "EventLog",
    "append_event",
    "iter_events",
    "PLAN_CREATED",
    "PLAN_FAILED",
    "PLAN_APPLIED",
    "PLAN_REJECTED",
]
