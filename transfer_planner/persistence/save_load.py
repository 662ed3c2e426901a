"""Load and save inventory snapshots and transfer plans."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any, Optional

from ..core.components.inventory import InventorySnapshot
from ..core.components.transfer import TransferPlan
from .serializer import plan_from_dict, plan_to_dict, snapshot_from_dict, snapshot_to_dict


def _is_gzip(path: Path) -> bool:
    return path.suffix == ".gz"


def _write_json(data: Any, path: str | Path, gzip_compress: Optional[bool]) -> None:
    path = Path(path)
    if gzip_compress is None:
        gzip_compress = _is_gzip(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(data, indent=2)
    if gzip_compress:
        with gzip.open(path, "wt", encoding="utf-8") as fh:
            fh.write(text)
    else:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)


def _read_json(path: str | Path, gzip_compress: Optional[bool]) -> Any:
    path = Path(path)
    if gzip_compress is None:
        gzip_compress = _is_gzip(path)
    if gzip_compress:
        with gzip.open(path, "rt", encoding="utf-8") as fh:
            return json.load(fh)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def save_snapshot(
    snapshot: InventorySnapshot, path: str | Path, *, gzip_compress: Optional[bool] = None
) -> None:
    """Write ``snapshot`` to ``path`` as JSON.

    Parameters
    ----------
    snapshot:
        The inventory snapshot to serialize.
    path:
        Destination file path.
    gzip_compress:
        Compress with gzip. ``None`` (default) compresses when ``path`` ends
        in ``.gz``.
    """

    _write_json(snapshot_to_dict(snapshot), path, gzip_compress)


def load_snapshot(
    path: str | Path,
    *,
    inventory_id: Optional[str] = None,
    gzip_compress: Optional[bool] = None,
) -> InventorySnapshot:
    """Read a snapshot from ``path``; ``inventory_id`` overrides the stored id."""

    return snapshot_from_dict(_read_json(path, gzip_compress), inventory_id=inventory_id)


def save_plan(plan: TransferPlan, path: str | Path, *, gzip_compress: Optional[bool] = None) -> None:
    _write_json(plan_to_dict(plan), path, gzip_compress)


def load_plan(path: str | Path, *, gzip_compress: Optional[bool] = None) -> TransferPlan:
    return plan_from_dict(_read_json(path, gzip_compress))


__all__ = ["save_snapshot", "load_snapshot", "save_plan", "load_plan"]
