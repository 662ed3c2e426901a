"""Item catalog mapping human readable names to item type ids."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Hashable, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "items.yaml"


class ItemCatalog:
    """Lookup table between item names and their opaque type ids."""

    def __init__(self, items: Mapping[str, Hashable] | None = None) -> None:
        self._by_name: Dict[str, Hashable] = {}
        self._names: Dict[Hashable, str] = {}
        for name, item_id in (items or {}).items():
            self._by_name[str(name).lower()] = item_id
            self._names.setdefault(item_id, str(name))

    @classmethod
    def load(cls, path: str | Path | None = None) -> "ItemCatalog":
        """Return a catalog read from ``path`` (defaults to the bundled one).

        Missing or unreadable files give an empty catalog; entries whose id
        is not an int or str are skipped.
        """

        path = Path(path) if path is not None else CATALOG_PATH
        if not path.is_file():
            logger.warning("Item catalog %s not found; using an empty catalog", path)
            return cls()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error loading item catalog %s: %s", path, e)
            return cls()
        if not isinstance(data, dict):
            logger.error("Item catalog %s is not a mapping", path)
            return cls()

        items: Dict[str, Hashable] = {}
        for name, item_id in data.items():
            if isinstance(item_id, bool) or not isinstance(item_id, (int, str)):
                logger.warning("Skipping catalog entry %r with id %r", name, item_id)
                continue
            items[str(name)] = item_id
        return cls(items)

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def resolve(self, name_or_id: str | int) -> Optional[Hashable]:
        """Return the type id for a name or a numeric id, ``None`` if unknown."""

        if isinstance(name_or_id, int) and not isinstance(name_or_id, bool):
            return name_or_id if name_or_id in self._names else None
        text = str(name_or_id).strip()
        found = self._by_name.get(text.lower())
        if found is not None:
            return found
        if text.isdigit() and int(text) in self._names:
            return int(text)
        return None

    def name_of(self, item_id: Hashable) -> str:
        """Return the display name of ``item_id`` (its repr when unknown)."""

        return self._names.get(item_id, str(item_id))

    def items(self) -> Dict[str, Hashable]:
        return {self._names[item_id]: item_id for item_id in self._names}


__all__ = ["CATALOG_PATH", "ItemCatalog"]
