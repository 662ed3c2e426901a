"""Source selection: find matching slots and clamp the amount to move."""

from __future__ import annotations

import logging
from typing import Hashable, List, Sequence

from ..core.components.inventory import InventorySnapshot
from ..core.components.slot import Slot
from ..core.errors import InsufficientSource

logger = logging.getLogger(__name__)


def locate_slots(snapshot: InventorySnapshot, item_type: Hashable) -> List[Slot]:
    """Return the slots of ``snapshot`` holding ``item_type``, by slot index.

    An empty list means nothing is available; it is not an error here.
    """

    return sorted(
        (slot for slot in snapshot.slots if slot.holds(item_type)),
        key=lambda s: s.index,
    )


def clamp_available(
    requested: int, source_slots: Sequence[Slot], item_type: Hashable
) -> int:
    """Return ``min(requested, total held in source_slots)``.

    Raises :class:`InsufficientSource` when that minimum is zero.
    """

    available = sum(slot.quantity for slot in source_slots)
    actual = min(requested, available)
    if actual == 0:
        raise InsufficientSource(item_type, requested, available)
    if actual < requested:
        logger.debug(
            "Clamped request for %r from %s to %s (source holds %s)",
            item_type,
            requested,
            actual,
            available,
        )
    return actual


__all__ = ["locate_slots", "clamp_available"]
