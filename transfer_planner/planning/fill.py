"""Target fill stages: top up same-type stacks, then use empty slots."""

from __future__ import annotations

import logging
from typing import Hashable, List, Optional, Sequence, Tuple

from ..core.components.inventory import InventorySnapshot
from ..core.components.slot import Slot
from ..core.components.transfer import TransferRecord

logger = logging.getLogger(__name__)


class SourceSupply:
    """Running remainder of each source slot, drawn in ascending slot order."""

    def __init__(self, slots: Sequence[Slot]) -> None:
        ordered = sorted(slots, key=lambda s: s.index)
        self._indices: List[int] = [s.index for s in ordered]
        self._remaining: List[int] = [s.quantity for s in ordered]
        self._cursor = 0

    def current(self) -> Optional[Tuple[int, int]]:
        """Return ``(slot_index, remaining)`` of the lowest non-exhausted slot."""

        while self._cursor < len(self._remaining) and self._remaining[self._cursor] == 0:
            self._cursor += 1
        if self._cursor == len(self._remaining):
            return None
        return self._indices[self._cursor], self._remaining[self._cursor]

    def take(self, amount: int) -> None:
        """Remove ``amount`` from the slot returned by :meth:`current`."""

        if amount > self._remaining[self._cursor]:
            raise ValueError("cannot take more than the slot still holds")
        self._remaining[self._cursor] -= amount


def fill_same_type(
    target: InventorySnapshot,
    item_type: Hashable,
    supply: SourceSupply,
    remaining: int,
    stack_limit: int,
) -> Tuple[List[TransferRecord], int]:
    """Top up target stacks of ``item_type`` that are below ``stack_limit``.

    Each step picks the stack with the most free space (lowest slot index on
    ties) and the lowest source slot with supply left. Returns the records
    and the amount still to place.
    """

    free = {
        slot.index: slot.free_space(stack_limit)
        for slot in target.slots
        if slot.holds(item_type) and slot.quantity < stack_limit
    }
    records: List[TransferRecord] = []

    while remaining > 0 and free:
        source = supply.current()
        if source is None:
            break
        src_index, src_left = source
        tgt_index = max(free, key=lambda i: (free[i], -i))

        amount = min(remaining, src_left, free[tgt_index])
        supply.take(amount)
        remaining -= amount
        free[tgt_index] -= amount
        if free[tgt_index] == 0:
            del free[tgt_index]

        records.append(TransferRecord(src_index, tgt_index, amount))
        logger.debug("Same-type fill: %s units slot %s -> %s", amount, src_index, tgt_index)

    return records, remaining


def fill_empty_slots(
    target: InventorySnapshot,
    supply: SourceSupply,
    remaining: int,
    stack_limit: int,
) -> Tuple[List[TransferRecord], int]:
    """Place up to ``stack_limit`` units into each empty target slot in order.

    Empty slots are those unoccupied in the original snapshot. One record is
    produced per (source slot, target slot) pair actually used.
    """

    records: List[TransferRecord] = []

    for tgt_index in target.empty_indices():
        if remaining == 0:
            break
        room = stack_limit
        while room > 0 and remaining > 0:
            source = supply.current()
            if source is None:
                return records, remaining
            src_index, src_left = source

            amount = min(remaining, src_left, room)
            supply.take(amount)
            remaining -= amount
            room -= amount

            records.append(TransferRecord(src_index, tgt_index, amount))
            logger.debug("Empty-slot fill: %s units slot %s -> %s", amount, src_index, tgt_index)

    return records, remaining


__all__ = ["SourceSupply", "fill_same_type", "fill_empty_slots"]
