"""Slot component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional


# Item type stored in an unoccupied slot.
EMPTY = None


@dataclass(frozen=True, slots=True)
class Slot:
    """A single storage cell of an inventory.

    ``item_type`` is an opaque comparable identifier (``None`` when the slot
    is unoccupied). A slot with a zero ``quantity`` counts as empty whatever
    its ``item_type`` says.
    """

    index: int
    item_type: Optional[Hashable] = EMPTY
    quantity: int = 0

    @property
    def is_empty(self) -> bool:
        return self.item_type is EMPTY or self.quantity == 0

    def holds(self, item_type: Hashable) -> bool:
        """Return ``True`` if the slot holds a positive amount of ``item_type``."""

        return not self.is_empty and self.item_type == item_type

    def free_space(self, stack_limit: int) -> int:
        """Return how many more units fit before ``stack_limit`` is reached."""

        if self.is_empty:
            return stack_limit
        return max(0, stack_limit - self.quantity)


__all__ = ["EMPTY", "Slot"]
