"""Inventory snapshot component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from .slot import Slot

# Inventory kinds with a fixed slot count (see ``inventories`` in config.yaml).
PLAYER = "player"
CHEST = "chest"
INVENTORY_KINDS = (PLAYER, CHEST)


@dataclass(frozen=True)
class InventorySnapshot:
    """Immutable point-in-time read of an inventory's slots.

    ``slots`` may list every index ``0..capacity-1`` or only the occupied
    ones; indices missing from ``slots`` are treated as empty. Snapshots are
    not validated on construction, the planner rejects malformed ones.
    """

    capacity: int
    slots: Tuple[Slot, ...] = ()
    kind: str = CHEST
    inventory_id: Optional[str] = None
    _by_index: Dict[int, Slot] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", tuple(self.slots))
        # Later duplicates never shadow the first entry for a given index.
        by_index: Dict[int, Slot] = {}
        for slot in self.slots:
            by_index.setdefault(slot.index, slot)
        object.__setattr__(self, "_by_index", by_index)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def empty(
        cls, capacity: int, kind: str = CHEST, inventory_id: Optional[str] = None
    ) -> "InventorySnapshot":
        """Return a dense snapshot with ``capacity`` unoccupied slots."""

        return cls(
            capacity=capacity,
            slots=tuple(Slot(i) for i in range(capacity)),
            kind=kind,
            inventory_id=inventory_id,
        )

    @classmethod
    def from_occupied(
        cls,
        capacity: int,
        entries: Iterable[Tuple[int, Hashable, int]],
        kind: str = CHEST,
        inventory_id: Optional[str] = None,
    ) -> "InventorySnapshot":
        """Build a snapshot from ``(slot, item_type, quantity)`` triples."""

        slots = [Slot(int(index), item_type, int(qty)) for index, item_type, qty in entries]
        return cls(capacity=capacity, slots=tuple(slots), kind=kind, inventory_id=inventory_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def slot_at(self, index: int) -> Slot:
        """Return the slot at ``index``; unlisted indices are empty slots."""

        if not 0 <= index < self.capacity:
            raise IndexError(f"slot {index} outside inventory of {self.capacity} slots")
        return self._by_index.get(index) or Slot(index)

    def dense(self) -> List[Slot]:
        """Return every slot ``0..capacity-1`` in index order."""

        return [self.slot_at(i) for i in range(self.capacity)]

    def occupied_indices(self) -> frozenset[int]:
        return frozenset(i for i, s in self._by_index.items() if not s.is_empty)

    def empty_indices(self) -> List[int]:
        occupied = self.occupied_indices()
        return [i for i in range(self.capacity) if i not in occupied]

    def count(self, item_type: Hashable) -> int:
        """Return the total quantity of ``item_type`` held."""

        return sum(s.quantity for s in self._by_index.values() if s.holds(item_type))


__all__ = ["InventorySnapshot", "PLAYER", "CHEST", "INVENTORY_KINDS"]
