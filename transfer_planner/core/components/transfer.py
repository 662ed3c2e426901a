"""Transfer request and plan components."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, Tuple

from .inventory import InventorySnapshot


@dataclass(frozen=True)
class TransferRequest:
    """Move ``quantity`` units of ``item_type`` from ``source`` to ``target``."""

    item_type: Hashable
    quantity: int
    source: InventorySnapshot
    target: InventorySnapshot


@dataclass(frozen=True, slots=True)
class TransferRecord:
    """One slot-to-slot move of ``amount`` units."""

    source_slot: int
    target_slot: int
    amount: int

    def to_wire(self) -> Dict[str, int]:
        """Return the ``{slotFrom, slotTo, amount}`` form used by transfer calls."""

        return {
            "slotFrom": self.source_slot,
            "slotTo": self.target_slot,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class TransferPlan:
    """Ordered transfer records plus the amount they move in total."""

    item_type: Hashable
    requested: int
    records: Tuple[TransferRecord, ...] = ()
    total_moved: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TransferRecord]:
        return iter(self.records)

    def source_deltas(self) -> Dict[int, int]:
        """Return units taken from each source slot."""

        taken: Counter[int] = Counter()
        for rec in self.records:
            taken[rec.source_slot] += rec.amount
        return dict(taken)

    def target_deltas(self) -> Dict[int, int]:
        """Return units added to each target slot."""

        added: Counter[int] = Counter()
        for rec in self.records:
            added[rec.target_slot] += rec.amount
        return dict(added)


__all__ = ["TransferRequest", "TransferRecord", "TransferPlan"]
