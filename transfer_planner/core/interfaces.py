"""Contracts for the collaborators around the planner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .components.inventory import InventorySnapshot
from .components.transfer import TransferPlan


@dataclass(frozen=True)
class ApplyOutcome:
    """Opaque result of enacting a plan; the planner never inspects it."""

    ok: bool
    reason: str = ""


class SnapshotProvider(ABC):
    """Return consistent slot contents for an inventory."""

    @abstractmethod
    def get_snapshot(self, inventory_id: str) -> InventorySnapshot:
        raise NotImplementedError


class PlanApplier(ABC):
    """Enact a :class:`TransferPlan` against the live inventories."""

    @abstractmethod
    def apply(self, source_id: str, target_id: str, plan: TransferPlan) -> ApplyOutcome:
        """Apply every record of ``plan`` or none of them."""
        raise NotImplementedError


__all__ = ["ApplyOutcome", "SnapshotProvider", "PlanApplier"]
