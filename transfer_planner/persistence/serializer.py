"""Helpers for serializing snapshots and plans to JSON-ready data."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Optional

from ..core.components.inventory import CHEST, InventorySnapshot
from ..core.components.slot import Slot
from ..core.components.transfer import TransferPlan, TransferRecord


def snapshot_to_dict(snapshot: InventorySnapshot) -> Dict[str, Any]:
    """Serialize ``snapshot`` listing only its occupied slots."""

    return {
        "inventory_id": snapshot.inventory_id,
        "kind": snapshot.kind,
        "capacity": snapshot.capacity,
        "slots": [
            {"slot": s.index, "objectType": s.item_type, "amount": s.quantity}
            for s in sorted(snapshot.slots, key=lambda s: s.index)
            if not s.is_empty
        ],
    }


def snapshot_from_dict(
    data: Dict[str, Any], inventory_id: Optional[str] = None
) -> InventorySnapshot:
    """Create an :class:`InventorySnapshot` from :func:`snapshot_to_dict` data."""

    slots = tuple(
        Slot(int(entry["slot"]), entry.get("objectType"), int(entry.get("amount", 0)))
        for entry in data.get("slots", [])
    )
    return InventorySnapshot(
        capacity=int(data["capacity"]),
        slots=slots,
        kind=str(data.get("kind", CHEST)),
        inventory_id=inventory_id if inventory_id is not None else data.get("inventory_id"),
    )


def plan_to_dict(plan: TransferPlan) -> Dict[str, Any]:
    return {
        "item_type": plan.item_type,
        "requested": plan.requested,
        "total_moved": plan.total_moved,
        "transfers": [rec.to_wire() for rec in plan.records],
    }


def plan_from_dict(data: Dict[str, Any]) -> TransferPlan:
    item_type: Hashable = data["item_type"]
    records = tuple(
        TransferRecord(int(t["slotFrom"]), int(t["slotTo"]), int(t["amount"]))
        for t in data.get("transfers", [])
    )
    return TransferPlan(
        item_type=item_type,
        requested=int(data.get("requested", 0)),
        records=records,
        total_moved=int(data.get("total_moved", sum(r.amount for r in records))),
    )


__all__ = [
    "snapshot_to_dict",
    "snapshot_from_dict",
    "plan_to_dict",
    "plan_from_dict",
]
