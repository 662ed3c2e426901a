"""In-memory inventories and the system that plans and applies transfers."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Hashable, List, Optional, Tuple

from ...config import CONFIG, InventoriesConfig
from ...core.components.inventory import CHEST, PLAYER, InventorySnapshot
from ...core.components.slot import Slot
from ...core.components.transfer import TransferPlan, TransferRequest
from ...core.errors import InsufficientTargetCapacity, PlanningError
from ...core.interfaces import ApplyOutcome, PlanApplier, SnapshotProvider
from ...persistence.event_log import (
    EventLog,
    PLAN_APPLIED,
    PLAN_CREATED,
    PLAN_FAILED,
    PLAN_REJECTED,
)
from ...persistence.serializer import plan_to_dict
from ...planning.base_planner import BasePlanner
from ...planning.greedy_planner import GreedyTransferPlanner

logger = logging.getLogger(__name__)

# (item_type, quantity) per slot; ``None`` marks an empty slot.
_Cell = Optional[Tuple[Hashable, int]]


class StaleSnapshotError(RuntimeError):
    """A plan no longer matches the live inventory it was built from."""


class InventoryStore(SnapshotProvider, PlanApplier):
    """Live inventories held in memory.

    Snapshots are copies; :meth:`apply` commits a whole plan under a lock or
    leaves every inventory untouched.
    """

    def __init__(self, stack_limit: Optional[int] = None) -> None:
        self.stack_limit = CONFIG.planner.stack_limit if stack_limit is None else stack_limit
        self._inventories: Dict[str, List[_Cell]] = {}
        self._kinds: Dict[str, str] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def register(self, inventory_id: str, capacity: Optional[int] = None, kind: str = CHEST) -> None:
        """Create an empty inventory; ``capacity`` defaults to the kind's size."""

        if capacity is None:
            capacity = CONFIG.inventories.capacity_for(kind)
        with self._lock:
            self._inventories[inventory_id] = [None] * capacity
            self._kinds[inventory_id] = kind

    def put(self, inventory_id: str, slot: int, item_type: Hashable, quantity: int) -> None:
        """Overwrite ``slot`` of ``inventory_id``; a zero quantity clears it."""

        if quantity < 0 or quantity > self.stack_limit:
            raise ValueError(f"quantity {quantity} outside 0..{self.stack_limit}")
        if quantity > 0 and item_type is None:
            raise ValueError("a non-empty slot needs an item type")
        with self._lock:
            cells = self._cells(inventory_id)
            if not 0 <= slot < len(cells):
                raise IndexError(f"slot {slot} outside inventory {inventory_id!r}")
            cells[slot] = (item_type, quantity) if quantity > 0 else None

    def load(self, snapshot: InventorySnapshot, inventory_id: Optional[str] = None) -> str:
        """Replace an inventory with the contents of ``snapshot``."""

        inventory_id = inventory_id or snapshot.inventory_id
        if inventory_id is None:
            raise ValueError("snapshot has no inventory id")
        cells: List[_Cell] = [None] * snapshot.capacity
        for slot in snapshot.dense():
            if not slot.is_empty:
                cells[slot.index] = (slot.item_type, slot.quantity)
        with self._lock:
            self._inventories[inventory_id] = cells
            self._kinds[inventory_id] = snapshot.kind
        return inventory_id

    def inventory_ids(self) -> List[str]:
        return list(self._inventories)

    def _cells(self, inventory_id: str) -> List[_Cell]:
        try:
            return self._inventories[inventory_id]
        except KeyError:
            raise KeyError(f"Unknown inventory: {inventory_id!r}") from None

    # ------------------------------------------------------------------
    # SnapshotProvider / PlanApplier
    # ------------------------------------------------------------------
    def get_snapshot(self, inventory_id: str) -> InventorySnapshot:
        with self._lock:
            cells = list(self._cells(inventory_id))
            kind = self._kinds[inventory_id]
        slots = tuple(
            Slot(i, cell[0], cell[1]) if cell is not None else Slot(i)
            for i, cell in enumerate(cells)
        )
        return InventorySnapshot(
            capacity=len(cells), slots=slots, kind=kind, inventory_id=inventory_id
        )

    def apply(self, source_id: str, target_id: str, plan: TransferPlan) -> ApplyOutcome:
        if source_id == target_id:
            return ApplyOutcome(False, "source and target are the same inventory")
        with self._lock:
            source = list(self._cells(source_id))
            target = list(self._cells(target_id))
            try:
                for rec in plan.records:
                    self._move(source, target, plan.item_type, rec.source_slot, rec.target_slot, rec.amount)
            except StaleSnapshotError as e:
                logger.info("Rejected plan %s -> %s: %s", source_id, target_id, e)
                return ApplyOutcome(False, str(e))
            self._inventories[source_id] = source
            self._inventories[target_id] = target
        return ApplyOutcome(True)

    def _move(
        self,
        source: List[_Cell],
        target: List[_Cell],
        item_type: Hashable,
        src: int,
        dst: int,
        amount: int,
    ) -> None:
        if not (0 <= src < len(source) and 0 <= dst < len(target)):
            raise StaleSnapshotError(f"slot pair {src}->{dst} out of range")
        cell = source[src]
        if cell is None or cell[0] != item_type or cell[1] < amount:
            raise StaleSnapshotError(f"source slot {src} lacks {amount} of {item_type!r}")
        dest = target[dst]
        held = 0
        if dest is not None:
            if dest[0] != item_type:
                raise StaleSnapshotError(f"target slot {dst} holds another item")
            held = dest[1]
        if held + amount > self.stack_limit:
            raise StaleSnapshotError(f"target slot {dst} would exceed stack limit")

        left = cell[1] - amount
        source[src] = (item_type, left) if left > 0 else None
        target[dst] = (item_type, held + amount)


class TransferSystem:
    """Plan transfers from fresh snapshots and apply them to a store.

    Owns the caller-side policy: re-planning after a rejected apply, and
    whether a partial plan may be applied when the target runs out of room.
    """

    def __init__(
        self,
        store: InventoryStore,
        planner: Optional[BasePlanner] = None,
        max_replans: Optional[int] = None,
        allow_partial: Optional[bool] = None,
        event_log: Optional[EventLog] = None,
    ) -> None:
        self.store = store
        self.planner = planner or GreedyTransferPlanner(store.stack_limit)
        self.max_replans = CONFIG.planner.max_replans if max_replans is None else max_replans
        self.allow_partial = CONFIG.planner.allow_partial if allow_partial is None else allow_partial
        self.event_log = event_log

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def plan(self, item_type: Hashable, amount: int, source_id: str, target_id: str) -> TransferPlan:
        """Return a plan against the current contents without applying it."""

        request = TransferRequest(
            item_type=item_type,
            quantity=amount,
            source=self.store.get_snapshot(source_id),
            target=self.store.get_snapshot(target_id),
        )
        return self.planner.create_plan(request)

    def transfer(self, item_type: Hashable, amount: int, source_id: str, target_id: str) -> TransferPlan:
        """Plan and apply a transfer, returning the plan that was applied.

        Raises ``PlanningError`` subclasses from the planner, and
        :class:`StaleSnapshotError` once ``max_replans`` retries are used up.
        """

        attempts = self.max_replans + 1
        reason = ""
        for attempt in range(attempts):
            plan = self._plan_with_policy(item_type, amount, source_id, target_id)
            outcome = self.store.apply(source_id, target_id, plan)
            if outcome.ok:
                self._record(PLAN_APPLIED, source_id, target_id, plan_to_dict(plan))
                logger.info(
                    "Moved %s of %r from %s to %s", plan.total_moved, item_type, source_id, target_id
                )
                return plan
            reason = outcome.reason
            self._record(PLAN_REJECTED, source_id, target_id, {"reason": reason, "attempt": attempt})
            logger.warning("Apply attempt %s/%s rejected: %s", attempt + 1, attempts, reason)
        raise StaleSnapshotError(reason)

    def tokenize(self, player_id: str, chest_id: str, item_type: Hashable, amount: int) -> TransferPlan:
        """Move items from a player's inventory into a chest."""

        return self.transfer(item_type, amount, player_id, chest_id)

    def claim(self, chest_id: str, player_id: str, item_type: Hashable, amount: int) -> TransferPlan:
        """Move items from a chest back into a player's inventory."""

        return self.transfer(item_type, amount, chest_id, player_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _plan_with_policy(
        self, item_type: Hashable, amount: int, source_id: str, target_id: str
    ) -> TransferPlan:
        try:
            plan = self.plan(item_type, amount, source_id, target_id)
        except InsufficientTargetCapacity as exc:
            self._record(PLAN_FAILED, source_id, target_id, _failure_data(exc))
            if not self.allow_partial or not exc.partial_plan.records:
                raise
            logger.info("Applying partial plan: %s short of %s", exc.shortfall, amount)
            return exc.partial_plan
        except PlanningError as exc:
            self._record(PLAN_FAILED, source_id, target_id, _failure_data(exc))
            raise
        self._record(PLAN_CREATED, source_id, target_id, plan_to_dict(plan))
        return plan

    def _record(self, event_type: str, source_id: str, target_id: str, data: dict) -> None:
        if self.event_log is None:
            return
        self.event_log.append(event_type, {"from": source_id, "to": target_id, **data})


def _failure_data(exc: PlanningError) -> dict:
    data = {"error": exc.code, "message": str(exc)}
    if isinstance(exc, InsufficientTargetCapacity):
        data["shortfall"] = exc.shortfall
    return data


def default_store(
    stack_limit: Optional[int] = None, inventories: Optional[InventoriesConfig] = None
) -> InventoryStore:
    """Return a store with an empty ``player`` and ``chest`` inventory."""

    inventories = inventories or CONFIG.inventories
    store = InventoryStore(stack_limit)
    store.register(PLAYER, inventories.capacity_for(PLAYER), kind=PLAYER)
    store.register(CHEST, inventories.capacity_for(CHEST), kind=CHEST)
    return store


__all__ = ["InventoryStore", "StaleSnapshotError", "TransferSystem", "default_store"]
