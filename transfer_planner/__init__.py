"""Slot-constrained item transfer planner."""

from .core.components import (
    InventorySnapshot,
    Slot,
    TransferPlan,
    TransferRecord,
    TransferRequest,
)
from .core.errors import (
    InsufficientSource,
    InsufficientTargetCapacity,
    InvalidRequest,
    PlanningError,
)
from .planning.greedy_planner import GreedyTransferPlanner, plan_transfer

__all__ = [
    "InventorySnapshot",
    "Slot",
    "TransferPlan",
    "TransferRecord",
    "TransferRequest",
    "PlanningError",
    "InvalidRequest",
    "InsufficientSource",
    "InsufficientTargetCapacity",
    "GreedyTransferPlanner",
    "plan_transfer",
]
