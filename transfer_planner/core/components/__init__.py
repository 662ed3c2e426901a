"""components package."""

from .slot import EMPTY, Slot
from .inventory import CHEST, PLAYER, InventorySnapshot
from .transfer import TransferPlan, TransferRecord, TransferRequest

__all__ = [
    "EMPTY",
    "Slot",
    "CHEST",
    "PLAYER",
    "InventorySnapshot",
    "TransferPlan",
    "TransferRecord",
    "TransferRequest",
]
