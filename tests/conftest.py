# tests/conftest.py
from typing import Callable, Hashable, Tuple

import pytest

from transfer_planner.core.components.inventory import CHEST, PLAYER, InventorySnapshot
from transfer_planner.core.components.transfer import TransferRequest

STACK_LIMIT = 99


@pytest.fixture
def stack_limit() -> int:
    return STACK_LIMIT


@pytest.fixture
def make_snapshot() -> Callable[..., InventorySnapshot]:
    """Build a snapshot from ``(slot, item_type, quantity)`` triples."""

    def _make(capacity: int, *entries: Tuple[int, Hashable, int], kind: str = CHEST, inventory_id=None):
        return InventorySnapshot.from_occupied(capacity, entries, kind=kind, inventory_id=inventory_id)

    return _make


@pytest.fixture
def make_request(make_snapshot) -> Callable[..., TransferRequest]:
    """Build a request moving from a 36-slot player to a 27-slot chest."""

    def _make(item_type, quantity, source_entries=(), target_entries=(), source_capacity=36, target_capacity=27):
        return TransferRequest(
            item_type=item_type,
            quantity=quantity,
            source=make_snapshot(source_capacity, *source_entries, kind=PLAYER),
            target=make_snapshot(target_capacity, *target_entries, kind=CHEST),
        )

    return _make
