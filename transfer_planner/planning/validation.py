"""Input checks run before any allocation work."""

from __future__ import annotations

from typing import Set

from ..core.components.inventory import InventorySnapshot
from ..core.components.transfer import TransferRequest
from ..core.errors import InvalidRequest


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_snapshot(snapshot: InventorySnapshot, stack_limit: int, role: str) -> None:
    """Raise :class:`InvalidRequest` if ``snapshot`` is malformed."""

    if not _is_int(snapshot.capacity) or snapshot.capacity <= 0:
        raise InvalidRequest(f"{role} inventory has invalid capacity {snapshot.capacity!r}")

    seen: Set[int] = set()
    for slot in snapshot.slots:
        if not _is_int(slot.index) or not 0 <= slot.index < snapshot.capacity:
            raise InvalidRequest(
                f"{role} slot index {slot.index!r} outside 0..{snapshot.capacity - 1}"
            )
        if slot.index in seen:
            raise InvalidRequest(f"{role} slot index {slot.index} listed twice")
        seen.add(slot.index)

        if not _is_int(slot.quantity) or slot.quantity < 0:
            raise InvalidRequest(
                f"{role} slot {slot.index} has invalid quantity {slot.quantity!r}"
            )
        if slot.quantity > stack_limit:
            raise InvalidRequest(
                f"{role} slot {slot.index} holds {slot.quantity}, above stack limit {stack_limit}"
            )
        if slot.item_type is None and slot.quantity > 0:
            raise InvalidRequest(f"{role} slot {slot.index} has a quantity but no item type")


def validate_request(request: TransferRequest, stack_limit: int) -> None:
    """Raise :class:`InvalidRequest` unless ``request`` meets the input contract."""

    if not _is_int(stack_limit) or stack_limit <= 0:
        raise InvalidRequest(f"Stack limit must be a positive integer, got {stack_limit!r}")
    if not _is_int(request.quantity) or request.quantity <= 0:
        raise InvalidRequest(
            f"Requested quantity must be a positive integer, got {request.quantity!r}"
        )
    if request.item_type is None:
        raise InvalidRequest("Requested item type is empty")

    validate_snapshot(request.source, stack_limit, "source")
    validate_snapshot(request.target, stack_limit, "target")


__all__ = ["validate_request", "validate_snapshot"]
