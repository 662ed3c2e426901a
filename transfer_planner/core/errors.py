"""Typed failures raised by the transfer planner."""

from __future__ import annotations

from typing import Hashable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .components.transfer import TransferPlan


class PlanningError(Exception):
    """Base class for every planner failure."""

    code = "planning_error"


class InvalidRequest(PlanningError):
    """Non-positive quantity or malformed inventory snapshot."""

    code = "invalid_request"


class InsufficientSource(PlanningError):
    """The source inventory holds none of the requested item type."""

    code = "insufficient_source"

    def __init__(self, item_type: Hashable, requested: int, available: int = 0) -> None:
        super().__init__(
            f"Source holds {available} of item {item_type!r}; {requested} requested"
        )
        self.item_type = item_type
        self.requested = requested
        self.available = available


class InsufficientTargetCapacity(PlanningError):
    """Part of the clamped amount found no room in the target inventory.

    ``partial_plan`` moves everything that did fit, ``shortfall`` is what
    was left over. A caller allowing partial fulfilment may apply the
    partial plan; with no room at all it has no records.
    """

    code = "insufficient_target_capacity"

    def __init__(self, partial_plan: "TransferPlan", shortfall: int) -> None:
        super().__init__(
            f"Target has room for {partial_plan.total_moved} of item "
            f"{partial_plan.item_type!r}; {shortfall} could not be placed"
        )
        self.partial_plan = partial_plan
        self.shortfall = shortfall

    @property
    def item_type(self) -> Hashable:
        return self.partial_plan.item_type


def error_code(exc: Optional[BaseException]) -> Optional[str]:
    """Return the stable ``code`` of a planning error, ``None`` otherwise."""

    return getattr(exc, "code", None) if isinstance(exc, PlanningError) else None


__all__ = [
    "PlanningError",
    "InvalidRequest",
    "InsufficientSource",
    "InsufficientTargetCapacity",
    "error_code",
]
