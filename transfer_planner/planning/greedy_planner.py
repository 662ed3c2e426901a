"""Greedy slot planner: largest free stack first, then empty slots in order."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..config import CONFIG
from ..core.components.transfer import TransferPlan, TransferRecord, TransferRequest
from ..core.errors import InsufficientTargetCapacity, PlanningError
from .base_planner import BasePlanner
from .fill import SourceSupply, fill_empty_slots, fill_same_type
from .locator import clamp_available, locate_slots
from .validation import validate_request

logger = logging.getLogger(__name__)


def assemble_plan(
    request: TransferRequest,
    records: Iterable[TransferRecord],
    actual_amount: int,
    remaining: int,
) -> TransferPlan:
    """Build the final plan, raising if part of ``actual_amount`` found no room."""

    kept = tuple(rec for rec in records if rec.amount > 0)
    plan = TransferPlan(
        item_type=request.item_type,
        requested=request.quantity,
        records=kept,
        total_moved=actual_amount - remaining,
    )
    if remaining > 0:
        raise InsufficientTargetCapacity(plan, remaining)
    return plan


class GreedyTransferPlanner(BasePlanner):
    """Plan transfers with the largest-free-space-first policy.

    Stages run in one pass: locate source slots, clamp the amount to what
    the source holds, top up same-type target stacks (most free space first,
    lowest index on ties), then fill target slots that were empty in the
    snapshot in ascending index order. Source slots are always drawn in
    ascending index order. Snapshots are never mutated.
    """

    def __init__(self, stack_limit: Optional[int] = None) -> None:
        self.stack_limit = CONFIG.planner.stack_limit if stack_limit is None else stack_limit

    def create_plan(self, request: TransferRequest) -> TransferPlan:
        try:
            plan = self._run_stages(request)
        except PlanningError as exc:
            logger.warning("Transfer planning failed (%s): %s", exc.code, exc)
            raise

        logger.info(
            "Planned %s/%s units of %r in %s transfer(s)",
            plan.total_moved,
            request.quantity,
            request.item_type,
            len(plan),
        )
        return plan

    def _run_stages(self, request: TransferRequest) -> TransferPlan:
        validate_request(request, self.stack_limit)

        source_slots = locate_slots(request.source, request.item_type)
        actual = clamp_available(request.quantity, source_slots, request.item_type)

        supply = SourceSupply(source_slots)
        records, remaining = fill_same_type(
            request.target, request.item_type, supply, actual, self.stack_limit
        )
        if remaining > 0:
            empty_records, remaining = fill_empty_slots(
                request.target, supply, remaining, self.stack_limit
            )
            records.extend(empty_records)

        return assemble_plan(request, records, actual, remaining)


def plan_transfer(request: TransferRequest, *, stack_limit: Optional[int] = None) -> TransferPlan:
    """Return a capacity-safe :class:`TransferPlan` for ``request``.

    Raises ``InvalidRequest``, ``InsufficientSource`` or
    ``InsufficientTargetCapacity`` (the latter carrying the partial plan).
    """

    return GreedyTransferPlanner(stack_limit).create_plan(request)


__all__ = ["GreedyTransferPlanner", "assemble_plan", "plan_transfer"]
