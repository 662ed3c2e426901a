from __future__ import annotations

"""Abstract planner interface."""

from abc import ABC, abstractmethod

from ..core.components.transfer import TransferPlan, TransferRequest


class BasePlanner(ABC):
    """Base class for transfer planning policies."""

    @abstractmethod
    def create_plan(self, request: TransferRequest) -> TransferPlan:
        """Return a plan for ``request`` or raise a ``PlanningError``."""
        raise NotImplementedError


__all__ = ["BasePlanner"]
