"""Implementations of planner console commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Hashable, List, Optional

from ...config import InventoriesConfig
from ...core.catalog import ItemCatalog
from ...core.components.inventory import CHEST, PLAYER
from ...core.components.transfer import TransferPlan
from ...core.errors import InsufficientTargetCapacity, PlanningError
from ...persistence.event_log import EventLog
from ...persistence.save_load import load_snapshot, save_snapshot
from ...systems.interaction.transfer_system import (
    InventoryStore,
    StaleSnapshotError,
    TransferSystem,
    default_store,
)
from .command_parser import CLICommand

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """State shared by console commands."""

    store: InventoryStore
    system: TransferSystem
    catalog: ItemCatalog
    last_plan: Optional[TransferPlan] = None
    running: bool = True
    output: List[str] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        catalog: Optional[ItemCatalog] = None,
        event_log: Optional[EventLog] = None,
        stack_limit: Optional[int] = None,
        max_replans: Optional[int] = None,
        allow_partial: Optional[bool] = None,
        inventories: Optional[InventoriesConfig] = None,
    ) -> "Session":
        store = default_store(stack_limit, inventories)
        system = TransferSystem(
            store, max_replans=max_replans, allow_partial=allow_partial, event_log=event_log
        )
        return cls(
            store=store,
            system=system,
            catalog=catalog if catalog is not None else ItemCatalog.load(),
        )


class UsageError(ValueError):
    """Bad command arguments."""


def _item(session: Session, token: str) -> Hashable:
    item_type = session.catalog.resolve(token)
    if item_type is None:
        raise UsageError(f"Unknown item: {token}")
    return item_type


def _amount(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise UsageError(f"Not a number: {token}") from None


def _describe_plan(session: Session, plan: TransferPlan) -> List[str]:
    name = session.catalog.name_of(plan.item_type)
    lines = [f"{plan.total_moved}/{plan.requested} {name} in {len(plan)} transfer(s)"]
    lines += [
        f"  slot {rec.source_slot} -> slot {rec.target_slot}: {rec.amount}" for rec in plan
    ]
    return lines


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------
def show(session: Session, args: List[str]) -> List[str]:
    if len(args) != 1:
        raise UsageError("usage: /show <inventory>")
    snap = session.store.get_snapshot(args[0])
    lines = [f"{snap.inventory_id} ({snap.kind}, {snap.capacity} slots)"]
    for slot in snap.slots:
        if not slot.is_empty:
            lines.append(f"  [{slot.index}] {session.catalog.name_of(slot.item_type)} x{slot.quantity}")
    if len(lines) == 1:
        lines.append("  (empty)")
    return lines


def put(session: Session, args: List[str]) -> List[str]:
    if len(args) != 4:
        raise UsageError("usage: /put <inventory> <slot> <item> <amount>")
    inv, slot, item, amount = args
    session.store.put(inv, _amount(slot), _item(session, item), _amount(amount))
    return [f"Set {inv}[{slot}] to {amount} {item}"]


def load(session: Session, args: List[str]) -> List[str]:
    if len(args) != 2:
        raise UsageError("usage: /load <inventory> <path>")
    inv, path = args
    snap = load_snapshot(Path(path), inventory_id=inv)
    session.store.load(snap)
    return [f"Loaded {inv} from {path}"]


def save(session: Session, args: List[str]) -> List[str]:
    if len(args) != 2:
        raise UsageError("usage: /save <inventory> <path>")
    inv, path = args
    save_snapshot(session.store.get_snapshot(inv), Path(path))
    return [f"Saved {inv} to {path}"]


def plan(session: Session, args: List[str]) -> List[str]:
    if len(args) != 4:
        raise UsageError("usage: /plan <item> <amount> <from> <to>")
    item, amount, src, dst = args
    try:
        result = session.system.plan(_item(session, item), _amount(amount), src, dst)
    except InsufficientTargetCapacity as exc:
        session.last_plan = exc.partial_plan
        return [f"Not enough room: {exc.shortfall} short"] + _describe_plan(session, exc.partial_plan)
    session.last_plan = result
    return _describe_plan(session, result)


def transfer(session: Session, args: List[str]) -> List[str]:
    if len(args) != 4:
        raise UsageError("usage: /transfer <item> <amount> <from> <to>")
    item, amount, src, dst = args
    result = session.system.transfer(_item(session, item), _amount(amount), src, dst)
    session.last_plan = result
    return ["Applied"] + _describe_plan(session, result)


def tokenize(session: Session, args: List[str]) -> List[str]:
    if len(args) != 2:
        raise UsageError("usage: /tokenize <item> <amount>")
    return transfer(session, [args[0], args[1], PLAYER, CHEST])


def claim(session: Session, args: List[str]) -> List[str]:
    if len(args) != 2:
        raise UsageError("usage: /claim <item> <amount>")
    return transfer(session, [args[0], args[1], CHEST, PLAYER])


def items(session: Session, args: List[str]) -> List[str]:
    return [f"{name}: {item_id}" for name, item_id in sorted(session.catalog.items().items())]


def help_(session: Session, args: List[str]) -> List[str]:
    return ["Commands: " + " ".join(f"/{name}" for name in sorted(COMMANDS))]


def quit_(session: Session, args: List[str]) -> List[str]:
    session.running = False
    return ["Bye."]


COMMANDS: Dict[str, Callable[[Session, List[str]], List[str]]] = {
    "show": show,
    "put": put,
    "load": load,
    "save": save,
    "plan": plan,
    "transfer": transfer,
    "tokenize": tokenize,
    "claim": claim,
    "items": items,
    "help": help_,
    "quit": quit_,
}


def execute(cmd: CLICommand, session: Session) -> List[str]:
    """Run ``cmd`` and return the lines it produced.

    Planner failures and bad input are reported, never raised.
    """

    handler = COMMANDS.get(cmd.name)
    if handler is None:
        return [f"Unknown command: /{cmd.name} (try /help)"]
    try:
        lines = handler(session, cmd.args)
    except UsageError as e:
        lines = [str(e)]
    except PlanningError as e:
        logger.error("Planning failed: %s", e)
        lines = [f"{e.code}: {e}"]
    except StaleSnapshotError as e:
        logger.error("Transfer not applied: %s", e)
        lines = [f"Transfer not applied: {e}"]
    except (KeyError, IndexError, ValueError, OSError) as e:
        logger.error("Error running /%s: %s", cmd.name, e)
        lines = [f"Error: {e}"]
    session.output.extend(lines)
    return lines


__all__ = ["COMMANDS", "Session", "UsageError", "execute"]
