import json
from pathlib import Path

from transfer_planner.core.components.inventory import InventorySnapshot, PLAYER
from transfer_planner.core.components.slot import Slot
from transfer_planner.core.components.transfer import TransferPlan, TransferRecord
from transfer_planner.persistence.save_load import load_plan, load_snapshot, save_plan, save_snapshot
from transfer_planner.persistence.serializer import snapshot_from_dict, snapshot_to_dict


def test_snapshot_file_lists_only_occupied_slots(tmp_path: Path):
    snap = InventorySnapshot(
        36, (Slot(0), Slot(4, 31, 12), Slot(2, 20, 99)), kind=PLAYER, inventory_id="player"
    )
    path = tmp_path / "player.json"
    save_snapshot(snap, path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {
        "inventory_id": "player",
        "kind": "player",
        "capacity": 36,
        "slots": [
            {"slot": 2, "objectType": 20, "amount": 99},
            {"slot": 4, "objectType": 31, "amount": 12},
        ],
    }


def test_gzip_snapshot_and_id_override(tmp_path: Path):
    snap = InventorySnapshot.from_occupied(27, [(3, 2, 40)], inventory_id="chest")
    path = tmp_path / "saves" / "chest.json.gz"
    save_snapshot(snap, path)
    loaded = load_snapshot(path, inventory_id="chest-2")
    assert loaded.inventory_id == "chest-2"
    assert loaded.capacity == 27
    assert loaded.slot_at(3) == Slot(3, 2, 40)
    assert loaded.empty_indices() == [i for i in range(27) if i != 3]


def test_snapshot_from_sparse_dict():
    snap = snapshot_from_dict({"capacity": 5, "slots": [{"slot": 1, "objectType": "X", "amount": 3}]})
    assert snap.kind == "chest"
    assert snap.inventory_id is None
    assert snapshot_to_dict(snap)["slots"] == [{"slot": 1, "objectType": "X", "amount": 3}]


def test_plan_file_uses_transfer_wire_names(tmp_path: Path):
    plan = TransferPlan(2, 10, (TransferRecord(0, 0, 4), TransferRecord(0, 1, 6)), 10)
    path = tmp_path / "plan.json"
    save_plan(plan, path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["transfers"][1] == {"slotFrom": 0, "slotTo": 1, "amount": 6}
    assert load_plan(path) == plan
