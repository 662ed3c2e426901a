from transfer_planner.core.components.slot import Slot
from transfer_planner.core.components.transfer import TransferRecord
from transfer_planner.planning.fill import SourceSupply, fill_empty_slots, fill_same_type


def test_source_supply_draws_in_slot_order():
    supply = SourceSupply([Slot(5, "X", 2), Slot(1, "X", 3)])
    assert supply.current() == (1, 3)
    supply.take(3)
    assert supply.current() == (5, 2)
    supply.take(2)
    assert supply.current() is None


def test_same_type_prefers_largest_free_space(make_snapshot):
    target = make_snapshot(10, (2, "X", 90), (5, "X", 50), (7, "X", 50), (8, "Y", 1))
    supply = SourceSupply([Slot(0, "X", 60)])
    records, remaining = fill_same_type(target, "X", supply, 60, 99)
    # 5 and 7 tie on free space; the lower index wins
    assert records == [TransferRecord(0, 5, 49), TransferRecord(0, 7, 11)]
    assert remaining == 0


def test_same_type_moves_on_when_source_slot_runs_dry(make_snapshot):
    target = make_snapshot(10, (1, "X", 97), (4, "X", 98))
    supply = SourceSupply([Slot(0, "X", 3), Slot(1, "X", 4)])
    records, remaining = fill_same_type(target, "X", supply, 7, 99)
    assert records == [TransferRecord(0, 1, 2), TransferRecord(0, 4, 1)]
    assert remaining == 4
    assert supply.current() == (1, 4)


def test_same_type_skips_full_stacks(make_snapshot):
    target = make_snapshot(3, (0, "X", 99))
    supply = SourceSupply([Slot(0, "X", 5)])
    records, remaining = fill_same_type(target, "X", supply, 5, 99)
    assert records == []
    assert remaining == 5


def test_empty_slots_fill_in_ascending_order(make_snapshot):
    target = make_snapshot(5, (0, "Y", 10), (2, "X", 99))
    supply = SourceSupply([Slot(3, "X", 99), Slot(4, "X", 60)])
    records, remaining = fill_empty_slots(target, supply, 150, 99)
    assert records == [
        TransferRecord(3, 1, 99),
        TransferRecord(4, 3, 51),
    ]
    assert remaining == 0


def test_empty_slot_split_across_source_slots(make_snapshot):
    target = make_snapshot(3)
    supply = SourceSupply([Slot(0, "X", 6), Slot(1, "X", 5)])
    records, remaining = fill_empty_slots(target, supply, 11, 99)
    assert records == [TransferRecord(0, 0, 6), TransferRecord(1, 0, 5)]
    assert remaining == 0


def test_empty_slots_exhausted_leaves_remainder(make_snapshot):
    target = make_snapshot(2, (0, "Y", 1))
    supply = SourceSupply([Slot(0, "X", 10)])
    records, remaining = fill_empty_slots(target, supply, 10, 4)
    assert records == [TransferRecord(0, 1, 4)]
    assert remaining == 6
