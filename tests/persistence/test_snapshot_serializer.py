from transfer_planner.core.components.transfer import TransferPlan, TransferRecord
from transfer_planner.persistence.serializer import plan_from_dict, plan_to_dict


def test_plan_dict_totals_default_to_record_sum():
    plan = plan_from_dict({"item_type": "X", "transfers": [{"slotFrom": 1, "slotTo": 2, "amount": 7}]})
    assert plan.total_moved == 7
    assert plan.requested == 0
    assert plan.records == (TransferRecord(1, 2, 7),)


def test_plan_to_dict_shape():
    plan = TransferPlan("X", 12, (TransferRecord(0, 3, 12),), 12)
    assert plan_to_dict(plan) == {
        "item_type": "X",
        "requested": 12,
        "total_moved": 12,
        "transfers": [{"slotFrom": 0, "slotTo": 3, "amount": 12}],
    }
