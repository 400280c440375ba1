import json
import pytest
from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.Errors import UnknownDefinition
from careplan.domain.PlanStore import PlanStore
from careplan.events.Event_Bus import EventBus
from careplan.infra.Plan_Repository import PlanRepository
from careplan.logic.budget.aggregator import total_monthly_units
from careplan.logic.reporting.summary import compute_plan_summary


def _store():
    return PlanStore(DEFAULT_CATALOG).set_event_bus(EventBus())


def test_save_and_reload_round_trip(tmp_path):
    """A saved plan comes back with the same level, slots and tokens."""
    repo = PlanRepository(tmp_path / "plans.json")
    store = _store()
    store.set_care_level(2)
    store.assign("月", "day_service_7")
    store.assign("月", "helper_life")
    store.assign("monthly", "rental_wheelchair")
    repo.save_plan("alice", store.snapshot())

    loaded = repo.get_plan("alice")
    assert loaded == store.snapshot()
    assert total_monthly_units(loaded) == (750 + 183) * 4 + 600


def test_snapshot_shape_on_disk(tmp_path):
    path = tmp_path / "plans.json"
    repo = PlanRepository(path)
    store = _store()
    a = store.assign("水", "nurse")
    repo.save_plan("bob", store.snapshot())

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert set(raw["bob"].keys()) == {"care_level", "weekday_slots", "monthly_bucket"}
    assert raw["bob"]["care_level"] == 3
    assert raw["bob"]["weekday_slots"]["水"] == [{"definition_id": "nurse", "instance_id": a.instance_id}]
    assert raw["bob"]["monthly_bucket"] == []
    assert list(raw["bob"]["weekday_slots"].keys()) == ["月", "火", "水", "木", "金", "土", "日"]


def test_users_are_kept_apart(tmp_path):
    repo = PlanRepository(tmp_path / "plans.json")
    first, second = _store(), _store()
    first.assign("月", "nurse")
    second.set_care_level(5)
    repo.save_plan("u1", first.snapshot())
    repo.save_plan("u2", second.snapshot())
    assert repo.list_users() == ["u1", "u2"]
    assert repo.get_plan("u1").care_level.level == 3
    assert repo.get_plan("u2").care_level.level == 5
    assert repo.delete_plan("u1") is True
    assert repo.delete_plan("u1") is False
    assert repo.get_plan("u1") is None


def test_missing_or_corrupt_file(tmp_path):
    path = tmp_path / "plans.json"
    repo = PlanRepository(path)
    assert repo.get_plan("nobody") is None
    path.write_text("{not json", encoding="utf-8")
    assert repo.get_plan("nobody") is None


def test_unknown_definitions_in_snapshot_are_dropped_on_load(tmp_path):
    path = tmp_path / "plans.json"
    path.write_text(json.dumps({
        "carol": {
            "care_level": 42,
            "weekday_slots": {
                "月": [{"definition_id": "retired", "instance_id": "r1"},
                      {"definition_id": "nurse", "instance_id": "n1"}],
                "Funday": [{"definition_id": "nurse", "instance_id": "n2"}],
                "火": [{"definition_id": "nurse"}],
            },
            "monthly_bucket": [{"definition_id": "rental_bed", "instance_id": "b1"}],
        }
    }, ensure_ascii=False), encoding="utf-8")
    repo = PlanRepository(path)
    plan = repo.get_plan("carol")
    # unknown care level falls back to the default; malformed entries are skipped
    assert plan.care_level.level == 3
    assert [a.instance_id for a in plan.weekday_slots["月"]] == ["r1", "n1"]
    assert plan.weekday_slots["火"] == ()

    store = _store()
    dropped = store.load(plan)
    assert [a.instance_id for a in dropped] == ["r1"]
    assert total_monthly_units(store.snapshot()) == 469 * 4 + 1200


def test_retired_definition_in_saved_plan_is_reported_not_crashed(tmp_path):
    """Deriving units straight from a stored plan names the retired service."""
    path = tmp_path / "plans.json"
    path.write_text(json.dumps({
        "dave": {
            "care_level": 2,
            "weekday_slots": {"水": [{"definition_id": "retired", "instance_id": "r1"}]},
            "monthly_bucket": [],
        }
    }), encoding="utf-8")
    plan = PlanRepository(path).get_plan("dave")
    with pytest.raises(UnknownDefinition, match="retired"):
        total_monthly_units(plan)
    with pytest.raises(UnknownDefinition):
        compute_plan_summary(plan)

    store = _store()
    store.load(plan)
    assert total_monthly_units(store.snapshot()) == 0
