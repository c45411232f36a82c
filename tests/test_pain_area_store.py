"""
Pain Area Store Tests
=====================

Adding, editing, removing and filtering pain areas, and observer
notification.
"""

from dataclasses import FrozenInstanceError
from unittest.mock import MagicMock

import pytest

from painmap.domain.common.errors import ErrorCategory, OutOfRangeError, ValidationError
from painmap.domain.models.hotspot import View


@pytest.mark.critical
def test_add_and_get(store, make_record):
    record = make_record(record_id="point-1")

    result = store.add(record)

    assert result.is_success
    assert store.get("point-1") is record
    assert len(store) == 1


def test_add_rejects_duplicate_id(store, make_record):
    store.add(make_record(record_id="point-1"))

    result = store.add(make_record(record_id="point-1"))

    assert result.is_failure
    assert isinstance(result.error, ValidationError)
    assert len(store) == 1


def test_add_rejects_out_of_range_intensity(store, make_record):
    result = store.add(make_record(intensity=11))

    assert result.is_failure
    assert isinstance(result.error, OutOfRangeError)
    assert len(store) == 0


def test_records_in_same_region_are_not_deduplicated(store, make_record):
    store.add(make_record(region="Lower Back", x=10, y=10))
    store.add(make_record(region="Lower Back", x=10, y=10))

    assert len(store) == 2


@pytest.mark.critical
@pytest.mark.parametrize("value", range(0, 11))
def test_set_intensity_keeps_identity(store, make_record, value):
    record = make_record(record_id="point-1", region="Left Heel")
    store.add(record)

    result = store.set_intensity("point-1", value)

    assert result.is_success
    stored = store.get("point-1")
    assert stored.intensity == value
    assert stored.id == "point-1"
    assert stored.region == "Left Heel"


@pytest.mark.critical
@pytest.mark.parametrize("value", [-1, 11])
def test_set_intensity_out_of_range_fails(store, make_record, value):
    store.add(make_record(record_id="point-1", intensity=5))

    result = store.set_intensity("point-1", value)

    assert result.is_failure
    assert isinstance(result.error, OutOfRangeError)
    assert result.error.code == OutOfRangeError.CODE
    assert result.error.category == ErrorCategory.VALIDATION
    assert result.error.value == value
    assert (result.error.minimum, result.error.maximum) == (0, 10)
    assert store.get("point-1").intensity == 5


@pytest.mark.parametrize("value", [0, 10])
def test_set_intensity_boundaries_succeed(store, make_record, value):
    store.add(make_record(record_id="point-1"))
    assert store.set_intensity("point-1", value).is_success


@pytest.mark.parametrize("value", [5.5, "7", True, None])
def test_set_intensity_requires_integer(store, make_record, value):
    store.add(make_record(record_id="point-1"))

    result = store.set_intensity("point-1", value)

    assert result.is_failure
    assert isinstance(result.error, ValidationError)
    assert not isinstance(result.error, OutOfRangeError)


def test_set_intensity_unknown_id_fails(store):
    result = store.set_intensity("missing", 3)
    assert result.is_failure
    assert "missing" in result.error.message


@pytest.mark.critical
def test_remove_twice_equals_remove_once(store, make_record):
    store.add(make_record(record_id="point-1"))
    store.add(make_record(record_id="point-2"))

    assert store.remove("point-1") is True
    after_first = [r.id for r in store.list_all()]
    assert store.remove("point-1") is False

    assert [r.id for r in store.list_all()] == after_first == ["point-2"]


@pytest.mark.critical
def test_filter_by_view_uses_origin_view(store, make_record):
    front = make_record(view=View.FRONT, region="Chest", group_id=1)
    back = make_record(view=View.BACK)
    store.add(front)
    store.add(back)

    assert store.filter_by_view("front") == [front]
    assert store.filter_by_view(View.BACK) == [back]


def test_free_text_does_not_affect_view_filter(store, make_record):
    # Free text mentioning the other view must not move the record
    record = make_record(view=View.BACK, free_text="View: front")
    store.add(record)

    assert store.filter_by_view(View.FRONT) == []
    assert store.filter_by_view(View.BACK) == [record]


def test_set_free_text_strips_and_clears(store, make_record):
    store.add(make_record(record_id="point-1"))

    store.set_free_text("point-1", "  worse at night  ")
    assert store.get("point-1").free_text == "worse at night"

    store.set_free_text("point-1", "   ")
    assert store.get("point-1").free_text is None


@pytest.mark.critical
def test_records_handed_out_cannot_be_edited(store, form_state, make_record):
    form_state.bind_store(store)
    store.add(make_record(record_id="point-1", region="Lower Back", intensity=5))
    fetched = store.get("point-1")

    with pytest.raises(FrozenInstanceError):
        fetched.intensity = 42
    with pytest.raises(FrozenInstanceError):
        store.list_all()[0].region = "Changed"

    stored = store.get("point-1")
    assert (stored.intensity, stored.region) == (5, "Lower Back")
    assert form_state.pain_areas[0]["intensity"] == 5


def test_edits_replace_record_in_place(store, make_record):
    store.add(make_record(record_id="point-0"))
    store.add(make_record(record_id="point-1", intensity=5))
    before = store.get("point-1")

    updated = store.set_intensity("point-1", 9).value

    assert before.intensity == 5
    assert store.get("point-1") is updated
    assert updated.intensity == 9
    assert [r.id for r in store] == ["point-0", "point-1"]


def test_list_all_and_iteration_are_snapshots(store, make_record):
    store.add(make_record(record_id="point-1"))
    listing = store.list_all()
    listing.clear()

    assert len(store) == 1
    assert [r.id for r in store] == ["point-1"]


def test_replace_all_validates_before_swapping(store, make_record):
    store.add(make_record(record_id="keep"))

    result = store.replace_all([make_record(record_id="a"), make_record(record_id="a")])
    assert result.is_failure
    assert [r.id for r in store] == ["keep"]

    result = store.replace_all([make_record(record_id="a", intensity=12)])
    assert result.is_failure

    assert store.replace_all([make_record(record_id="b")]).is_success
    assert [r.id for r in store] == ["b"]


def test_observers_receive_snapshot_after_each_change(store, make_record):
    observer = MagicMock()
    store.register_observer(observer)

    store.add(make_record(record_id="point-1"))
    store.set_intensity("point-1", 8)
    store.remove("point-1")
    store.clear()

    assert observer.call_count == 4
    first_snapshot = observer.call_args_list[0].args[0]
    assert [r.id for r in first_snapshot] == ["point-1"]
    assert observer.call_args_list[2].args[0] == []


def test_failed_mutation_does_not_notify(store, make_record):
    observer = MagicMock()
    store.register_observer(observer)

    store.set_intensity("missing", 3)
    store.remove("missing")

    observer.assert_not_called()


def test_observer_registered_once_and_can_unregister(store, make_record):
    observer = MagicMock()
    store.register_observer(observer)
    store.register_observer(observer)

    store.add(make_record())
    assert observer.call_count == 1

    store.unregister_observer(observer)
    store.add(make_record())
    assert observer.call_count == 1


def test_failing_observer_is_logged_and_others_still_run(store, make_record, logger):
    broken = MagicMock(side_effect=RuntimeError("boom"))
    healthy = MagicMock()
    store.register_observer(broken)
    store.register_observer(healthy)

    result = store.add(make_record())

    assert result.is_success
    healthy.assert_called_once()
    assert any("boom" in call.args[0] for call in logger.error.call_args_list)
