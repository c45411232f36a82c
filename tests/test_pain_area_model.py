"""
Pain Area Model Tests
=====================

Record notes, document conversion and the intensity colour scale.
"""

import pytest

from painmap.domain.models.coordinate_space import Point
from painmap.domain.models.hotspot import View
from painmap.domain.models.intensity import NO_PAIN_COLOR, intensity_color
from painmap.domain.models.pain_area import (
    PainAreaRecord, is_valid_intensity, new_pain_area_id
)


def test_notes_for_regular_record(make_record):
    record = make_record(view=View.FRONT, group_id=3)
    assert record.notes == "View: front, RegionID: 3"


def test_notes_for_detail_record_with_free_text(make_record):
    record = make_record(region="Left Heel", group_id=30, is_detail=True, free_text="sharp")
    assert record.notes == "View: back, RegionID: 30, Detail: Left Heel; sharp"


def test_to_dict(make_record):
    record = make_record(record_id="point-1", region="Lower Back", intensity=6, x=10.5, y=20.0)

    assert record.to_dict() == {
        "id": "point-1",
        "region": "Lower Back",
        "intensity": 6,
        "coordinates": {"x": 10.5, "y": 20.0},
        "notes": "View: back, RegionID: 10",
        "originView": "back",
        "sourceGroupId": 10,
        "isDetail": False,
    }


def test_to_dict_includes_free_text_when_set(make_record):
    assert make_record(free_text="dull").to_dict()["freeText"] == "dull"


def test_from_dict_restores_structured_fields(make_record):
    original = make_record(view=View.FRONT, region="Chest", group_id=1, free_text="tight")

    restored = PainAreaRecord.from_dict(original.to_dict())

    assert restored == original


def test_from_dict_reads_legacy_notes():
    restored = PainAreaRecord.from_dict({
        "id": "point-9", "region": "Neck", "intensity": 4,
        "coordinates": {"x": 1, "y": 2}, "notes": "View: front, RegionID: 5"
    })

    assert restored.origin_view is View.FRONT
    assert restored.source_group_id == 5
    assert restored.is_detail is False
    assert restored.coordinates == Point(1.0, 2.0)


def test_from_dict_without_view_fails():
    with pytest.raises(ValueError):
        PainAreaRecord.from_dict({"id": "p", "region": "Neck", "intensity": 1, "notes": "sore"})


def test_from_dict_without_id_fails():
    with pytest.raises(KeyError):
        PainAreaRecord.from_dict({"region": "Neck", "intensity": 1, "originView": "back"})


def test_new_pain_area_ids_are_unique():
    ids = {new_pain_area_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.startswith("point-") for i in ids)


@pytest.mark.parametrize("value, expected", [
    (0, True), (10, True), (5, True), (-1, False), (11, False), (5.0, False), (True, False), ("5", False),
])
def test_is_valid_intensity(value, expected):
    assert is_valid_intensity(value) is expected


@pytest.mark.parametrize("intensity, color", [
    (0, NO_PAIN_COLOR),
    (1, "#4ade80"), (2, "#4ade80"),
    (3, "#84cc16"), (4, "#84cc16"),
    (5, "#facc15"), (6, "#facc15"),
    (7, "#fb923c"), (8, "#fb923c"),
    (9, "#f87171"), (10, "#f87171"),
])
def test_intensity_color_bands(intensity, color):
    assert intensity_color(intensity) == color
