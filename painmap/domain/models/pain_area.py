# painmap/domain/models/pain_area.py
"""
Pain area record model.

One record per mark the patient places on the body map. The body view and
hotspot group that produced a mark are structured fields; the human-readable
``notes`` string is derived from them and never parsed back, except once when
loading an older assessment document that only has the notes string.
"""
import re
import time
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from painmap.domain.models.coordinate_space import Point
from painmap.domain.models.hotspot import View

MIN_INTENSITY = 0
MAX_INTENSITY = 10
DEFAULT_INTENSITY = 5

_LEGACY_VIEW_PATTERN = re.compile(r"View:\s*(front|back)", re.IGNORECASE)
_LEGACY_GROUP_PATTERN = re.compile(r"RegionID:\s*(\d+)")
_LEGACY_DETAIL_PATTERN = re.compile(r"Detail:\s*")


def new_pain_area_id() -> str:
    """Generate a fresh record id, e.g. ``point-1718000000000-3f9a2c1b``."""
    return f"point-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def is_valid_intensity(value: Any) -> bool:
    return (isinstance(value, int) and not isinstance(value, bool)
            and MIN_INTENSITY <= value <= MAX_INTENSITY)


@dataclass(frozen=True)
class PainAreaRecord:
    """
    A user-placed pain mark.

    Records are immutable; edits produce a new record with the same id.
    """
    id: str
    region: str  # Copied from the matched hotspot at creation time
    intensity: int
    coordinates: Point  # Reference space
    origin_view: View
    source_group_id: int
    is_detail: bool = False
    free_text: Optional[str] = None

    @property
    def notes(self) -> str:
        """Display note, e.g. ``View: back, RegionID: 30, Detail: Left Heel``."""
        notes = f"View: {self.origin_view.value}, RegionID: {self.source_group_id}"
        if self.is_detail:
            notes += f", Detail: {self.region}"
        if self.free_text:
            notes += f"; {self.free_text}"
        return notes

    def with_intensity(self, intensity: int) -> 'PainAreaRecord':
        return replace(self, intensity=intensity)

    def with_free_text(self, free_text: Optional[str]) -> 'PainAreaRecord':
        return replace(self, free_text=free_text)

    def to_dict(self) -> Dict[str, Any]:
        """Assessment document representation."""
        data = {
            "id": self.id,
            "region": self.region,
            "intensity": self.intensity,
            "coordinates": {"x": self.coordinates.x, "y": self.coordinates.y},
            "notes": self.notes,
            "originView": self.origin_view.value,
            "sourceGroupId": self.source_group_id,
            "isDetail": self.is_detail,
        }
        if self.free_text:
            data["freeText"] = self.free_text
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PainAreaRecord':
        """
        Build a record from its document representation.

        Documents written before ``originView``/``sourceGroupId`` existed carry
        the view and group only inside ``notes``; those are recovered here.

        Raises:
            KeyError: If id, region or intensity is missing
            ValueError: If the view cannot be determined
        """
        notes = data.get("notes") or ""
        coordinates = data.get("coordinates") or {}

        view_value = data.get("originView")
        if view_value is None:
            view_match = _LEGACY_VIEW_PATTERN.search(notes)
            if not view_match:
                raise ValueError(f"Cannot determine body view of pain area {data.get('id')!r}")
            view_value = view_match.group(1)

        group_id = data.get("sourceGroupId")
        if group_id is None:
            group_match = _LEGACY_GROUP_PATTERN.search(notes)
            group_id = int(group_match.group(1)) if group_match else 0

        is_detail = data.get("isDetail")
        if is_detail is None:
            is_detail = bool(_LEGACY_DETAIL_PATTERN.search(notes))

        return cls(
            id=str(data["id"]),
            region=str(data["region"]),
            intensity=int(data["intensity"]),
            coordinates=Point(float(coordinates.get("x", 0.0)), float(coordinates.get("y", 0.0))),
            origin_view=View.parse(view_value),
            source_group_id=int(group_id),
            is_detail=bool(is_detail),
            free_text=data.get("freeText")
        )
