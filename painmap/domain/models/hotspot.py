# painmap/domain/models/hotspot.py
from dataclasses import dataclass
from enum import Enum
from typing import Union

from painmap.domain.models.coordinate_space import Point, Size, normalized_to_displayed


class View(Enum):
    """Body orientation shown on the pain map."""
    FRONT = "front"
    BACK = "back"

    @classmethod
    def parse(cls, value: Union['View', str]) -> 'View':
        """
        Accept a View or its string value ("front"/"back", any case).

        Raises:
            ValueError: For anything else
        """
        if isinstance(value, View):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown body view: {value!r}")
        return cls(value.strip().lower())


@dataclass(frozen=True)
class BoundingBox:
    """Hotspot area as fractions of the displayed image."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Bounding box {name} must be within [0, 1], got {value}")

    def center_in(self, displayed: Size) -> Point:
        """Centre of the box in displayed pixels."""
        origin = normalized_to_displayed(Point(self.x, self.y), displayed)
        return Point(
            origin.x + self.width * displayed.width / 2,
            origin.y + self.height * displayed.height / 2
        )


@dataclass(frozen=True)
class HotspotDefinition:
    """A named anatomical region of one body view."""
    group_id: int  # Coarse region, shared by many entries
    display_name: str  # Stored verbatim as a pain area's region
    bounding_box: BoundingBox
    is_detail_variant: bool = False  # Fine subdivision such as a plantar zone


@dataclass(frozen=True)
class HotspotMatch:
    """
    Outcome of resolving a click against the catalog.

    Attributes:
        display_name: Name of the winning hotspot
        group_id: Group of the winning hotspot
        is_detail_variant: Whether the winner is a detail entry
        view: View the click was resolved in
        click: The click position in displayed pixels
        distance: Distance from the click to the winner's centre, in displayed pixels
    """
    display_name: str
    group_id: int
    is_detail_variant: bool
    view: View
    click: Point
    distance: float
