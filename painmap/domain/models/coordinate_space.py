# painmap/domain/models/coordinate_space.py
"""
Coordinate spaces used by the body map.

normalized
    Fractions in [0, 1] of the displayed image. Hotspot bounding boxes live here.
displayed
    Pixels of the image as it is currently drawn. Clicks arrive in this space.
natural
    Pixels of the source raster at its unscaled resolution. Alpha sampling
    happens here.
reference
    Displayed pixels divided by the display scale factor. Pain area records
    store their coordinates here so markers land in the same place after the
    display is rescaled.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A 2D position in one of the coordinate spaces."""
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """Width and height of an image in one of the pixel spaces."""
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, point: Point) -> bool:
        """Inclusive containment test against the rectangle (0, 0, width, height)."""
        return 0 <= point.x <= self.width and 0 <= point.y <= self.height


def normalized_to_displayed(point: Point, displayed: Size) -> Point:
    return Point(point.x * displayed.width, point.y * displayed.height)


def displayed_to_natural(point: Point, displayed: Size, natural: Size) -> Point:
    """Scale a displayed-space point onto the raster's natural resolution."""
    if displayed.is_empty:
        raise ValueError(f"Displayed size must be positive, got {displayed}")
    return Point(
        point.x / displayed.width * natural.width,
        point.y / displayed.height * natural.height
    )


def displayed_to_reference(point: Point, display_scale: float) -> Point:
    _check_scale(display_scale)
    return Point(point.x / display_scale, point.y / display_scale)


def reference_to_displayed(point: Point, display_scale: float) -> Point:
    _check_scale(display_scale)
    return Point(point.x * display_scale, point.y * display_scale)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _check_scale(display_scale: float) -> None:
    if not math.isfinite(display_scale) or display_scale <= 0:
        raise ValueError(f"Display scale must be a positive finite number, got {display_scale}")
