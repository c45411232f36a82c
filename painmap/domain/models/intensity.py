# painmap/domain/models/intensity.py
"""Colour scale for pain intensity markers."""

NO_PAIN_COLOR = "#cccccc"

# (lowest, highest, colour), inclusive bounds
INTENSITY_BANDS = (
    (1, 2, "#4ade80"),
    (3, 4, "#84cc16"),
    (5, 6, "#facc15"),
    (7, 8, "#fb923c"),
    (9, 10, "#f87171"),
)


def intensity_color(intensity: int) -> str:
    """Hex colour for an intensity; 0 and out-of-scale values are grey."""
    for lowest, highest, color in INTENSITY_BANDS:
        if lowest <= intensity <= highest:
            return color
    return NO_PAIN_COLOR
