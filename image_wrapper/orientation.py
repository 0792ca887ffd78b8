"""EXIF orientation handling.

Only the three pure rotations are corrected. Mirrored orientations
(TOP_RIGHT, BOTTOM_LEFT, LEFT_TOP, RIGHT_BOTTOM) are left as they are.
"""

from enum import IntEnum


class Orientation(IntEnum):
    UNDEFINED = 0
    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_RIGHT = 3
    BOTTOM_LEFT = 4
    LEFT_TOP = 5
    RIGHT_TOP = 6
    RIGHT_BOTTOM = 7
    LEFT_BOTTOM = 8


# Clockwise degrees
_ROTATIONS: dict[Orientation, int] = {
    Orientation.BOTTOM_RIGHT: 180,
    Orientation.RIGHT_TOP: 90,
    Orientation.LEFT_BOTTOM: -90,
}

_MIRRORED = frozenset({
    Orientation.TOP_RIGHT,
    Orientation.BOTTOM_LEFT,
    Orientation.LEFT_TOP,
    Orientation.RIGHT_BOTTOM,
})


def parse_orientation(tag: int | None) -> Orientation:
    """Map a raw EXIF orientation value to ``Orientation``; unknown values become UNDEFINED."""
    if tag is None:
        return Orientation.UNDEFINED
    try:
        return Orientation(tag)
    except ValueError:
        return Orientation.UNDEFINED


def rotation_for(tag: Orientation | int | None) -> int | None:
    """Return the clockwise rotation that puts the image upright, or None to leave it."""
    return _ROTATIONS.get(parse_orientation(tag))


def is_mirrored(tag: Orientation | int | None) -> bool:
    return parse_orientation(tag) in _MIRRORED
