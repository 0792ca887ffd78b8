"""Value types for image sizes, placement offsets and resize results."""

import math
from dataclasses import dataclass
from typing import ClassVar


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves going away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class Dimension:
    """Width and height of an image or canvas, in whole pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Dimensions cannot be negative: {self.width}x{self.height}")

    @classmethod
    def of(cls, width: float, height: float) -> "Dimension":
        return cls(round_half_away(width), round_half_away(height))

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Offset:
    """Position of the scaled image's top-left corner on the canvas.

    Negative values mean the image starts outside the canvas and gets cropped.
    """

    x: int
    y: int

    ORIGIN: ClassVar["Offset"]

    @classmethod
    def of(cls, x: float, y: float) -> "Offset":
        return cls(round_half_away(x), round_half_away(y))

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


Offset.ORIGIN = Offset(0, 0)


@dataclass(frozen=True)
class ResizeResult:
    scaled: Dimension
    canvas: Dimension
    offset: Offset
