"""Resize geometry.

Maps a source size and a set of resize constraints to the size the image is
scaled to, the size of the canvas it is composited onto, and where on that
canvas it lands. Nothing here touches pixels; the functions are pure so they
can be checked without decoding an image.

Five policies are available, one constraint type each:

- ``Standard``: stretch to exactly ``max_width`` x ``max_height``.
- ``Circumscribed``: fill the box, cropping the overflow equally on both sides.
- ``CropProportionate``: fit an explicit crop rectangle of the source into the box.
- ``Inscribed``: fit inside the box, padding the unused space equally on both sides.
- ``Proportionate``: fit inside the box, canvas shrunk to the scaled image.
"""

from dataclasses import dataclass
from enum import IntEnum

from .exceptions import InvalidMethod, UnresolvedConstraint
from .geometry import Dimension, Offset, ResizeResult, round_half_away


class ResizeMethod(IntEnum):
    STANDARD = 0
    CIRCUMSCRIBED = 1
    CROP_PROPORTIONATE = 2
    INSCRIBED = 3
    PROPORTIONATE = 4


@dataclass(frozen=True)
class Standard:
    max_width: int | None
    max_height: int | None


@dataclass(frozen=True)
class Circumscribed:
    max_width: int | None
    max_height: int | None


@dataclass(frozen=True)
class CropProportionate:
    max_width: int | None
    max_height: int | None
    offset_x: int = 0
    offset_y: int = 0
    # None (or 0) means "up to the source's right/bottom edge"
    crop_width: int | None = None
    crop_height: int | None = None


@dataclass(frozen=True)
class Inscribed:
    max_width: int | None
    max_height: int | None


@dataclass(frozen=True)
class Proportionate:
    max_width: int | None
    max_height: int | None


ResizeConstraints = Standard | Circumscribed | CropProportionate | Inscribed | Proportionate

_BOX_VARIANTS: dict[ResizeMethod, type] = {
    ResizeMethod.STANDARD: Standard,
    ResizeMethod.CIRCUMSCRIBED: Circumscribed,
    ResizeMethod.INSCRIBED: Inscribed,
    ResizeMethod.PROPORTIONATE: Proportionate,
}


def parse_method(method: ResizeMethod | int | str) -> ResizeMethod:
    """Turn an enum member, its integer value or its name into a ``ResizeMethod``.

    Raises
    ------
    InvalidMethod
        If the value does not name one of the five methods
    """
    if isinstance(method, ResizeMethod):
        return method
    if isinstance(method, bool):
        raise InvalidMethod(f"Invalid resize method: {method!r}")
    if isinstance(method, int):
        try:
            return ResizeMethod(method)
        except ValueError as e:
            raise InvalidMethod(f"Invalid resize method: {method!r}") from e
    if isinstance(method, str):
        try:
            return ResizeMethod[method.strip().upper().replace("-", "_")]
        except KeyError as e:
            raise InvalidMethod(f"Invalid resize method: {method!r}") from e
    raise InvalidMethod(f"Invalid resize method: {method!r}")


def constraints_for(
    method: ResizeMethod | int | str,
    *,
    max_width: int | None,
    max_height: int | None,
    offset_x: int = 0,
    offset_y: int = 0,
    crop_width: int | None = None,
    crop_height: int | None = None,
) -> ResizeConstraints:
    """Build the constraint object for a method selector.

    The crop arguments are only used by ``CROP_PROPORTIONATE``.
    """
    selector = parse_method(method)
    if selector is ResizeMethod.CROP_PROPORTIONATE:
        return CropProportionate(
            max_width=max_width,
            max_height=max_height,
            offset_x=offset_x,
            offset_y=offset_y,
            crop_width=crop_width,
            crop_height=crop_height,
        )
    return _BOX_VARIANTS[selector](max_width=max_width, max_height=max_height)


def compute_resize(source: Dimension, constraints: ResizeConstraints) -> ResizeResult:
    """Compute scaled size, canvas size and placement offset for ``source``.

    Parameters
    ----------
    source : Dimension
        Current size of the image
    constraints : ResizeConstraints
        One of ``Standard``, ``Circumscribed``, ``CropProportionate``,
        ``Inscribed`` or ``Proportionate``

    Returns
    -------
    ResizeResult
        Fresh result, nothing is cached between calls

    Raises
    ------
    InvalidMethod
        If ``constraints`` is not one of the five constraint types
    UnresolvedConstraint
        If the constraints do not carry enough sizing information
    """
    match constraints:
        case Standard(max_width, max_height):
            box_w, box_h = _require_box(max_width, max_height, "Standard")
            return _standard(box_w, box_h)
        case Circumscribed(max_width, max_height):
            box_w, box_h = _require_box(max_width, max_height, "Circumscribed")
            return _circumscribed(_require_source(source), box_w, box_h)
        case CropProportionate():
            return _crop_proportionate(_require_source(source), constraints)
        case Inscribed(max_width, max_height):
            box_w, box_h = _require_box(max_width, max_height, "Inscribed")
            return _inscribed(_require_source(source), box_w, box_h)
        case Proportionate(max_width, max_height):
            _require_any(max_width, max_height, "Proportionate")
            return _proportionate(_require_source(source), max_width, max_height)
        case _:
            raise InvalidMethod(f"Invalid resize method: {constraints!r}")


def _require_source(source: Dimension) -> Dimension:
    if source.width <= 0 or source.height <= 0:
        raise UnresolvedConstraint(f"Cannot scale an image of size {source}")
    return source


def _check_positive(value: int | None, name: str) -> None:
    if value is not None and value <= 0:
        raise UnresolvedConstraint(f"{name} must be positive, got {value}")


def _require_box(max_width: int | None, max_height: int | None, method: str) -> tuple[int, int]:
    if max_width is None or max_height is None:
        raise UnresolvedConstraint(f"{method} resize needs both a max width and a max height")
    _check_positive(max_width, "max width")
    _check_positive(max_height, "max height")
    return max_width, max_height


def _require_any(max_width: int | None, max_height: int | None, method: str) -> None:
    if max_width is None and max_height is None:
        raise UnresolvedConstraint(f"{method} resize needs a max width or a max height")
    _check_positive(max_width, "max width")
    _check_positive(max_height, "max height")


def _wider_than_box(width: int, height: int, max_width: int, max_height: int) -> bool:
    # width / max_width >= height / max_height, without float division
    return width * max_height >= height * max_width


def _scale_by_width(width: int, height: int, max_width: int | None, max_height: int | None) -> bool:
    # A single constrained axis drives the scale on its own.
    if max_height is None:
        return True
    if max_width is None:
        return False
    return _wider_than_box(width, height, max_width, max_height)


def _centered(new_w: int, new_h: int, canvas_w: int, canvas_h: int) -> ResizeResult:
    return ResizeResult(
        scaled=Dimension(new_w, new_h),
        canvas=Dimension(canvas_w, canvas_h),
        offset=Offset.of((canvas_w - new_w) / 2, (canvas_h - new_h) / 2),
    )


def _standard(max_width: int, max_height: int) -> ResizeResult:
    size = Dimension(max_width, max_height)
    return ResizeResult(scaled=size, canvas=size, offset=Offset.ORIGIN)


def _circumscribed(source: Dimension, max_width: int, max_height: int) -> ResizeResult:
    width, height = source.width, source.height

    if _wider_than_box(width, height, max_width, max_height):
        new_h = min(height, max_height)
        new_w = round_half_away(width * new_h / height)

        canvas_h = new_h
        canvas_w = round_half_away(max_width * canvas_h / max_height)
    else:
        new_w = min(width, max_width)
        new_h = round_half_away(height * new_w / width)

        canvas_w = new_w
        canvas_h = round_half_away(max_height * canvas_w / max_width)

    return _centered(new_w, new_h, canvas_w, canvas_h)


def _crop_proportionate(source: Dimension, constraints: CropProportionate) -> ResizeResult:
    width, height = source.width, source.height
    offset_x, offset_y = constraints.offset_x, constraints.offset_y
    max_width, max_height = constraints.max_width, constraints.max_height

    _require_any(max_width, max_height, "CropProportionate")
    if offset_x < 0 or offset_y < 0:
        raise UnresolvedConstraint(f"Crop offset cannot be negative: ({offset_x}, {offset_y})")

    crop_w = constraints.crop_width or width - offset_x
    crop_h = constraints.crop_height or height - offset_y
    if crop_w <= 0 or crop_h <= 0:
        raise UnresolvedConstraint(
            f"Crop rectangle {crop_w}x{crop_h} at ({offset_x}, {offset_y}) is empty for a {source} image"
        )

    if _scale_by_width(crop_w, crop_h, max_width, max_height):
        canvas_w = min(crop_w, max_width)
        canvas_h = round_half_away(crop_h * canvas_w / crop_w)
    else:
        canvas_h = min(crop_h, max_height)
        canvas_w = round_half_away(crop_w * canvas_h / crop_h)

    return ResizeResult(
        scaled=Dimension.of(width * canvas_w / crop_w, height * canvas_h / crop_h),
        canvas=Dimension(canvas_w, canvas_h),
        offset=Offset(
            -round_half_away(offset_x * canvas_w / crop_w),
            -round_half_away(offset_y * canvas_h / crop_h),
        ),
    )


def _inscribed(source: Dimension, max_width: int, max_height: int) -> ResizeResult:
    width, height = source.width, source.height

    if _wider_than_box(width, height, max_width, max_height):
        new_w = min(width, max_width)
        new_h = round_half_away(height * new_w / width)

        canvas_w = new_w
        canvas_h = round_half_away(max_height * canvas_w / max_width)
    else:
        new_h = min(height, max_height)
        new_w = round_half_away(width * new_h / height)

        canvas_h = new_h
        canvas_w = round_half_away(max_width * canvas_h / max_height)

    return _centered(new_w, new_h, canvas_w, canvas_h)


def _proportionate(source: Dimension, max_width: int | None, max_height: int | None) -> ResizeResult:
    width, height = source.width, source.height

    if _scale_by_width(width, height, max_width, max_height):
        new_w = min(width, max_width)
        size = Dimension.of(new_w, height * new_w / width)
    else:
        new_h = min(height, max_height)
        size = Dimension.of(width * new_h / height, new_h)

    return ResizeResult(scaled=size, canvas=size, offset=Offset.ORIGIN)
