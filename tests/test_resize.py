"""Tests for the resize geometry of the five methods."""

import pytest

from image_wrapper.exceptions import InvalidMethod, UnresolvedConstraint
from image_wrapper.geometry import Dimension, Offset
from image_wrapper.resize import (
    Circumscribed,
    CropProportionate,
    Inscribed,
    Proportionate,
    ResizeMethod,
    Standard,
    compute_resize,
    constraints_for,
    parse_method,
)

SOURCES = [
    Dimension(1000, 500),
    Dimension(500, 1000),
    Dimension(300, 300),
    Dimension(4000, 3000),
    Dimension(333, 777),
    Dimension(1, 1),
    Dimension(1920, 1080),
]

BOXES = [(510, 580), (100, 100), (640, 480), (37, 91)]

LARGE_SOURCES = [
    Dimension(2000, 1000),
    Dimension(1000, 2000),
    Dimension(600, 600),
    Dimension(4000, 3000),
]


def _keeps_aspect(source: Dimension, scaled: Dimension) -> bool:
    # One of the axes is derived from the other with a single rounding step
    return (
        abs(scaled.width - source.width * scaled.height / source.height) <= 0.5
        or abs(scaled.height - source.height * scaled.width / source.width) <= 0.5
    )


# ============================================================================
# Standard
# ============================================================================


class TestStandard:
    """Stretch to the box, ignoring proportions."""

    @pytest.mark.parametrize("source", SOURCES)
    @pytest.mark.parametrize("box", BOXES)
    def test_always_exact_box(self, source: Dimension, box: tuple[int, int]) -> None:
        result = compute_resize(source, Standard(*box))
        assert result.scaled == Dimension(*box)
        assert result.canvas == Dimension(*box)
        assert result.offset == Offset.ORIGIN

    def test_needs_both_axes(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(100, 100), Standard(None, 100))


# ============================================================================
# Circumscribed
# ============================================================================


class TestCircumscribed:
    """Fill the box and crop the overflow."""

    def test_wide_source_scales_by_height(self) -> None:
        result = compute_resize(Dimension(1000, 500), Circumscribed(510, 580))
        assert result.scaled == Dimension(1000, 500)
        assert result.canvas == Dimension(440, 500)
        assert result.offset == Offset(-280, 0)

    def test_large_wide_source_fills_box(self) -> None:
        result = compute_resize(Dimension(2000, 1000), Circumscribed(510, 580))
        assert result.scaled == Dimension(1160, 580)
        assert result.canvas == Dimension(510, 580)
        assert result.offset == Offset(-325, 0)

    def test_tall_source_scales_by_width(self) -> None:
        result = compute_resize(Dimension(500, 2000), Circumscribed(510, 580))
        assert result.scaled == Dimension(500, 2000)
        assert result.canvas == Dimension(500, 569)
        # (569 - 2000) / 2 = -715.5 rounds away from zero
        assert result.offset == Offset(0, -716)

    @pytest.mark.parametrize("source", LARGE_SOURCES)
    def test_canvas_is_box_when_source_is_larger(self, source: Dimension) -> None:
        assert compute_resize(source, Circumscribed(510, 580)).canvas == Dimension(510, 580)

    @pytest.mark.parametrize("source", SOURCES)
    @pytest.mark.parametrize("box", BOXES)
    def test_scaled_keeps_aspect_ratio(self, source: Dimension, box: tuple[int, int]) -> None:
        result = compute_resize(source, Circumscribed(*box))
        assert _keeps_aspect(source, result.scaled)

    @pytest.mark.parametrize("source", SOURCES)
    def test_scaled_covers_canvas(self, source: Dimension) -> None:
        result = compute_resize(source, Circumscribed(510, 580))
        assert result.scaled.width >= result.canvas.width
        assert result.scaled.height >= result.canvas.height
        assert result.offset.x <= 0 and result.offset.y <= 0

    def test_needs_both_axes(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(100, 100), Circumscribed(510, None))


# ============================================================================
# Inscribed
# ============================================================================


class TestInscribed:
    """Fit inside the box and pad the rest."""

    def test_square_source(self) -> None:
        result = compute_resize(Dimension(300, 300), Inscribed(510, 580))
        assert result.scaled == Dimension(300, 300)
        assert result.canvas == Dimension(300, 341)
        assert result.offset == Offset(0, 21)

    def test_large_wide_source(self) -> None:
        result = compute_resize(Dimension(2000, 1000), Inscribed(510, 580))
        assert result.scaled == Dimension(510, 255)
        assert result.canvas == Dimension(510, 580)
        assert result.offset == Offset(0, 163)

    @pytest.mark.parametrize("source", LARGE_SOURCES)
    def test_canvas_is_box_when_source_is_larger(self, source: Dimension) -> None:
        assert compute_resize(source, Inscribed(510, 580)).canvas == Dimension(510, 580)

    @pytest.mark.parametrize("source", SOURCES)
    @pytest.mark.parametrize("box", BOXES)
    def test_scaled_keeps_aspect_ratio(self, source: Dimension, box: tuple[int, int]) -> None:
        result = compute_resize(source, Inscribed(*box))
        assert _keeps_aspect(source, result.scaled)

    @pytest.mark.parametrize("source", SOURCES)
    def test_scaled_fits_inside_canvas(self, source: Dimension) -> None:
        result = compute_resize(source, Inscribed(510, 580))
        assert result.scaled.width <= result.canvas.width
        assert result.scaled.height <= result.canvas.height
        assert result.offset.x >= 0 and result.offset.y >= 0

    def test_zero_box_rejected(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(100, 100), Inscribed(0, 100))


# ============================================================================
# Proportionate
# ============================================================================


class TestProportionate:
    """Fit inside the box, canvas shrunk to the image."""

    def test_wide_source(self) -> None:
        result = compute_resize(Dimension(1000, 500), Proportionate(510, 580))
        assert result.scaled == Dimension(510, 255)

    def test_small_source_is_not_enlarged(self) -> None:
        result = compute_resize(Dimension(100, 50), Proportionate(510, 580))
        assert result.scaled == Dimension(100, 50)

    @pytest.mark.parametrize("source", SOURCES)
    @pytest.mark.parametrize("box", BOXES)
    def test_canvas_matches_scaled(self, source: Dimension, box: tuple[int, int]) -> None:
        result = compute_resize(source, Proportionate(*box))
        assert result.canvas == result.scaled
        assert result.offset == Offset.ORIGIN
        assert _keeps_aspect(source, result.scaled)

    @pytest.mark.parametrize("source", SOURCES)
    def test_current_size_is_a_no_op(self, source: Dimension) -> None:
        first = compute_resize(source, Proportionate(source.width, source.height))
        second = compute_resize(first.canvas, Proportionate(first.canvas.width, first.canvas.height))
        assert first.canvas == source
        assert second.canvas == source

    def test_width_only(self) -> None:
        result = compute_resize(Dimension(1000, 500), Proportionate(200, None))
        assert result.scaled == Dimension(200, 100)

    def test_height_only(self) -> None:
        result = compute_resize(Dimension(1000, 500), Proportionate(None, 100))
        assert result.scaled == Dimension(200, 100)

    def test_single_axis_does_not_enlarge(self) -> None:
        result = compute_resize(Dimension(100, 50), Proportionate(None, 400))
        assert result.scaled == Dimension(100, 50)

    def test_no_axis(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(1000, 500), Proportionate(None, None))


# ============================================================================
# Crop-Proportionate
# ============================================================================


class TestCropProportionate:
    """Fit an explicit crop rectangle into the box."""

    @pytest.mark.parametrize("source", SOURCES)
    @pytest.mark.parametrize("box", BOXES)
    def test_whole_source_crop_matches_proportionate(self, source: Dimension, box: tuple[int, int]) -> None:
        cropped = compute_resize(
            source, CropProportionate(*box, offset_x=0, offset_y=0, crop_width=source.width, crop_height=source.height)
        )
        plain = compute_resize(source, Proportionate(*box))
        assert cropped.scaled == plain.scaled
        assert cropped.canvas == plain.canvas
        assert cropped.offset == Offset.ORIGIN

    def test_explicit_crop(self) -> None:
        result = compute_resize(
            Dimension(1000, 800),
            CropProportionate(200, 200, offset_x=100, offset_y=200, crop_width=400, crop_height=300),
        )
        assert result.canvas == Dimension(200, 150)
        assert result.scaled == Dimension(500, 400)
        assert result.offset == Offset(-50, -100)

    def test_crop_defaults_to_remaining_source(self) -> None:
        result = compute_resize(Dimension(1000, 800), CropProportionate(400, 400, offset_x=200, offset_y=100))
        assert result.canvas == Dimension(400, 350)
        assert result.scaled == Dimension(500, 400)
        assert result.offset == Offset(-100, -50)

    def test_zero_crop_size_means_default(self) -> None:
        explicit_zero = CropProportionate(400, 400, offset_x=200, offset_y=100, crop_width=0, crop_height=0)
        implicit = CropProportionate(400, 400, offset_x=200, offset_y=100)
        assert compute_resize(Dimension(1000, 800), explicit_zero) == compute_resize(Dimension(1000, 800), implicit)

    def test_height_only(self) -> None:
        result = compute_resize(Dimension(1000, 500), CropProportionate(None, 250))
        assert result.canvas == Dimension(500, 250)
        assert result.scaled == Dimension(500, 250)

    def test_width_only(self) -> None:
        result = compute_resize(Dimension(1000, 500), CropProportionate(250, None))
        assert result.canvas == Dimension(250, 125)
        assert result.scaled == Dimension(250, 125)

    def test_offset_outside_source(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(100, 100), CropProportionate(50, 50, offset_x=100))

    def test_negative_offset(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(100, 100), CropProportionate(50, 50, offset_x=-10))

    def test_no_axis(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(100, 100), CropProportionate(None, None))


# ============================================================================
# Dispatch
# ============================================================================


class TestDispatch:
    """Method selectors and constraint objects."""

    @pytest.mark.parametrize("method", ["circumscribed", 1, None, object(), (510, 580)])
    def test_unknown_constraints(self, method: object) -> None:
        with pytest.raises(InvalidMethod):
            compute_resize(Dimension(100, 100), method)  # type: ignore[arg-type]

    def test_zero_sized_source(self) -> None:
        with pytest.raises(UnresolvedConstraint):
            compute_resize(Dimension(0, 100), Circumscribed(510, 580))

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (ResizeMethod.INSCRIBED, ResizeMethod.INSCRIBED),
            (0, ResizeMethod.STANDARD),
            (2, ResizeMethod.CROP_PROPORTIONATE),
            ("crop-proportionate", ResizeMethod.CROP_PROPORTIONATE),
            ("Circumscribed", ResizeMethod.CIRCUMSCRIBED),
            (" proportionate ", ResizeMethod.PROPORTIONATE),
        ],
    )
    def test_parse_method(self, value: object, expected: ResizeMethod) -> None:
        assert parse_method(value) is expected  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [5, -1, True, "stretch", None, 1.0])
    def test_parse_invalid_method(self, value: object) -> None:
        with pytest.raises(InvalidMethod):
            parse_method(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("method", "expected_type"),
        [
            (ResizeMethod.STANDARD, Standard),
            (ResizeMethod.CIRCUMSCRIBED, Circumscribed),
            (ResizeMethod.INSCRIBED, Inscribed),
            (ResizeMethod.PROPORTIONATE, Proportionate),
        ],
    )
    def test_constraints_for_box_methods(self, method: ResizeMethod, expected_type: type) -> None:
        constraints = constraints_for(method, max_width=10, max_height=20, offset_x=5, crop_width=3)
        assert constraints == expected_type(max_width=10, max_height=20)

    def test_constraints_for_crop(self) -> None:
        constraints = constraints_for(
            "crop_proportionate", max_width=10, max_height=20, offset_x=1, offset_y=2, crop_width=3, crop_height=4
        )
        assert constraints == CropProportionate(10, 20, 1, 2, 3, 4)

    def test_constraints_for_invalid(self) -> None:
        with pytest.raises(InvalidMethod):
            constraints_for(9, max_width=10, max_height=20)
