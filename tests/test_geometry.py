"""Unit tests for cover-fit scaling and crop offsets."""

import pytest

from focuspoint.errors import InvalidSizeError
from focuspoint.geometry import (
    CropOffset,
    FocusPoint,
    Size,
    assert_size,
    bound_percentage,
    compute_crop_offset,
    plan_scale,
    plan_scaled_size,
)

SIZE_PAIRS = [
    (Size(4000, 2000), Size(1000, 1000)),
    (Size(400, 200), Size(1000, 1000)),
    (Size(500, 500), Size(1000, 500)),
    (Size(100, 1000), Size(200, 300)),
    (Size(250, 100), Size(500, 500)),
    (Size(1920, 1080), Size(300, 600)),
    (Size(10, 3000), Size(640, 480)),
    (Size(333, 777), Size(100, 100)),
]


@pytest.mark.unit
class TestBoundPercentage:
    """Tests for bound_percentage."""

    def test_below_range(self):
        assert bound_percentage(-10) == 0

    def test_above_range(self):
        assert bound_percentage(150) == 100

    def test_within_range(self):
        assert bound_percentage(42) == 42

    def test_edges(self):
        assert bound_percentage(0) == 0
        assert bound_percentage(100) == 100

    def test_nan_is_center(self):
        assert bound_percentage(float("nan")) == 50


@pytest.mark.unit
class TestSize:
    """Tests for Size parsing and helpers."""

    def test_parse(self):
        assert Size.parse("800x600") == Size(800, 600)

    def test_parse_allows_whitespace_and_uppercase(self):
        assert Size.parse(" 800 X 600 ") == Size(800, 600)

    @pytest.mark.parametrize("value", ["800", "axb", "800x", "-1x20", "800x600x2", ""])
    def test_parse_malformed(self, value):
        with pytest.raises(InvalidSizeError):
            Size.parse(value)

    def test_parse_zero_dimension(self):
        with pytest.raises(InvalidSizeError):
            Size.parse("0x600")

    def test_str_rounds(self):
        assert str(Size(2000.0, 999.6)) == "2000x1000"

    def test_is_degenerate(self):
        assert Size(0, 10).is_degenerate
        assert Size(10, -1).is_degenerate
        assert not Size(1, 1).is_degenerate

    def test_assert_size(self):
        assert_size(Size(1, 1))
        with pytest.raises(InvalidSizeError, match="target size"):
            assert_size(Size(0, 10), "target size")

    def test_covers(self):
        assert Size(100, 100).covers(Size(100, 50))
        assert not Size(100, 100).covers(Size(101, 50))


@pytest.mark.unit
class TestPlanScaledSize:
    """Tests for plan_scaled_size."""

    def test_identity_when_already_covering(self):
        assert plan_scaled_size(Size(4000, 2000), Size(1000, 1000)) == Size(4000, 2000)

    def test_grows_both_axes_for_small_original(self):
        result = plan_scaled_size(Size(400, 200), Size(1000, 1000))

        assert result.width == pytest.approx(2000)
        assert result.height == pytest.approx(1000)

    def test_grows_dominant_axis_only(self):
        result = plan_scaled_size(Size(500, 500), Size(1000, 500))

        assert result.width == pytest.approx(1000)
        assert result.height == pytest.approx(1000)

    def test_height_dominant_target(self):
        result = plan_scaled_size(Size(100, 1000), Size(200, 300))

        assert result.width == pytest.approx(200)
        assert result.height == pytest.approx(2000)

    def test_square_target_tie(self):
        result = plan_scaled_size(Size(250, 100), Size(500, 500))

        assert result.width == pytest.approx(1250)
        assert result.height == pytest.approx(500)

    def test_does_not_modify_inputs(self):
        original = Size(400, 200)
        target = Size(1000, 1000)

        plan_scaled_size(original, target)

        assert original == Size(400, 200)
        assert target == Size(1000, 1000)

    @pytest.mark.parametrize("original,target", SIZE_PAIRS)
    def test_covers_target_and_keeps_aspect(self, original, target):
        result = plan_scaled_size(original, target)

        assert result.width >= target.width
        assert result.height >= target.height
        assert result.width / result.height == pytest.approx(original.width / original.height)

    @pytest.mark.parametrize(
        "original,target",
        [
            (Size(0, 100), Size(10, 10)),
            (Size(100, 0), Size(10, 10)),
            (Size(100, 100), Size(0, 10)),
            (Size(100, 100), Size(10, -5)),
        ],
    )
    def test_degenerate_sizes_rejected(self, original, target):
        with pytest.raises(InvalidSizeError):
            plan_scaled_size(original, target)


@pytest.mark.unit
class TestPlanScale:
    """Tests for plan_scale."""

    def test_large_original_reduced_to_minimal_cover(self):
        plan = plan_scale(Size(4000, 2000), Size(1000, 1000))

        assert plan.scaled_size == Size(4000, 2000)
        assert plan.ratio == pytest.approx(2.0)
        assert plan.resample_size == Size(2000, 1000)

    def test_grown_original_has_unit_ratio(self):
        plan = plan_scale(Size(400, 200), Size(1000, 1000))

        assert plan.ratio == 1.0
        assert plan.resample_size == Size(2000, 1000)

    def test_exact_fit(self):
        plan = plan_scale(Size(800, 600), Size(800, 600))

        assert plan.ratio == 1.0
        assert plan.resample_size == Size(800, 600)

    @pytest.mark.parametrize("original,target", SIZE_PAIRS)
    def test_resample_size_is_whole_pixels_and_covers(self, original, target):
        plan = plan_scale(original, target)

        assert plan.ratio >= 1.0
        assert plan.resample_size.width == int(plan.resample_size.width)
        assert plan.resample_size.height == int(plan.resample_size.height)
        assert plan.resample_size.covers(target)
        # The binding axis matches the target exactly
        assert plan.resample_size.width == target.width or plan.resample_size.height == target.height


@pytest.mark.unit
class TestComputeCropOffset:
    """Tests for compute_crop_offset."""

    def test_focus_near_right_edge_clamps(self):
        offset = compute_crop_offset(Size(2000, 1000), Size(1000, 500), FocusPoint(90, 50))

        assert offset.shift_x == pytest.approx(-1000)
        assert offset.shift_y == pytest.approx(-250)

    def test_center_focus_gives_centered_crop(self):
        scaled = Size(2000, 1000)
        target = Size(1000, 1000)

        offset = compute_crop_offset(scaled, target, FocusPoint(50, 50))

        assert offset.shift_x == pytest.approx(-(scaled.width - target.width) / 2)
        assert offset.shift_y == 0

    def test_top_left_focus(self):
        offset = compute_crop_offset(Size(1600, 1200), Size(800, 600), FocusPoint(0, 0))

        assert offset == CropOffset(0, 0)

    def test_bottom_right_focus(self):
        offset = compute_crop_offset(Size(1600, 1200), Size(800, 600), FocusPoint(100, 100))

        assert offset.shift_x == pytest.approx(-800)
        assert offset.shift_y == pytest.approx(-600)

    def test_out_of_range_focus_is_clamped(self):
        offset = compute_crop_offset(Size(1600, 1200), Size(800, 600), FocusPoint(150, -20))

        assert offset.shift_x == pytest.approx(-800)
        assert offset.shift_y == 0

    def test_nan_focus_is_centered(self):
        offset = compute_crop_offset(Size(2000, 1000), Size(1000, 1000), FocusPoint(float("nan"), 50))

        assert offset.shift_x == pytest.approx(-500)
        assert offset.shift_y == 0

    def test_vertical_axis_centers_on_focus(self):
        offset = compute_crop_offset(Size(1000, 2000), Size(1000, 1000), FocusPoint(50, 60))

        assert offset.shift_x == 0
        assert offset.shift_y == pytest.approx(-700)

    def test_no_cropping_needed(self):
        offset = compute_crop_offset(Size(800, 600), Size(800, 600), FocusPoint(80, 20))

        assert offset == CropOffset(0, 0)

    def test_focus_within_first_half_window(self):
        offset = compute_crop_offset(Size(2000, 1000), Size(1000, 1000), FocusPoint(25, 50))

        assert offset.shift_x == 0

    def test_target_larger_than_scaled_rejected(self):
        with pytest.raises(InvalidSizeError):
            compute_crop_offset(Size(500, 500), Size(600, 400), FocusPoint())

    def test_degenerate_size_rejected(self):
        with pytest.raises(InvalidSizeError):
            compute_crop_offset(Size(500, 0), Size(100, 0), FocusPoint())

    @pytest.mark.parametrize(
        "scaled,target",
        [
            (Size(2000, 1000), Size(1000, 500)),
            (Size(1000, 2000), Size(1000, 1000)),
            (Size(1333, 1000), Size(1000, 1000)),
            (Size(640, 480), Size(300, 300)),
        ],
    )
    def test_window_stays_inside_scaled_image(self, scaled, target):
        for focus_x in range(-20, 121, 10):
            for focus_y in range(-20, 121, 10):
                offset = compute_crop_offset(scaled, target, FocusPoint(focus_x, focus_y))

                assert 0 <= -offset.shift_x <= scaled.width - target.width
                assert 0 <= -offset.shift_y <= scaled.height - target.height


@pytest.mark.unit
class TestCropOffset:
    """Tests for CropOffset.crop_box."""

    def test_crop_box(self):
        assert CropOffset(shift_x=-250.0, shift_y=0.0).crop_box(Size(1000, 400), Size(500, 400)) == (250, 0, 750, 400)

    def test_crop_box_rounds_fractional_shift(self):
        assert CropOffset(shift_x=-10.6, shift_y=-3.2).crop_box(Size(200, 100), Size(100, 50)) == (11, 3, 111, 53)

    def test_crop_box_stays_inside_scaled_image(self):
        # Shift and width both round up past the right edge
        box = CropOffset(shift_x=-101.5).crop_box(Size(201, 100), Size(99.5, 100))

        assert box == (101, 0, 201, 100)


@pytest.mark.unit
class TestFocusPoint:
    """Tests for FocusPoint."""

    def test_defaults_to_center(self):
        assert FocusPoint() == FocusPoint(50, 50)

    def test_bounded(self):
        assert FocusPoint(-5, 120).bounded() == FocusPoint(0, 100)
