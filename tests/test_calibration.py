"""Tests for scale calibration from dimension labels."""

import pytest

from floor_plan_digitizer.calibration import calibrate, derive_scale, partition_tokens
from floor_plan_digitizer.models import FootprintBounds, OcrToken, TokenBox


def token(value, cx, cy):
    return OcrToken(
        value=value,
        bbox=TokenBox(x0=cx - 10, x1=cx + 10, y0=cy - 5, y1=cy + 5),
        center_x=cx,
        center_y=cy,
    )


FOOTPRINT = FootprintBounds.from_extent(min_x=100, min_y=200, max_x=999, max_y=799)  # 900 x 600


def test_partition_tokens_by_margin():
    """Test that tokens are split by which margin they sit in."""
    tokens = [
        token(9000, 500, 50),  # top
        token(4500, 500, 950),  # bottom
        token(6000, 50, 500),  # left
        token(3000, 950, 500),  # right
        token(1234, 500, 500),  # interior room label
        token(777, 50, 50),  # corner counts as horizontal
    ]

    horizontal, vertical = partition_tokens(tokens, width=1000, height=1000)

    assert horizontal == [9000, 4500, 777]
    assert vertical == [6000, 3000]


def test_partition_tokens_custom_margin():
    tokens = [token(9000, 500, 150)]

    assert partition_tokens(tokens, 1000, 1000, margin_ratio=0.22) == ([9000], [])
    assert partition_tokens(tokens, 1000, 1000, margin_ratio=0.1) == ([], [])


def test_derive_scale_uses_largest_value():
    """Test that the largest label per axis is the overall span."""
    tokens = [token(3000, 300, 40), token(9000, 500, 40), token(6000, 40, 500)]

    assert derive_scale(tokens, 1000, 1000) == (9000.0, 6000.0)


def test_derive_scale_with_sub_span_labels_only():
    """Test that sub-span labels are not summed; the largest one wins."""
    tokens = [token(3000, 200, 40), token(4000, 500, 40), token(2500, 800, 960)]

    assert derive_scale(tokens, 1000, 1000) == (4000.0, None)


def test_derive_scale_without_tokens():
    assert derive_scale([], 1000, 1000) == (None, None)


def test_calibrate_both_axes():
    """Test mm-per-pixel factors for both axes."""
    tokens = [token(9000, 500, 40), token(12000, 40, 500)]

    calibration = calibrate(tokens, (1000, 1000), FOOTPRINT)

    assert calibration.width_mm == 9000.0
    assert calibration.height_mm == 12000.0
    assert calibration.mm_per_pixel_x == pytest.approx(10.0)
    assert calibration.mm_per_pixel_y == pytest.approx(20.0)
    assert calibration.is_calibrated


def test_calibrate_assumes_square_pixels_without_vertical_labels():
    """Test that the vertical factor defaults to the horizontal one."""
    tokens = [token(9000, 500, 40)]

    calibration = calibrate(tokens, (1000, 1000), FOOTPRINT)

    assert calibration.height_mm is None
    assert calibration.mm_per_pixel_x == pytest.approx(10.0)
    assert calibration.mm_per_pixel_y == pytest.approx(10.0)


def test_calibrate_vertical_only():
    tokens = [token(6000, 40, 500)]

    calibration = calibrate(tokens, (1000, 1000), FOOTPRINT)

    assert calibration.mm_per_pixel_x is None
    assert calibration.mm_per_pixel_y == pytest.approx(10.0)


def test_calibrate_without_evidence():
    """Test that no OCR evidence gives null factors."""
    calibration = calibrate([token(5000, 500, 500)], (1000, 1000), FOOTPRINT)

    assert calibration.width_mm is None
    assert calibration.height_mm is None
    assert calibration.mm_per_pixel_x is None
    assert calibration.mm_per_pixel_y is None
    assert not calibration.is_calibrated
