"""Tests for mapping regions to millimetre rectangles."""

import pytest

from floor_plan_digitizer.models import FootprintBounds, PixelBounds, Region, ScaleCalibration
from floor_plan_digitizer.polygons import polygon_from_bounds, region_to_room

FOOTPRINT = FootprintBounds.from_extent(min_x=20, min_y=30, max_x=179, max_y=119)


def make_region(min_x, min_y, max_x, max_y, region_type="living"):
    return Region(
        id=3,
        type=region_type,
        bounds=PixelBounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y),
        area_pixels=(max_x - min_x + 1) * (max_y - min_y + 1),
    )


def test_polygon_from_bounds_relative_to_footprint():
    """Test that polygons start at the footprint's top-left corner."""
    bounds = PixelBounds(min_x=20, min_y=30, max_x=99, max_y=119)

    polygon = polygon_from_bounds(bounds, 50.0, 100.0, FOOTPRINT)

    assert polygon == [(0.0, 0.0), (4000.0, 0.0), (4000.0, 9000.0), (0.0, 9000.0)]


def test_polygon_from_bounds_without_footprint():
    bounds = PixelBounds(min_x=2, min_y=3, max_x=4, max_y=5)

    assert polygon_from_bounds(bounds, 1, 1) == [(2, 3), (5, 3), (5, 6), (2, 6)]


def test_region_to_room_calibrated():
    """Test mm rectangle and bounding-box area of a calibrated room."""
    calibration = ScaleCalibration(mm_per_pixel_x=50.0, mm_per_pixel_y=100.0)

    room = region_to_room(make_region(100, 30, 179, 119, "bedroom"), calibration, FOOTPRINT)

    assert room.id == 3
    assert room.type == "bedroom"
    assert room.start_coordinate == (4000.0, 0.0)
    assert room.end_coordinate == (8000.0, 9000.0)
    assert room.area_mm2 == pytest.approx(4000.0 * 9000.0)
    assert room.polygon[0] == room.start_coordinate
    assert room.polygon[2] == room.end_coordinate


def test_region_to_room_uncalibrated_uses_pixels():
    """Test that missing calibration exports pixel units."""
    room = region_to_room(make_region(30, 40, 39, 44), ScaleCalibration(), FOOTPRINT)

    assert room.polygon == [(10, 10), (20, 10), (20, 15), (10, 15)]
    assert room.area_mm2 == 50


def test_region_area_uses_bounding_box_not_pixels():
    """Test that area is the bounding rectangle even for sparse regions."""
    region = Region(
        id=0,
        type="foyer",
        bounds=PixelBounds(min_x=20, min_y=30, max_x=29, max_y=39),
        area_pixels=19,  # e.g. an L-shaped blob
    )

    room = region_to_room(region, ScaleCalibration(mm_per_pixel_x=2.0, mm_per_pixel_y=2.0), FOOTPRINT)

    assert room.area_mm2 == pytest.approx(20.0 * 20.0)
