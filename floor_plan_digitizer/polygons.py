"""Mapping pixel regions to millimetre room rectangles."""

from typing import List, Optional, Tuple

from .models import FootprintBounds, PixelBounds, Region, RoomPolygon, ScaleCalibration


def polygon_from_bounds(
    bounds: PixelBounds,
    mm_per_px_x: float,
    mm_per_px_y: float,
    footprint: Optional[FootprintBounds] = None,
) -> List[Tuple[float, float]]:
    """Convert inclusive pixel bounds into a clockwise millimetre rectangle.

    Args:
        bounds: Region bounds in image pixels
        mm_per_px_x: Horizontal scale
        mm_per_px_y: Vertical scale
        footprint: Origin of the exported coordinates, image origin if None

    Returns:
        Four (x, y) points starting at the top-left corner
    """
    origin_x = footprint.min_x if footprint else 0
    origin_y = footprint.min_y if footprint else 0

    start_x = (bounds.min_x - origin_x) * mm_per_px_x
    end_x = (bounds.max_x - origin_x + 1) * mm_per_px_x
    start_y = (bounds.min_y - origin_y) * mm_per_px_y
    end_y = (bounds.max_y - origin_y + 1) * mm_per_px_y

    return [
        (start_x, start_y),
        (end_x, start_y),
        (end_x, end_y),
        (start_x, end_y),
    ]


def region_to_room(
    region: Region,
    calibration: ScaleCalibration,
    footprint: FootprintBounds,
) -> RoomPolygon:
    """Export a region as its bounding rectangle in millimetres.

    Without calibration the scale is 1, so coordinates stay in pixels.
    """
    scale_x = calibration.mm_per_pixel_x or 1
    scale_y = calibration.mm_per_pixel_y or 1

    polygon = polygon_from_bounds(region.bounds, scale_x, scale_y, footprint)

    width_mm = (region.bounds.max_x - region.bounds.min_x + 1) * scale_x
    height_mm = (region.bounds.max_y - region.bounds.min_y + 1) * scale_y

    return RoomPolygon(
        id=region.id,
        type=region.type,
        polygon=polygon,
        start_coordinate=polygon[0],
        end_coordinate=polygon[2],
        area_mm2=width_mm * height_mm,
        pixel_bounds=region.bounds,
    )
