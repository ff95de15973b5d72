"""Floor plan digitizer: room polygons from plan images and unit outlines from room rectangles."""

from .digitizer import FloorPlanDigitizer, pic_to_json, pic_to_json_async
from .models import DigitizedPlan, DigitizerParams, FloorPlan, OutlinePoint, RoomPolygon
from .outline import build_unit_outline_from_plan

__version__ = "0.1.0"
__all__ = [
    "FloorPlanDigitizer",
    "DigitizedPlan",
    "DigitizerParams",
    "FloorPlan",
    "OutlinePoint",
    "RoomPolygon",
    "build_unit_outline_from_plan",
    "pic_to_json",
    "pic_to_json_async",
]
