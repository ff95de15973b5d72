"""Tests for room reports."""

import pytest

from floor_plan_digitizer.models import DigitizedPlan
from floor_plan_digitizer.reporting import generate_room_report, summarize_rooms_by_type


def make_plan(mm_per_pixel=None):
    scale = mm_per_pixel or 1
    rooms = [
        ("living", 4000, 5000),
        ("bedroom", 3000, 3000),
        ("bedroom", 3000, 2500),
    ]
    return DigitizedPlan.model_validate(
        {
            "meta": {
                "source": {"widthPixels": 200, "heightPixels": 150},
                "layoutBounds": {"minX": 0, "minY": 0, "maxX": 99, "maxY": 99, "width": 100, "height": 100},
                "widthMm": 10000 if mm_per_pixel else None,
                "mmPerPixelX": mm_per_pixel,
                "mmPerPixelY": mm_per_pixel,
            },
            "rooms": [
                {
                    "id": i,
                    "type": room_type,
                    "polygon": [[0, 0], [w * scale, 0], [w * scale, h * scale], [0, h * scale]],
                    "startCoordinate": [0, 0],
                    "endCoordinate": [w * scale, h * scale],
                    "areaMm2": w * h * scale * scale,
                }
                for i, (room_type, w, h) in enumerate(rooms)
            ],
        }
    )


def test_summarize_rooms_by_type():
    summary = summarize_rooms_by_type(make_plan(mm_per_pixel=1.0))

    assert summary["living"]["count"] == 1
    assert summary["living"]["area_m2"] == pytest.approx(20.0)
    assert summary["bedroom"]["count"] == 2
    assert summary["bedroom"]["area_m2"] == pytest.approx(9.0 + 7.5)


def test_generate_room_report_calibrated():
    report = generate_room_report(make_plan(mm_per_pixel=1.0))

    assert "FLOOR PLAN ROOMS" in report
    assert "TOTAL" in report
    assert "36.50 m²" in report
    # Largest room first
    assert report.index("living") < report.index("bedroom")


def test_generate_room_report_uncalibrated():
    report = generate_room_report(make_plan())

    assert "not calibrated" in report
    assert "m²" not in report
