"""Room area summaries for digitized plans."""

from typing import Dict

from .models import DigitizedPlan

MM2_PER_M2 = 1_000_000.0


def summarize_rooms_by_type(plan: DigitizedPlan) -> Dict[str, Dict[str, float]]:
    """Count rooms and total their area per room type.

    Args:
        plan: Digitized plan

    Returns:
        Mapping of room type to {"count", "area_m2"}; areas are in square
        pixels / 1e6 when the plan is uncalibrated
    """
    summary: Dict[str, Dict[str, float]] = {}
    for room in plan.rooms:
        entry = summary.setdefault(room.type, {"count": 0, "area_m2": 0.0})
        entry["count"] += 1
        entry["area_m2"] += room.area_mm2 / MM2_PER_M2
    return summary


def generate_room_report(plan: DigitizedPlan) -> str:
    """Generate a formatted report of room areas.

    Args:
        plan: Digitized plan

    Returns:
        Formatted report string
    """
    meta = plan.meta
    calibrated = meta.mm_per_pixel_x is not None or meta.mm_per_pixel_y is not None
    unit = "m²" if calibrated else "Mpx²"

    report_lines = [
        "=" * 50,
        "FLOOR PLAN ROOMS",
        "=" * 50,
        "",
        f"Source: {meta.source.width_pixels}x{meta.source.height_pixels} px",
    ]
    if calibrated:
        report_lines.append(
            f"Plan size: {meta.width_mm or '?'} x {meta.height_mm or '?'} mm"
        )
    else:
        report_lines.append("Scale: not calibrated (pixel units)")

    report_lines.extend(["", "ROOMS:", "-" * 50])

    # Largest first
    total = 0.0
    for room in sorted(plan.rooms, key=lambda r: r.area_mm2, reverse=True):
        area = room.area_mm2 / MM2_PER_M2
        total += area
        report_lines.append(f"#{room.id:<5d} {room.type:12s}: {area:8.2f} {unit}")

    report_lines.extend(["", "-" * 50, f"{'TOTAL':19s}: {total:8.2f} {unit}", "=" * 50])

    return "\n".join(report_lines)
