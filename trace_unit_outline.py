#!/usr/bin/env python3
"""CLI script for tracing the outer outline of a unit plan."""

import argparse
import json
import sys
from pathlib import Path

from floor_plan_digitizer.geometry import compute_convex_hull, place_mirrored_pair, polygon_area
from floor_plan_digitizer.outline import trace_unit_outline
from floor_plan_digitizer.samples import SAMPLE_FLOOR_PLAN


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Trace the outline polygon of a unit from its room rectangles"
    )
    parser.add_argument(
        "plan",
        type=str,
        nargs="?",
        help="Plan JSON with overallDimensions and spaces (default: built-in sample)",
    )
    parser.add_argument(
        "--mirrored-hull",
        action="store_true",
        help="Also print the convex hull of the unit placed next to its mirror image",
    )
    parser.add_argument(
        "--gap",
        type=float,
        default=400.0,
        help="Gap between mirrored units in plan units (default: 400)",
    )

    args = parser.parse_args()

    if args.plan:
        path = Path(args.plan)
        if not path.exists():
            print(f"❌ Error: Plan file not found: {args.plan}", file=sys.stderr)
            return 1
        try:
            plan = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            print(f"❌ Error: Invalid plan JSON: {e}", file=sys.stderr)
            return 1
        # Accept both a bare plan and {"floorPlan": {...}}
        if isinstance(plan, dict) and "floorPlan" in plan:
            plan = plan["floorPlan"]
    else:
        plan = SAMPLE_FLOOR_PLAN

    trace = trace_unit_outline(plan)
    if not trace.points:
        print("❌ Error: Plan has no usable overallDimensions", file=sys.stderr)
        return 1

    status = "fallback" if trace.fallback else "traced"
    print(
        f"📐 Outline {status}: {len(trace.points)} points, "
        f"area {polygon_area(trace.points):.0f}",
        file=sys.stderr,
    )

    result = {"outline": [point._asdict() for point in trace.points]}
    if args.mirrored_hull:
        hull = compute_convex_hull(place_mirrored_pair(trace.points, args.gap))
        result["mirroredHull"] = [{"x": x, "z": z} for x, z in hull]

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
