#!/usr/bin/env python3
"""CLI script for digitizing colour-coded floor plan images."""

import argparse
import json
import sys
from contextlib import redirect_stdout
from pathlib import Path

import cv2

from floor_plan_digitizer import DigitizerParams, FloorPlanDigitizer
from floor_plan_digitizer.errors import FloorPlanError
from floor_plan_digitizer.imaging import OpenCVImageDecoder, read_source
from floor_plan_digitizer.reporting import generate_room_report
from floor_plan_digitizer.visualization import draw_room_overlay


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Extract typed room rectangles in millimetres from a floor plan image"
    )
    parser.add_argument(
        "image",
        type=str,
        help="Path to floor plan image",
    )
    parser.add_argument(
        "--min-region-pixels",
        type=int,
        default=1500,
        help="Smallest region kept, in pixels (default: 1500)",
    )
    parser.add_argument(
        "--whitelist",
        type=str,
        default="0123456789",
        help="Characters OCR may recognise (default: digits)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Write the JSON result to this file instead of stdout",
    )
    parser.add_argument(
        "--overlay",
        type=str,
        help="Save a debug image with the extracted rooms drawn on it",
    )
    parser.add_argument(
        "--no-ocr",
        action="store_true",
        help="Skip OCR and export pixel units",
    )

    args = parser.parse_args()

    if not Path(args.image).exists():
        print(f"❌ Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    params = DigitizerParams(
        min_region_pixels=args.min_region_pixels,
        ocr_whitelist=args.whitelist,
    )
    digitizer = FloorPlanDigitizer(
        params,
        ocr_engine_factory=(lambda: None) if args.no_ocr else None,
        verbose=True,
    )

    try:
        print(f"\n🏗️  Digitizing floor plan: {args.image}\n", file=sys.stderr)
        data = read_source(args.image)
        # Progress goes to stderr so stdout stays valid JSON
        with redirect_stdout(sys.stderr):
            plan = digitizer.digitize(data)
    except FloorPlanError as e:
        print(f"\n❌ Error during digitizing: {e}", file=sys.stderr)
        return 1

    print("\n" + generate_room_report(plan), file=sys.stderr)

    if args.overlay:
        image = OpenCVImageDecoder().decode(data)
        cv2.imwrite(args.overlay, draw_room_overlay(image, plan))
        print(f"   ✓ Overlay: {args.overlay}", file=sys.stderr)

    result = json.dumps(plan.to_json_dict(), indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(result, encoding="utf-8")
        print(f"\n✅ Result written to {args.output}\n", file=sys.stderr)
    else:
        print(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
