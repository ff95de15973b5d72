"""Debug overlays for digitized plans."""

import cv2
import numpy as np

from .models import DigitizedPlan

# BGR outline colours per room type
TYPE_COLORS = {
    "living": (40, 100, 200),
    "bedroom": (60, 160, 230),
    "balcony": (150, 180, 190),
    "kitchen": (80, 170, 90),
    "utility": (150, 150, 40),
    "loggia": (120, 110, 220),
    "foyer": (190, 110, 160),
    "core": (90, 70, 70),
    "other": (128, 128, 128),
}


def draw_room_overlay(image: np.ndarray, plan: DigitizedPlan) -> np.ndarray:
    """Draw room rectangles and labels over the source image.

    Args:
        image: Source image in RGB format
        plan: Digitized plan of that image

    Returns:
        Visualization image in BGR format
    """
    vis = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)

    bounds = plan.meta.layout_bounds
    cv2.rectangle(vis, (bounds.min_x, bounds.min_y), (bounds.max_x, bounds.max_y), (0, 0, 255), 1)

    for room in plan.rooms:
        if room.pixel_bounds is None:
            continue
        b = room.pixel_bounds
        color = TYPE_COLORS.get(room.type, (0, 0, 0))
        cv2.rectangle(vis, (b.min_x, b.min_y), (b.max_x, b.max_y), color, 2)

        label = f"{room.type} #{room.id}"
        org = (b.min_x + 4, b.min_y + 16)
        cv2.putText(vis, label, org, cv2.FONT_HERSHEY_SIMPLEX, 0.45, (0, 0, 0), 2)
        cv2.putText(vis, label, org, cv2.FONT_HERSHEY_SIMPLEX, 0.45, (255, 255, 255), 1)

    return vis
