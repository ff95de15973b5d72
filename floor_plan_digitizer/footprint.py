"""Locating the drawn floor plan inside the image canvas."""

import numpy as np

from .errors import FootprintNotFound
from .models import IGNORE_CODE, OTHER_CODE, FootprintBounds


def footprint_mask(labels: np.ndarray) -> np.ndarray:
    """Mask of pixels that belong to a recognised room palette."""
    return (labels != IGNORE_CODE) & (labels != OTHER_CODE)


def locate_footprint(labels: np.ndarray) -> FootprintBounds:
    """Find the bounding box of all meaningfully classified pixels.

    Background, walls and generic "other" fills are excluded, so the box
    hugs the coloured rooms rather than the raw canvas.

    Args:
        labels: Classified label codes, shape (H, W)

    Returns:
        FootprintBounds of the coloured rooms

    Raises:
        FootprintNotFound: If no pixel carries a room label
    """
    mask = footprint_mask(labels)

    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))
    if rows.size == 0 or cols.size == 0:
        height, width = labels.shape[:2]
        raise FootprintNotFound(
            f"Unable to locate floor plan footprint: no footprint found in {width}x{height} image"
        )

    return FootprintBounds.from_extent(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1]),
    )
