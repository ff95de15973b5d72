"""Pixel classification for colour-coded unit plans."""

import math
from typing import Dict, List, Tuple

import numpy as np

from .models import IGNORE_CODE, LABEL_CODES, OTHER_CODE


# RGB samples of the fills used on the annotated unit plans.
# "other" is the generic bucket for greys, corridors and hatching.
COLOR_PROFILES: Dict[str, List[Tuple[int, int, int]]] = {
    "living": [(206, 143, 82), (195, 131, 70), (220, 160, 98)],
    "bedroom": [(234, 211, 170), (224, 198, 150), (235, 203, 145)],
    "balcony": [(241, 233, 207), (230, 222, 195), (217, 212, 188)],
    "kitchen": [(186, 206, 150), (170, 194, 132)],
    "utility": [(60, 180, 170), (135, 182, 172)],
    "loggia": [(236, 190, 176), (224, 176, 162)],
    "foyer": [(200, 170, 210), (186, 154, 198)],
    "core": [(80, 110, 210), (64, 96, 196)],
    "other": [(193, 207, 220), (170, 182, 194), (158, 158, 158), (208, 208, 208)],
}

MAX_BRIGHTNESS = 245
MIN_BRIGHTNESS = 25
NEAR_BLACK = 45
MAX_SAMPLE_DISTANCE = 90

_SAMPLES = np.array(
    [sample for samples in COLOR_PROFILES.values() for sample in samples],
    dtype=np.int32,
)
_SAMPLE_CODES = np.array(
    [LABEL_CODES[name] for name, samples in COLOR_PROFILES.items() for _ in samples],
    dtype=np.uint8,
)


def classify_color(r: int, g: int, b: int) -> str:
    """Classify a single RGB triple into a pixel label.

    Args:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)

    Returns:
        Pixel label name
    """
    brightness = (r + g + b) / 3
    if brightness > MAX_BRIGHTNESS or brightness < MIN_BRIGHTNESS:
        return "ignore"
    if r < NEAR_BLACK and g < NEAR_BLACK and b < NEAR_BLACK:
        return "ignore"

    best_type = "other"
    best_distance = math.inf
    for label, samples in COLOR_PROFILES.items():
        for sr, sg, sb in samples:
            distance = math.sqrt((r - sr) ** 2 + (g - sg) ** 2 + (b - sb) ** 2)
            if distance < best_distance:
                best_distance = distance
                best_type = label

    if best_distance > MAX_SAMPLE_DISTANCE and best_type != "other":
        return "other"

    return best_type


def classify_pixels(image: np.ndarray, chunk_rows: int = 256) -> np.ndarray:
    """Classify every pixel of an RGB image.

    Rows are processed in chunks so the pixel-to-sample distance table
    stays small on large drawings.

    Args:
        image: Image in RGB format, shape (H, W, 3)
        chunk_rows: Number of rows classified per batch

    Returns:
        Label codes, shape (H, W), dtype uint8
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    height, width = image.shape[:2]
    labels = np.empty((height, width), dtype=np.uint8)

    for top in range(0, height, chunk_rows):
        block = image[top : top + chunk_rows].reshape(-1, 3).astype(np.int32)

        # Squared distances against every sample; argmin keeps the first
        # minimum, which matches palette order.
        diff = block[:, None, :] - _SAMPLES[None, :, :]
        dist2 = np.einsum("psc,psc->ps", diff, diff)
        nearest = np.argmin(dist2, axis=1)
        codes = _SAMPLE_CODES[nearest].copy()

        too_far = dist2[np.arange(len(block)), nearest] > MAX_SAMPLE_DISTANCE**2
        codes[too_far] = OTHER_CODE

        total = block.sum(axis=1)
        ignored = (total > 3 * MAX_BRIGHTNESS) | (total < 3 * MIN_BRIGHTNESS)
        ignored |= np.all(block < NEAR_BLACK, axis=1)
        codes[ignored] = IGNORE_CODE

        labels[top : top + chunk_rows] = codes.reshape(-1, width)

    return labels
