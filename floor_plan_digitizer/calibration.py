"""Scale calibration from recognised dimension labels."""

from typing import List, Optional, Sequence, Tuple

from .models import FootprintBounds, OcrToken, ScaleCalibration


def partition_tokens(
    tokens: Sequence[OcrToken],
    width: int,
    height: int,
    margin_ratio: float = 0.22,
) -> Tuple[List[int], List[int]]:
    """Split dimension tokens into horizontal and vertical spans.

    Plans carry overall widths along the top and bottom margins and
    overall heights along the left and right margins. Tokens in the
    interior of the drawing are room labels and are skipped.

    Args:
        tokens: Recognised numeric tokens
        width: Image width in pixels
        height: Image height in pixels
        margin_ratio: Share of each side treated as margin

    Returns:
        Tuple of (horizontal values, vertical values)
    """
    horizontal = []
    vertical = []

    for token in tokens:
        if token.center_y < height * margin_ratio or token.center_y > height * (1 - margin_ratio):
            horizontal.append(token.value)
        elif token.center_x < width * margin_ratio or token.center_x > width * (1 - margin_ratio):
            vertical.append(token.value)

    return horizontal, vertical


def _span_from_values(values: Sequence[int]) -> Optional[float]:
    # Tokens are positive, so the largest label is always usable and is
    # normally the overall dimension; sub-span labels are smaller than it.
    return float(max(values)) if values else None


def derive_scale(
    tokens: Sequence[OcrToken],
    width: int,
    height: int,
    margin_ratio: float = 0.22,
) -> Tuple[Optional[float], Optional[float]]:
    """Estimate the overall plan width and height in millimetres.

    Returns:
        Tuple of (width_mm, height_mm); either may be None
    """
    horizontal, vertical = partition_tokens(tokens, width, height, margin_ratio)
    return _span_from_values(horizontal), _span_from_values(vertical)


def calibrate(
    tokens: Sequence[OcrToken],
    image_size: Tuple[int, int],
    footprint: FootprintBounds,
    margin_ratio: float = 0.22,
) -> ScaleCalibration:
    """Derive millimetre-per-pixel factors for both axes.

    The vertical factor falls back to the horizontal one when no vertical
    labels were read, assuming square pixels.

    Args:
        tokens: Recognised numeric tokens
        image_size: (width, height) of the source image in pixels
        footprint: Bounds of the drawn plan in pixels
        margin_ratio: Share of each side treated as margin

    Returns:
        ScaleCalibration, with None factors when there is no OCR evidence
    """
    width, height = image_size
    width_mm, height_mm = derive_scale(tokens, width, height, margin_ratio)

    mm_per_pixel_x = width_mm / footprint.width if width_mm else None
    mm_per_pixel_y = height_mm / footprint.height if height_mm else mm_per_pixel_x

    return ScaleCalibration(
        width_mm=width_mm,
        height_mm=height_mm,
        mm_per_pixel_x=mm_per_pixel_x,
        mm_per_pixel_y=mm_per_pixel_y,
    )
