"""Region extraction by iterative flood fill over classified pixels."""

from typing import List

import numpy as np

from .models import IGNORE_CODE, PixelBounds, Region, label_name


def extract_regions(labels: np.ndarray, min_region_pixels: int = 1500) -> List[Region]:
    """Split classified pixels into 4-connected same-label regions.

    The fill uses a visited array and an explicit stack, both preallocated
    to the pixel count, so large drawings never hit recursion limits.
    Components smaller than ``min_region_pixels`` are dropped but keep
    their pixels marked, so nothing is visited twice.

    Args:
        labels: Classified label codes, shape (H, W)
        min_region_pixels: Minimum pixel count for a region to be kept

    Returns:
        Regions in raster order of their first pixel
    """
    height, width = labels.shape[:2]
    flat = labels.ravel()
    size = width * height

    visited = np.full(size, -1, dtype=np.int32)
    stack = np.empty(size, dtype=np.int32)

    regions = []
    region_id = 0

    for start in np.flatnonzero(flat != IGNORE_CODE):
        if visited[start] != -1:
            continue

        base = flat[start]
        visited[start] = region_id
        stack[0] = start
        stack_size = 1

        area = 0
        start_y, start_x = divmod(int(start), width)
        min_x = max_x = start_x
        min_y = max_y = start_y

        while stack_size > 0:
            stack_size -= 1
            idx = int(stack[stack_size])
            y, x = divmod(idx, width)
            area += 1

            if x < min_x:
                min_x = x
            elif x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            elif y > max_y:
                max_y = y

            # Right, left, down, up
            if x + 1 < width:
                n = idx + 1
                if visited[n] == -1 and flat[n] == base:
                    visited[n] = region_id
                    stack[stack_size] = n
                    stack_size += 1
            if x > 0:
                n = idx - 1
                if visited[n] == -1 and flat[n] == base:
                    visited[n] = region_id
                    stack[stack_size] = n
                    stack_size += 1
            if y + 1 < height:
                n = idx + width
                if visited[n] == -1 and flat[n] == base:
                    visited[n] = region_id
                    stack[stack_size] = n
                    stack_size += 1
            if y > 0:
                n = idx - width
                if visited[n] == -1 and flat[n] == base:
                    visited[n] = region_id
                    stack[stack_size] = n
                    stack_size += 1

        if area >= min_region_pixels:
            regions.append(
                Region(
                    id=region_id,
                    type=label_name(base),
                    bounds=PixelBounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y),
                    area_pixels=area,
                )
            )
        region_id += 1

    return regions
