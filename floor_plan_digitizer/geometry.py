"""Planar helpers for outline polygons."""

from typing import List, Sequence, Tuple

from .models import OutlinePoint

Point = Tuple[float, float]


def _cross(o: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def compute_convex_hull(points: Sequence[Point]) -> List[Point]:
    """Convex hull by Andrew's monotone chain.

    Args:
        points: (x, z) points

    Returns:
        Hull vertices without collinear points; inputs of three points or
        fewer are returned unchanged
    """
    if len(points) <= 3:
        return list(points)

    ordered = sorted(points, key=lambda p: (p[0], p[1]))

    lower: List[Point] = []
    for point in ordered:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], point) <= 0:
            lower.pop()
        lower.append(point)

    upper: List[Point] = []
    for point in reversed(ordered):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], point) <= 0:
            upper.pop()
        upper.append(point)

    return lower[:-1] + upper[:-1]


def polygon_area(points: Sequence[Point]) -> float:
    """Unsigned area by the shoelace formula."""
    total = 0.0
    for i, (x1, z1) in enumerate(points):
        x2, z2 = points[(i + 1) % len(points)]
        total += x1 * z2 - x2 * z1
    return abs(total) / 2


def _on_segment(point: Point, a: Point, b: Point, tolerance: float) -> bool:
    if abs(_cross(a, b, point)) > tolerance:
        return False
    return (
        min(a[0], b[0]) - tolerance <= point[0] <= max(a[0], b[0]) + tolerance
        and min(a[1], b[1]) - tolerance <= point[1] <= max(a[1], b[1]) + tolerance
    )


def point_in_polygon(point: Point, polygon: Sequence[Point], tolerance: float = 1e-9) -> bool:
    """Even-odd containment test; points on the boundary count as inside."""
    x, z = point
    inside = False
    for i, a in enumerate(polygon):
        b = polygon[(i + 1) % len(polygon)]
        if _on_segment(point, a, b, tolerance):
            return True
        if (a[1] > z) != (b[1] > z):
            crossing = a[0] + (z - a[1]) * (b[0] - a[0]) / (b[1] - a[1])
            if x < crossing:
                inside = not inside
    return inside


def mirror_outline(points: Sequence[Point]) -> List[OutlinePoint]:
    """Mirror an outline across the z axis, keeping its winding."""
    return [OutlinePoint(-x, z) for x, z in reversed(points)]


def place_mirrored_pair(points: Sequence[Point], gap: float = 0.0) -> List[OutlinePoint]:
    """Place a unit and its mirror image side by side.

    The unit goes left of the origin and its mirror right of it, with
    ``gap`` between them, as in a two-unit building core.

    Returns:
        Points of both placed outlines, unit first
    """
    if not points:
        return []

    xs = [x for x, _ in points]
    offset = (max(xs) - min(xs)) / 2 + gap / 2

    placed = [OutlinePoint(x - offset, z) for x, z in points]
    placed.extend(OutlinePoint(x + offset, z) for x, z in mirror_outline(points))
    return placed
