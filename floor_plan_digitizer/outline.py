"""Outer outline of a unit traced from its rectangular spaces.

The spaces are snapped onto a compressed grid built from their own edge
coordinates. Occupied cells toggle their four edges in an edge set, so an
edge shared by two occupied cells cancels out and only the outer boundary
survives. A turn-preference walk then orders the surviving edges into a
single polygon.
"""

import math
import sys
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

import numpy as np
from pydantic import ValidationError
from scipy import ndimage

from .models import FloorPlan, OutlinePoint, OverallDimensions, RectSpace

Point = Tuple[float, float]
EdgeKey = Tuple[float, float, float, float]
Rect = Tuple[float, float, float, float]  # min_x, max_x, min_y, max_y

# Walk directions; y grows downward as on the drawing.
EAST, SOUTH, WEST, NORTH = 0, 1, 2, 3

# Direction offsets tried at every vertex, preferred first:
# turn, straight on, opposite turn, reverse.
TURN_PREFERENCE = (3, 0, 1, 2)


@dataclass
class CompressedGrid:
    """Distinct cut lines of all rectangles and the plan bounds."""

    xs: List[float]
    ys: List[float]
    x_index: Dict[float, int]
    y_index: Dict[float, int]

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.xs) - 1, len(self.ys) - 1


@dataclass
class BoundaryWalk:
    """Vertices visited by the walk and whether it returned to the start."""

    points: List[Point]
    closed: bool
    used_edges: int = 0


@dataclass
class OutlineTrace:
    """Traced outline plus how it was obtained."""

    points: List[OutlinePoint]
    fallback: bool = False
    reason: str = ""


class _Step(NamedTuple):
    point: Point
    key: EdgeKey
    direction: int


def compress_coordinates(rects: Iterable[Rect], width: float, height: float) -> CompressedGrid:
    """Collect sorted, de-duplicated cut lines from rectangles and plan bounds.

    Args:
        rects: (min_x, max_x, min_y, max_y) rectangles
        width: Plan width
        height: Plan height

    Returns:
        CompressedGrid with coordinate-to-index maps
    """
    x_set = {0.0, float(width)}
    y_set = {0.0, float(height)}
    for min_x, max_x, min_y, max_y in rects:
        x_set.update((min_x, max_x))
        y_set.update((min_y, max_y))

    xs = sorted(x_set)
    ys = sorted(y_set)
    return CompressedGrid(
        xs=xs,
        ys=ys,
        x_index={value: i for i, value in enumerate(xs)},
        y_index={value: i for i, value in enumerate(ys)},
    )


def build_occupancy(rects: Iterable[Rect], grid: CompressedGrid) -> np.ndarray:
    """Mark compressed cells covered by any rectangle.

    Returns:
        Boolean array indexed [x_cell, y_cell]
    """
    occupied = np.zeros(grid.shape, dtype=bool)
    for min_x, max_x, min_y, max_y in rects:
        occupied[
            grid.x_index[min_x] : grid.x_index[max_x],
            grid.y_index[min_y] : grid.y_index[max_y],
        ] = True
    return occupied


def fill_column_gaps(occupied: np.ndarray) -> np.ndarray:
    """Fill each column between its first and last occupied cell.

    Hallways and other circulation space are rarely declared as spaces but
    sit inside the unit boundary; column filling absorbs them.
    """
    filled = occupied.copy()
    for column in range(filled.shape[0]):
        rows = np.flatnonzero(filled[column])
        if rows.size:
            filled[column, rows[0] : rows[-1] + 1] = True
    return filled


def is_simply_connected(occupied: np.ndarray) -> bool:
    """Check the occupied cells form one component without holes."""
    _, components = ndimage.label(occupied)
    if components != 1:
        return False

    # Cells are 4-connected, so the complement is 8-connected. The padding
    # joins everything outside the shape into one background component.
    background = np.pad(~occupied, 1, constant_values=True)
    _, background_components = ndimage.label(background, structure=np.ones((3, 3)))
    return background_components == 1


def edge_key(start: Point, end: Point) -> EdgeKey:
    """Order-independent key of an edge."""
    if start <= end:
        return start + end
    return end + start


def boundary_edges(occupied: np.ndarray, grid: CompressedGrid) -> Dict[EdgeKey, Tuple[Point, Point]]:
    """Toggle the four edges of every occupied cell.

    An edge shared by two occupied cells is added then removed, so the
    edges left are the ones on the boundary of the occupied area.

    Returns:
        Mapping of edge key to its (start, end) points
    """
    edges: Dict[EdgeKey, Tuple[Point, Point]] = {}

    def toggle(start: Point, end: Point) -> None:
        key = edge_key(start, end)
        if key in edges:
            del edges[key]
        else:
            edges[key] = (start, end)

    for xi, yi in np.argwhere(occupied):
        x0, x1 = grid.xs[xi], grid.xs[xi + 1]
        y0, y1 = grid.ys[yi], grid.ys[yi + 1]

        toggle((x0, y0), (x1, y0))  # top
        toggle((x1, y0), (x1, y1))  # right
        toggle((x1, y1), (x0, y1))  # bottom
        toggle((x0, y1), (x0, y0))  # left

    return edges


def direction_index(dx: float, dy: float) -> int:
    if abs(dx) > abs(dy):
        return EAST if dx > 0 else WEST
    if dy != 0:
        return SOUTH if dy > 0 else NORTH
    return EAST


def walk_boundary(edges: Mapping[EdgeKey, Tuple[Point, Point]]) -> BoundaryWalk:
    """Order boundary edges into a polygon by a turn-preference walk.

    The walk starts at the smallest (x, y) vertex, which is always a
    corner with one edge heading east and one heading south, and pretends
    it arrived heading south so the first step goes east.
    """
    adjacency: Dict[Point, List[_Step]] = {}
    for key, (start, end) in edges.items():
        adjacency.setdefault(start, []).append(
            _Step(end, key, direction_index(end[0] - start[0], end[1] - start[1]))
        )
        adjacency.setdefault(end, []).append(
            _Step(start, key, direction_index(start[0] - end[0], start[1] - end[1]))
        )

    if not adjacency:
        return BoundaryWalk(points=[], closed=False)

    start = min(adjacency)
    points = [start]
    used = set()
    current = start
    heading = SOUTH
    closed = False

    for _ in range(len(edges)):
        step = None
        for offset in TURN_PREFERENCE:
            wanted = (heading + offset) % 4
            step = next(
                (s for s in adjacency[current] if s.key not in used and s.direction == wanted),
                None,
            )
            if step is not None:
                break

        if step is None:
            break

        used.add(step.key)
        heading = step.direction
        current = step.point
        if current == start:
            closed = True
            break
        points.append(current)

    return BoundaryWalk(points=points, closed=closed, used_edges=len(used))


def drop_collinear(points: List[Point]) -> List[Point]:
    """Remove vertices that only continue a straight axis-aligned run."""
    if len(points) < 3:
        return list(points)

    corners = []
    for i, (x, y) in enumerate(points):
        px, py = points[i - 1]
        nx, ny = points[(i + 1) % len(points)]
        if (px == x == nx) or (py == y == ny):
            continue
        corners.append((x, y))
    return corners


def plan_rectangle(width: float, height: float) -> List[OutlinePoint]:
    """The full plan bounds as a centred 4-point outline."""
    half_width = width / 2
    half_height = height / 2
    return [
        OutlinePoint(-half_width, -half_height),
        OutlinePoint(half_width, -half_height),
        OutlinePoint(half_width, half_height),
        OutlinePoint(-half_width, half_height),
    ]


def trace_outline(rects: List[Rect], width: float, height: float) -> OutlineTrace:
    """Trace the outer boundary of the union of rectangles.

    Args:
        rects: (min_x, max_x, min_y, max_y) rectangles in plan coordinates
        width: Plan width
        height: Plan height

    Returns:
        OutlineTrace with plan-centred points; falls back to the full plan
        rectangle when the rectangles cannot be traced as one simple shape
    """
    if not rects:
        return OutlineTrace(plan_rectangle(width, height), fallback=True, reason="no spaces")

    grid = compress_coordinates(rects, width, height)
    occupied = fill_column_gaps(build_occupancy(rects, grid))

    if not occupied.any():
        return OutlineTrace(plan_rectangle(width, height), fallback=True, reason="no occupied cells")

    if not is_simply_connected(occupied):
        return _fallback(width, height, "spaces do not form a single simply-connected shape")

    edges = boundary_edges(occupied, grid)
    walk = walk_boundary(edges)
    if not walk.closed or walk.used_edges != len(edges):
        return _fallback(width, height, "boundary walk did not close")

    corners = drop_collinear(walk.points)
    if len(corners) < 3:
        return _fallback(width, height, "fewer than 3 outline corners")

    half_width = width / 2
    half_height = height / 2
    points = [OutlinePoint(x - half_width, y - half_height) for x, y in corners]
    return OutlineTrace(points)


def _fallback(width: float, height: float, reason: str) -> OutlineTrace:
    print(f"⚠️  Outline tracing fell back to plan bounds: {reason}", file=sys.stderr)
    return OutlineTrace(plan_rectangle(width, height), fallback=True, reason=reason)


def _parse_dimensions(plan: Any) -> Optional[Tuple[float, float]]:
    if isinstance(plan, FloorPlan):
        dims = plan.overall_dimensions
    elif isinstance(plan, Mapping):
        raw = plan.get("overallDimensions", plan.get("overall_dimensions"))
        try:
            dims = OverallDimensions.model_validate(raw)
        except ValidationError:
            return None
    else:
        return None

    if not (math.isfinite(dims.width) and math.isfinite(dims.height)):
        return None
    return dims.width, dims.height


def _parse_spaces(plan: Any) -> List[Rect]:
    if isinstance(plan, FloorPlan):
        spaces: Iterable[Any] = plan.spaces
    else:
        raw = plan.get("spaces")
        spaces = raw if isinstance(raw, (list, tuple)) else []

    rects = []
    for space in spaces:
        if not isinstance(space, RectSpace):
            try:
                space = RectSpace.model_validate(space)
            except ValidationError:
                continue
        extent = space.extent
        if all(math.isfinite(value) for value in extent):
            rects.append(extent)
    return rects


def trace_unit_outline(plan: Union[FloorPlan, Mapping[str, Any], None]) -> OutlineTrace:
    """Trace a plan, reporting whether the fallback outline was used.

    Returns an empty trace when the plan has no usable overall dimensions.
    """
    dims = _parse_dimensions(plan)
    if dims is None:
        return OutlineTrace(points=[], fallback=True, reason="missing overall dimensions")

    width, height = dims
    return trace_outline(_parse_spaces(plan), width, height)


def build_unit_outline_from_plan(plan: Union[FloorPlan, Mapping[str, Any], None]) -> List[OutlinePoint]:
    """Ordered, plan-centred outline of a unit footprint.

    Args:
        plan: FloorPlan or its JSON form with ``overallDimensions`` and
            ``spaces`` (``startCoordinate`` / ``endCoordinate`` pairs)

    Returns:
        List of OutlinePoint(x, z); never raises
    """
    return trace_unit_outline(plan).points
