"""
Grid ray caster: steps a ray exactly from one grid line to the next and
reports the distance to the first solid cell it reaches.

Horizontal grid lines (integer y) and vertical grid lines (integer x) are
traced independently and the nearer of the two hits wins.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .grid import Grid

TWO_PI = math.pi * 2
# Distance reported when a ray leaves the grid without meeting a wall
NO_HIT = math.inf
# Shift applied to the sampled coordinate when stepping in the negative
# direction, so a point lying exactly on a grid line samples the cell
# beyond the line rather than the one just left behind.
BOUNDARY_EPSILON = 0.01


@dataclass(frozen=True)
class HitResult:
    """Outcome of one cast. distance is NO_HIT and hit_point None on a miss."""

    distance: float = NO_HIT
    hit_point: Optional[Tuple[float, float]] = None
    # "horizontal" or "vertical": the grid-line family the wall was found on
    side: Optional[str] = None

    @property
    def hit(self) -> bool:
        return self.hit_point is not None


MISS = HitResult()


def normalize_angle(angle: float) -> float:
    """Wrap any finite angle into [0, 2*pi)."""
    angle = math.fmod(angle, TWO_PI)
    if angle < 0:
        angle += TWO_PI
    # Tiny negative inputs round up to exactly 2*pi
    if angle >= TWO_PI:
        angle -= TWO_PI
    return angle


def _trace(
    grid: Grid,
    x: float,
    y: float,
    step_x: float,
    step_y: float,
    nudge_x: float,
    nudge_y: float,
) -> Optional[Tuple[float, float]]:
    """
    Walk successive grid-line intersections starting at (x, y).
    Returns the intersection at which a solid cell is found, or None once the
    walk leaves the grid.
    """
    while math.isfinite(x) and math.isfinite(y):
        cell_x = math.floor(x + nudge_x)
        cell_y = math.floor(y + nudge_y)
        if not grid.contains(cell_x, cell_y):
            return None
        if grid.is_solid(cell_x, cell_y):
            return x, y
        x += step_x
        y += step_y
    # Near-axis rays overflow to infinity instead of leaving the grid
    return None


def _horizontal_hit(
    grid: Grid, origin_x: float, origin_y: float, tan_a: float, facing_up: bool
) -> Optional[Tuple[float, float]]:
    # A perfectly horizontal ray never crosses a horizontal grid line
    if tan_a == 0:
        return None
    if facing_up:
        start_y = math.floor(origin_y)
        step_x = -1 / tan_a
        step_y = -1
    else:
        start_y = math.floor(origin_y) + 1
        step_x = 1 / tan_a
        step_y = 1
    start_x = origin_x + (origin_y - start_y) / -tan_a
    nudge_y = -BOUNDARY_EPSILON if facing_up else 0.0
    return _trace(grid, start_x, start_y, step_x, step_y, 0.0, nudge_y)


def _vertical_hit(
    grid: Grid, origin_x: float, origin_y: float, tan_a: float, facing_left: bool
) -> Optional[Tuple[float, float]]:
    if facing_left:
        start_x = math.floor(origin_x)
        step_x = -1
        step_y = -tan_a
    else:
        start_x = math.floor(origin_x) + 1
        step_x = 1
        step_y = tan_a
    start_y = origin_y + (origin_x - start_x) * -tan_a
    nudge_x = -BOUNDARY_EPSILON if facing_left else 0.0
    return _trace(grid, start_x, start_y, step_x, step_y, nudge_x, 0.0)


def cast_ray_hit(
    grid: Grid, origin_x: float, origin_y: float, angle: float
) -> HitResult:
    """
    Cast a ray from (origin_x, origin_y) at angle (radians, y axis pointing
    down the rows) and return the nearest wall hit.
    Never raises: rays that leave the grid, and non-finite inputs, give MISS.
    """
    if not (
        math.isfinite(origin_x)
        and math.isfinite(origin_y)
        and math.isfinite(angle)
    ):
        return MISS
    angle = normalize_angle(angle)
    facing_up = angle > math.pi
    facing_left = math.pi / 2 < angle < math.pi * 1.5
    tan_a = math.tan(angle)

    best = MISS
    for side, point in (
        ("horizontal", _horizontal_hit(grid, origin_x, origin_y, tan_a, facing_up)),
        ("vertical", _vertical_hit(grid, origin_x, origin_y, tan_a, facing_left)),
    ):
        if point is None:
            continue
        distance = math.hypot(point[0] - origin_x, point[1] - origin_y)
        # Strict comparison: on an exact tie the horizontal hit is kept
        if distance < best.distance:
            best = HitResult(distance, point, side)
    return best


def cast_ray(grid: Grid, origin_x: float, origin_y: float, angle: float) -> float:
    """Distance from the origin to the nearest wall along angle, or NO_HIT."""
    return cast_ray_hit(grid, origin_x, origin_y, angle).distance
