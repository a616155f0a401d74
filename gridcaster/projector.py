"""
Scene projector: one ray per screen column across the field of view, with
fish-eye correction and the derived wall height and shade per column.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .config import FOV, MAX_SHADE
from .raycaster import cast_ray, normalize_angle

if TYPE_CHECKING:
    from .grid import Grid
    from .camera import CameraState


@dataclass(frozen=True)
class Projection:
    """Per-column results for one frame. Arrays have screen_width + 1 entries."""

    screen_width: int
    screen_height: int
    angles: np.ndarray
    # Raw euclidean distances (inf where the ray hit nothing)
    distances: np.ndarray
    # Distances projected onto the view direction
    corrected: np.ndarray
    heights: np.ndarray
    shades: np.ndarray

    def __len__(self) -> int:
        return len(self.distances)


def column_angles(heading: float, fov: float, screen_width: int) -> np.ndarray:
    """screen_width + 1 evenly spaced ray angles spanning heading -/+ fov/2."""
    offsets = np.linspace(-fov / 2.0, fov / 2.0, screen_width + 1)
    return np.array([normalize_angle(heading + off) for off in offsets])


def project_scene(
    grid: Grid,
    camera: CameraState,
    screen_width: int,
    screen_height: int,
    fov: float = FOV,
) -> Projection:
    """Cast every column for the given camera pose."""
    if screen_width < 1 or screen_height < 1:
        raise ValueError(
            f"screen size must be positive, got {screen_width}x{screen_height}"
        )
    # Read the pose once for the whole frame
    cam_x, cam_y, heading = camera.x, camera.y, camera.heading
    angles = column_angles(heading, fov, screen_width)
    distances = np.array(
        [cast_ray(grid, cam_x, cam_y, float(a)) for a in angles],
        dtype=np.float64,
    )
    hit = np.isfinite(distances)
    corrected = np.full_like(distances, math.inf)
    corrected[hit] = distances[hit] * np.cos(heading - angles[hit])

    heights = np.zeros_like(distances)
    visible = hit & (corrected > 0)
    heights[visible] = screen_height / corrected[visible]
    # A camera standing on a wall face sees it fill the column
    heights[hit & (corrected <= 0)] = math.inf

    shades = np.zeros_like(distances)
    shades[hit] = np.clip(
        (1.0 - corrected[hit] / grid.width) * MAX_SHADE, 0.0, MAX_SHADE
    )
    return Projection(
        screen_width=screen_width,
        screen_height=screen_height,
        angles=angles,
        distances=distances,
        corrected=corrected,
        heights=heights,
        shades=shades,
    )
