"""
Vertex builders for the first-person view and the minimap.

Everything is built in window pixel space (origin top-left, y down, the same
orientation as the grid rows) as float32 rows of (x, y, r, g, b) with colour
channels in [0, 1], and converted with to_ndc() just before upload.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

import numpy as np

from .config import (
    MAP_BACKGROUND_COLOR,
    MAP_GRID_COLOR,
    MAP_WALL_COLOR,
    MAP_CAMERA_COLOR,
    MAP_FOV_COLOR,
    MAP_CAMERA_SEGMENTS,
)

if TYPE_CHECKING:
    from .grid import Grid
    from .camera import CameraState
    from .projector import Projection

VERTEX_FLOATS = 5

Color = Sequence[float]


def empty() -> np.ndarray:
    return np.zeros((0, VERTEX_FLOATS), dtype=np.float32)


def _rgb(color: Color) -> list:
    return [c / 255.0 for c in color]


def rect(x0: float, y0: float, x1: float, y1: float, color: Color) -> np.ndarray:
    """Two triangles covering the axis-aligned rectangle (x0, y0)-(x1, y1)."""
    r, g, b = _rgb(color)
    return np.array(
        [
            [x0, y0, r, g, b],
            [x1, y0, r, g, b],
            [x1, y1, r, g, b],
            [x1, y1, r, g, b],
            [x0, y1, r, g, b],
            [x0, y0, r, g, b],
        ],
        dtype=np.float32,
    )


def line(x0: float, y0: float, x1: float, y1: float, color: Color) -> np.ndarray:
    r, g, b = _rgb(color)
    return np.array(
        [[x0, y0, r, g, b], [x1, y1, r, g, b]],
        dtype=np.float32,
    )


def ellipse(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
    segments: int = MAP_CAMERA_SEGMENTS,
) -> np.ndarray:
    """Filled ellipse as a fan of triangles around its centre."""
    r, g, b = _rgb(color)
    theta = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    xs = cx + rx * np.cos(theta)
    ys = cy + ry * np.sin(theta)
    verts = np.empty((segments * 3, VERTEX_FLOATS), dtype=np.float32)
    verts[0::3, 0] = cx
    verts[0::3, 1] = cy
    verts[1::3, 0] = xs[:-1]
    verts[1::3, 1] = ys[:-1]
    verts[2::3, 0] = xs[1:]
    verts[2::3, 1] = ys[1:]
    verts[:, 2:] = (r, g, b)
    return verts


def to_ndc(verts: np.ndarray, surface_w: int, surface_h: int) -> np.ndarray:
    """Map pixel coordinates to normalised device coordinates (y up)."""
    out = np.array(verts, dtype=np.float32, copy=True)
    out[:, 0] = out[:, 0] / surface_w * 2.0 - 1.0
    out[:, 1] = 1.0 - out[:, 1] / surface_h * 2.0
    return out


def view_columns(projection: Projection) -> np.ndarray:
    """
    One vertically centred, one-pixel-wide slice per column that hit a wall,
    clipped to the view and shaded grey by the column's shade.
    """
    view_h = projection.screen_height
    slices = []
    for i, (height, shade) in enumerate(
        zip(projection.heights, projection.shades)
    ):
        if not height > 0:
            continue
        h = min(float(height), float(view_h))
        top = (view_h - h) / 2.0
        slices.append(rect(i, top, i + 1, top + h, (shade, shade, shade)))
    if not slices:
        return empty()
    return np.vstack(slices)


@dataclass(frozen=True)
class MinimapLayout:
    """Placement of the minimap in window pixels."""

    left: float
    width: float
    height: float
    grid_width: int
    grid_height: int

    @property
    def cell_w(self) -> float:
        return self.width / self.grid_width

    @property
    def cell_h(self) -> float:
        return self.height / self.grid_height

    def to_pixels(self, x: float, y: float) -> tuple:
        """Grid coordinates to window pixels."""
        return self.left + x * self.cell_w, y * self.cell_h


def minimap_layout(grid: Grid, left: float, height: float) -> MinimapLayout:
    """Minimap of the given height, as wide as the grid's aspect requires."""
    width = height / grid.height * grid.width
    return MinimapLayout(left, width, height, grid.width, grid.height)


def minimap_background(layout: MinimapLayout) -> np.ndarray:
    return rect(
        layout.left,
        0.0,
        layout.left + layout.width,
        layout.height,
        MAP_BACKGROUND_COLOR,
    )


def minimap_grid_lines(layout: MinimapLayout) -> np.ndarray:
    lines = []
    for x in range(layout.grid_width + 1):
        real_x = layout.left + round(x * layout.cell_w)
        lines.append(line(real_x, 0.0, real_x, layout.height, MAP_GRID_COLOR))
    for y in range(layout.grid_height + 1):
        real_y = round(y * layout.cell_h)
        lines.append(
            line(
                layout.left,
                real_y,
                layout.left + layout.width,
                real_y,
                MAP_GRID_COLOR,
            )
        )
    return np.vstack(lines)


def minimap_walls(grid: Grid, layout: MinimapLayout) -> np.ndarray:
    """Solid cells, inset by one pixel so the grid lines stay visible."""
    walls = []
    for x, y in grid.solid_cells():
        x0, y0 = layout.to_pixels(x, y)
        walls.append(
            rect(
                x0 + 1,
                y0 + 1,
                x0 + layout.cell_w - 1,
                y0 + layout.cell_h - 1,
                MAP_WALL_COLOR,
            )
        )
    if not walls:
        return empty()
    return np.vstack(walls)


def minimap_camera(camera: CameraState, layout: MinimapLayout) -> np.ndarray:
    cx, cy = layout.to_pixels(camera.x, camera.y)
    return ellipse(
        cx, cy, layout.cell_w / 4.0, layout.cell_h / 4.0, MAP_CAMERA_COLOR
    )


def minimap_fov_lines(
    camera: CameraState, fov: float, layout: MinimapLayout
) -> np.ndarray:
    """Two rays from the camera marking the edges of the field of view."""
    cx, cy = layout.to_pixels(camera.x, camera.y)
    reach = max(layout.width, layout.height)
    lines = []
    for edge in (camera.heading + fov / 2.0, camera.heading - fov / 2.0):
        tx = cx + math.cos(edge) * reach
        ty = cy + math.sin(edge) * reach
        lines.append(line(cx, cy, tx, ty, MAP_FOV_COLOR))
    return np.vstack(lines)
