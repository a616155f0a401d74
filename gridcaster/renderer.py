"""
OpenGL-based renderer: draws the shaded first-person view and the minimap
with a single flat-colour shader.
"""

from __future__ import annotations
import ctypes
import logging
from typing import TYPE_CHECKING

import numpy as np
import OpenGL.GL as gl  # noqa: N811

from .config import FOV
from .gl_utils import BufferTracker, ShaderProgram, setup_opengl
from . import shapes

if TYPE_CHECKING:
    from .grid import Grid
    from .camera import CameraState
    from .projector import Projection

logger = logging.getLogger(__name__)


def window_size(grid: Grid, view_width: int, view_height: int) -> tuple:
    """Pixel size of a window holding the view and the grid's minimap."""
    layout = shapes.minimap_layout(grid, view_width, view_height)
    return int(round(view_width + layout.width)), view_height


class Renderer:
    """Renders one frame: view columns on the left, minimap on the right."""

    def __init__(
        self,
        view_width: int,
        view_height: int,
        grid: Grid,
        fov: float = FOV,
    ) -> None:
        self.view_w = view_width
        self.view_h = view_height
        self.fov = fov
        self.layout = shapes.minimap_layout(grid, view_width, view_height)
        self.window_w, self.window_h = window_size(
            grid, view_width, view_height
        )
        setup_opengl(self.window_w, self.window_h)
        self.shader = ShaderProgram()
        self.pos_attr = self.shader.get_attrib("aPos")
        self.color_attr = self.shader.get_attrib("aColor")
        self._buffers = BufferTracker()
        self.vbo = self._buffers.create()
        # The minimap grid never changes, so its geometry is built once
        self._static_map = (
            shapes.minimap_background(self.layout),
            shapes.minimap_grid_lines(self.layout),
            shapes.minimap_walls(grid, self.layout),
        )
        logger.info(
            "Renderer ready: %dx%d window, %.0fpx minimap",
            self.window_w,
            self.window_h,
            self.layout.width,
        )

    def _draw(self, verts: np.ndarray, mode: int) -> None:
        if len(verts) == 0:
            return
        data = shapes.to_ndc(verts, self.window_w, self.window_h)
        stride = data.strides[0]
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, data.nbytes, data, gl.GL_DYNAMIC_DRAW
        )
        gl.glEnableVertexAttribArray(self.pos_attr)
        gl.glVertexAttribPointer(
            self.pos_attr, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(0)
        )
        gl.glEnableVertexAttribArray(self.color_attr)
        gl.glVertexAttribPointer(
            self.color_attr, 3, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(8)
        )
        gl.glDrawArrays(mode, 0, len(data))
        gl.glDisableVertexAttribArray(self.pos_attr)
        gl.glDisableVertexAttribArray(self.color_attr)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)

    def render(self, projection: Projection, camera: CameraState) -> None:
        """Draw the frame; the caller flips the display."""
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)
        background, grid_lines, walls = self._static_map
        with self.shader.in_use():
            self._draw(shapes.view_columns(projection), gl.GL_TRIANGLES)
            # Clip the minimap so the field-of-view lines stay inside it
            gl.glEnable(gl.GL_SCISSOR_TEST)
            gl.glScissor(
                self.view_w, 0, self.window_w - self.view_w, self.window_h
            )
            self._draw(background, gl.GL_TRIANGLES)
            self._draw(grid_lines, gl.GL_LINES)
            self._draw(walls, gl.GL_TRIANGLES)
            self._draw(shapes.minimap_camera(camera, self.layout), gl.GL_TRIANGLES)
            self._draw(
                shapes.minimap_fov_lines(camera, self.fov, self.layout),
                gl.GL_LINES,
            )
            gl.glDisable(gl.GL_SCISSOR_TEST)

    def shutdown(self) -> None:
        """Release GL objects; requires a valid GL context."""
        self._buffers.shutdown()
        self.shader.delete()
