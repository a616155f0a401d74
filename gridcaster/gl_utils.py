"""
Helper functions and classes for OpenGL setup, shader compilation, and
buffer bookkeeping.
"""

from __future__ import annotations
import contextlib
import logging
from typing import Callable, Iterator, List, Optional

import OpenGL.GL as gl  # noqa: N811

from .config import BACKGROUND_COLOR

logger = logging.getLogger(__name__)

# Flat-colour shader: pixel positions already converted to NDC on the CPU
FLAT_VERTEX_SHADER = """
#version 120
attribute vec2 aPos;
attribute vec3 aColor;
varying vec3 vColor;
void main() {
    gl_Position = vec4(aPos, 0.0, 1.0);
    vColor = aColor;
}
"""

FLAT_FRAGMENT_SHADER = """
#version 120
varying vec3 vColor;
void main() {
    gl_FragColor = vec4(vColor, 1.0);
}
"""


class ShaderProgram:
    """A linked vertex + fragment shader program."""

    def __init__(
        self,
        vertex_source: Optional[str] = FLAT_VERTEX_SHADER,
        fragment_source: Optional[str] = FLAT_FRAGMENT_SHADER,
    ) -> None:
        if not vertex_source or not fragment_source:
            raise ValueError(
                "Vertex and fragment shader sources must be provided"
            )
        shaders = [
            self._compile(vertex_source, gl.GL_VERTEX_SHADER),
            self._compile(fragment_source, gl.GL_FRAGMENT_SHADER),
        ]
        self.id = self._link(shaders)
        # Shader objects are no longer needed once linked into the program
        for shader in shaders:
            gl.glDeleteShader(shader)

    @staticmethod
    def _compile(source: str, shader_type: int) -> int:
        shader = gl.glCreateShader(shader_type)
        gl.glShaderSource(shader, source)
        gl.glCompileShader(shader)
        if not gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS):
            log = gl.glGetShaderInfoLog(shader).decode()
            logger.error("Shader compile failed: %s", log)
            raise RuntimeError(f"Shader compile error: {log}")
        return shader

    @staticmethod
    def _link(shaders: List[int]) -> int:
        prog = gl.glCreateProgram()
        for shader in shaders:
            gl.glAttachShader(prog, shader)
        gl.glLinkProgram(prog)
        if not gl.glGetProgramiv(prog, gl.GL_LINK_STATUS):
            log = gl.glGetProgramInfoLog(prog).decode()
            logger.error("Program link failed: %s", log)
            raise RuntimeError(f"Shader link error: {log}")
        return prog

    @contextlib.contextmanager
    def in_use(self) -> Iterator[ShaderProgram]:
        """Bind the program for the duration of the block."""
        gl.glUseProgram(self.id)
        try:
            yield self
        finally:
            gl.glUseProgram(0)

    def get_attrib(self, name: str) -> int:
        return gl.glGetAttribLocation(self.id, name)

    def delete(self) -> None:
        gl.glDeleteProgram(self.id)


def setup_opengl(width: int, height: int) -> None:
    """
    Configure the GL state used by the flat 2D renderer: full-window viewport,
    no depth testing, background clear colour.
    """
    gl.glViewport(0, 0, width, height)
    gl.glDisable(gl.GL_DEPTH_TEST)
    r, g, b = (c / 255.0 for c in BACKGROUND_COLOR)
    gl.glClearColor(r, g, b, 1.0)


class BufferTracker:
    """
    Hands out GL buffer ids and deletes all of them on shutdown.

    Usage:
        buffers = BufferTracker()
        vbo = buffers.create()
        ...
        buffers.shutdown()
    """

    def __init__(
        self,
        creator: Callable[[int], int] = gl.glGenBuffers,
        deleter: Callable[[int, List[int]], None] = gl.glDeleteBuffers,
    ) -> None:
        self._creator = creator
        self._deleter = deleter
        self._ids: List[int] = []

    def create(self) -> int:
        buf = int(self._creator(1))
        self._ids.append(buf)
        return buf

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    def shutdown(self) -> None:
        """Call at program exit **WITH A VALID GL CONTEXT**."""
        if self._ids:
            logger.debug("Deleting %d GL buffers", len(self._ids))
            self._deleter(len(self._ids), self._ids)
        self._ids = []
