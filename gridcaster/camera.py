from __future__ import annotations
import math
from dataclasses import dataclass, replace
from typing import ClassVar, TYPE_CHECKING

from .raycaster import normalize_angle

if TYPE_CHECKING:
    from .grid import Grid


@dataclass(frozen=True)
class ControlState:
    """
    Motion requested for one frame.
    move: signed distance to walk along the heading (grid cells).
    turn: signed rotation (radians); positive turns right.
    """

    move: float = 0.0
    turn: float = 0.0

    IDLE: ClassVar["ControlState"]

    @property
    def is_idle(self) -> bool:
        return self.move == 0.0 and self.turn == 0.0


ControlState.IDLE = ControlState()


@dataclass(frozen=True)
class CameraState:
    """Camera pose in grid-cell units; heading in radians, kept in [0, 2*pi)."""

    x: float
    y: float
    heading: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "heading", normalize_angle(self.heading))

    @classmethod
    def centered(cls, grid: Grid, heading: float = 0.0) -> CameraState:
        """Camera standing at the middle of the grid."""
        return cls(grid.width / 2, grid.height / 2, heading)


def update_camera(camera: CameraState, controls: ControlState) -> CameraState:
    """Return the pose after turning, then walking along the new heading."""
    if controls.is_idle:
        return camera
    heading = normalize_angle(camera.heading + controls.turn)
    return replace(
        camera,
        x=camera.x + math.cos(heading) * controls.move,
        y=camera.y + math.sin(heading) * controls.move,
        heading=heading,
    )
