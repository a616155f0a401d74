import math

import pytest

from gridcaster.camera import CameraState, ControlState, update_camera
from gridcaster.grid import Grid


def test_camera_heading_normalized_on_construction():
    cam = CameraState(1.0, 2.0, -math.pi / 2)
    assert cam.heading == pytest.approx(1.5 * math.pi)
    assert CameraState(0.0, 0.0, 2 * math.pi).heading == 0.0


def test_camera_is_frozen():
    cam = CameraState(1.0, 2.0, 0.0)
    with pytest.raises(AttributeError):
        cam.x = 3.0


def test_centered_camera_starts_in_grid_middle():
    grid = Grid([[0] * 5 for _ in range(3)])
    cam = CameraState.centered(grid)
    assert (cam.x, cam.y, cam.heading) == (2.5, 1.5, 0.0)


def test_idle_controls_return_same_camera():
    cam = CameraState(1.0, 1.0, 0.3)
    assert update_camera(cam, ControlState.IDLE) is cam
    assert ControlState.IDLE.is_idle


@pytest.mark.parametrize(
    "heading,move,expected_x,expected_y",
    [
        (0.0, 0.5, 2.0, 1.5),  # forward along +x
        (math.pi / 2, 0.5, 1.5, 2.0),  # forward along +y (down the rows)
        (0.0, -0.5, 1.0, 1.5),  # backward
    ],
)
def test_update_camera_moves_along_heading(heading, move, expected_x, expected_y):
    cam = CameraState(1.5, 1.5, heading)
    moved = update_camera(cam, ControlState(move=move))
    assert moved.x == pytest.approx(expected_x)
    assert moved.y == pytest.approx(expected_y)
    assert moved.heading == pytest.approx(cam.heading)
    # The original pose is untouched
    assert (cam.x, cam.y) == (1.5, 1.5)


def test_update_camera_turns_then_moves():
    cam = CameraState(0.0, 0.0, 0.0)
    moved = update_camera(cam, ControlState(move=1.0, turn=math.pi / 2))
    assert moved.heading == pytest.approx(math.pi / 2)
    assert moved.x == pytest.approx(0.0, abs=1e-12)
    assert moved.y == pytest.approx(1.0)


def test_update_camera_wraps_heading():
    cam = CameraState(0.0, 0.0, 0.1)
    turned = update_camera(cam, ControlState(turn=-0.2))
    assert turned.heading == pytest.approx(2 * math.pi - 0.1)
    assert 0.0 <= turned.heading < 2 * math.pi


def test_update_camera_has_no_collision_response():
    # Walking into a wall is allowed; the camera just passes through
    cam = CameraState(3.5, 2.5, 0.0)
    moved = update_camera(cam, ControlState(move=1.0))
    assert moved.x == pytest.approx(4.5)
