import math

import numpy as np
import pytest

from gridcaster import shapes
from gridcaster.camera import CameraState
from gridcaster.config import MAP_WALL_COLOR
from gridcaster.grid import Grid
from gridcaster.projector import Projection


def make_projection(heights, shades, screen_height=100):
    n = len(heights)
    return Projection(
        screen_width=n - 1,
        screen_height=screen_height,
        angles=np.zeros(n),
        distances=np.ones(n),
        corrected=np.ones(n),
        heights=np.array(heights, dtype=float),
        shades=np.array(shades, dtype=float),
    )


def test_rect_is_two_triangles_with_normalized_color():
    verts = shapes.rect(1, 2, 3, 4, (255, 0, 51))
    assert verts.shape == (6, shapes.VERTEX_FLOATS)
    assert verts.dtype == np.float32
    assert set(map(tuple, verts[:, :2].tolist())) == {(1, 2), (3, 2), (3, 4), (1, 4)}
    assert np.allclose(verts[:, 2:], [1.0, 0.0, 0.2])


def test_to_ndc_flips_y():
    verts = np.array([[0, 0, 1, 1, 1], [200, 100, 1, 1, 1]], dtype=np.float32)
    ndc = shapes.to_ndc(verts, 200, 100)
    assert ndc[0, :2].tolist() == [-1.0, 1.0]
    assert ndc[1, :2].tolist() == [1.0, -1.0]
    # Source array untouched
    assert verts[1, 0] == 200


def test_ellipse_fan_stays_on_ellipse():
    verts = shapes.ellipse(10, 20, 4, 2, (0, 255, 0), segments=8)
    assert verts.shape == (24, shapes.VERTEX_FLOATS)
    centres = verts[0::3, :2]
    assert np.allclose(centres, [10, 20])
    rim = np.vstack([verts[1::3, :2], verts[2::3, :2]])
    assert np.allclose(((rim[:, 0] - 10) / 4) ** 2 + ((rim[:, 1] - 20) / 2) ** 2, 1.0)


def test_view_columns_centred_and_clipped():
    proj = make_projection([50, 0, 400, math.inf], [192, 0, 96, 10])
    verts = shapes.view_columns(proj)
    # Column 1 has no wall; the other three are drawn
    assert len(verts) == 18
    first, third, fourth = verts[:6], verts[6:12], verts[12:]
    assert first[:, 1].min() == pytest.approx(25)
    assert first[:, 1].max() == pytest.approx(75)
    assert np.allclose(first[:, 2:], 192 / 255.0)
    assert first[:, 0].min() == 0 and first[:, 0].max() == 1
    # Taller than the view: clipped to the full column
    assert third[:, 1].min() == 0 and third[:, 1].max() == 100
    assert third[:, 0].min() == 2
    assert fourth[:, 1].min() == 0 and fourth[:, 1].max() == 100


def test_view_columns_empty_when_nothing_hit():
    proj = make_projection([0, 0], [0, 0])
    assert shapes.view_columns(proj).shape == (0, shapes.VERTEX_FLOATS)


@pytest.fixture
def room():
    return Grid([[1, 1, 1, 1], [1, 0, 0, 1], [1, 1, 1, 1]])


def test_minimap_layout_keeps_grid_aspect(room):
    layout = shapes.minimap_layout(room, left=640, height=300)
    assert layout.width == pytest.approx(400)
    assert layout.cell_w == pytest.approx(100)
    assert layout.cell_h == pytest.approx(100)
    assert layout.to_pixels(1.5, 0.5) == pytest.approx((790, 50))


def test_minimap_grid_lines_cover_every_boundary(room):
    layout = shapes.minimap_layout(room, left=0, height=300)
    lines = shapes.minimap_grid_lines(layout)
    # (4 + 1) vertical and (3 + 1) horizontal lines, two vertices each
    assert len(lines) == 2 * (5 + 4)


def test_minimap_walls_inset_solid_cells(room):
    layout = shapes.minimap_layout(room, left=0, height=300)
    walls = shapes.minimap_walls(room, layout)
    solid = len(list(room.solid_cells()))
    assert len(walls) == 6 * solid
    assert np.allclose(walls[:, 2:], np.array(MAP_WALL_COLOR) / 255.0)
    first = walls[:6]
    assert first[:, 0].min() == 1 and first[:, 0].max() == 99


def test_minimap_walls_empty_grid():
    grid = Grid([[0, 0], [0, 0]])
    layout = shapes.minimap_layout(grid, left=0, height=100)
    assert len(shapes.minimap_walls(grid, layout)) == 0


def test_minimap_fov_lines_start_at_camera(room):
    layout = shapes.minimap_layout(room, left=0, height=300)
    cam = CameraState(2.0, 1.5, 0.0)
    lines = shapes.minimap_fov_lines(cam, math.pi / 2, layout)
    assert len(lines) == 4
    assert np.allclose(lines[0::2, :2], [200, 150])
    # Heading east: one edge points down-right, the other up-right
    ends = lines[1::2, :2]
    assert np.all(ends[:, 0] > 200)
    assert sorted(np.sign(ends[:, 1] - 150).tolist()) == [-1.0, 1.0]


def test_minimap_camera_marker(room):
    layout = shapes.minimap_layout(room, left=0, height=300)
    marker = shapes.minimap_camera(CameraState(2.0, 1.5, 0.0), layout)
    assert np.allclose(marker[0, :2], [200, 150])
    assert np.abs(marker[:, 0] - 200).max() == pytest.approx(25, rel=1e-5)
