import numpy as np

from grid_planner.core.types import OccupancyGrid
from grid_planner.utils.render import (
    BLUE,
    RED,
    WHITE,
    draw_grid,
    format_grid,
    format_path,
    render_obstacle_map,
    trace_path,
)


def test_render_obstacle_map_colors():
    mask = np.zeros((4, 4), dtype=np.uint8)
    mask[1, 2] = 255
    image = render_obstacle_map(mask)
    assert image.shape == (4, 4, 3)
    assert tuple(image[1, 2]) == BLUE
    assert tuple(image[0, 0]) == WHITE


def test_draw_grid_lines():
    image = np.full((20, 20, 3), 255, dtype=np.uint8)
    out = draw_grid(image, 10)
    assert tuple(out[0, 5]) == (0, 0, 0)
    assert tuple(out[5, 10]) == (0, 0, 0)
    assert tuple(out[5, 5]) == (255, 255, 255)
    # input untouched
    assert np.all(image == 255)


def test_trace_path_draws_on_copy():
    image = np.full((30, 30), 255, dtype=np.uint8)
    out = trace_path(image, [(0, 0), (1, 1), (2, 2)], 10)
    assert out.shape == (30, 30, 3)
    assert np.all(image == 255)
    # segment between the centres of (1,1) and (2,2)
    assert tuple(out[20, 20]) == RED


def test_format_path():
    assert format_path([(0, 0), (1, 1)]) == "->(0,0)->(1,1)"
    assert format_path([]) == ""


def test_format_grid():
    grid = OccupancyGrid.from_rows([[0, 0, 0], [1, 1, 0], [0, 0, 0]])
    text = format_grid(grid, [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)])
    assert text.splitlines() == ["S**", "##*", "..G"]
