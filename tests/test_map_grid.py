import pytest

from storenav.types import MapElement, WALL, OBSTACLE, RACK, POI
from storenav.map_grid import compute_grid, world_to_cell


def test_grid_shape_is_height_by_width():
    g = compute_grid(7, 3, [])
    assert g.grid.shape == (3, 7)
    assert g.width == 7
    assert g.height == 3
    assert g.blocked_cells() == []


def test_rectangle_inside_blocks_floored_cells():
    # x: floor(2.7)=2 .. 2+floor(3.9)=5, y: floor(3.2)=3 .. 3+floor(2.5)=5
    g = compute_grid(10, 10, [MapElement(WALL, (2.7, 3.2), (3.9, 2.5))])
    expected = {(x, y) for x in range(2, 5) for y in range(3, 5)}
    assert set(g.blocked_cells()) == expected


def test_obstacle_kind_blocks_like_wall():
    g = compute_grid(5, 5, [MapElement(OBSTACLE, (1, 1), (1, 1))])
    assert g.blocked_cells() == [(1, 1)]
    assert g.is_blocked((1, 1))
    assert g.is_free((2, 1))


def test_rectangles_are_clipped_to_grid():
    obstacles = [
        MapElement(WALL, (-2, -1), (4, 3)),   # hangs off the top-left corner
        MapElement(WALL, (8, 8), (5, 5)),     # hangs off the bottom-right corner
    ]
    g = compute_grid(10, 10, obstacles)
    expected = {(0, 0), (1, 0), (0, 1), (1, 1), (8, 8), (9, 8), (8, 9), (9, 9)}
    assert set(g.blocked_cells()) == expected


def test_non_blocking_kinds_are_ignored():
    g = compute_grid(10, 10, [
        MapElement(RACK, (1, 1), (4, 2), name="Dairy"),
        MapElement(POI, (5, 5), (2, 2), name="Entrance"),
    ])
    assert not g.grid.any()


def test_degenerate_and_out_of_range_rectangles_add_nothing():
    g = compute_grid(10, 10, [
        MapElement(WALL, (2, 2), (0, 3)),      # zero width
        MapElement(WALL, (2, 2), (-2, 2)),     # negative width
        MapElement(WALL, (4, 4), (0.9, 3)),    # floors to zero width
        MapElement(WALL, (20, 20), (2, 2)),    # fully outside, far side
        MapElement(WALL, (-5, -5), (3, 3)),    # fully outside, near side
    ])
    assert g.blocked_cells() == []


def test_out_of_bounds_cells_count_as_blocked():
    g = compute_grid(4, 4, [])
    assert g.is_blocked((-1, 0))
    assert g.is_blocked((0, 4))
    assert g.is_free((3, 3))


def test_world_to_cell_floors():
    assert world_to_cell((3.9, 0.1)) == (3, 0)
    assert world_to_cell((-0.5, 2.0)) == (-1, 2)


def test_non_positive_grid_size_rejected():
    with pytest.raises(ValueError):
        compute_grid(0, 10, [])
