# storenav/map_grid.py
import math
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from storenav.types import Cell, MapElement, Point2D


@dataclass(frozen=True)
class OccupancyGrid:
    grid: np.ndarray          # (H, W) bool, True = blocked

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, cell: Cell) -> bool:
        """Out-of-bounds cells count as blocked."""
        if not self.in_bounds(cell):
            return True
        x, y = cell
        return bool(self.grid[y, x])

    def is_free(self, cell: Cell) -> bool:
        return not self.is_blocked(cell)

    def blocked_cells(self) -> List[Cell]:
        ys, xs = np.nonzero(self.grid)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]


def world_to_cell(xy: Point2D) -> Cell:
    """
    Map a floor coordinate (x, y) to the grid cell containing it.

    Cells are unit squares, so this is a floor on both axes. No clipping
    is done here; callers check bounds on the grid.
    """
    x, y = xy
    return (int(math.floor(x)), int(math.floor(y)))


def compute_grid(width: int, height: int, obstacles: Iterable[MapElement]) -> OccupancyGrid:
    """
    Rasterize blocking map elements onto a (height, width) occupancy grid.

    Each wall/obstacle rectangle covers cells
      floor(x) <= cx < floor(x) + floor(w)
      floor(y) <= cy < floor(y) + floor(h)
    clipped to the grid. Racks and points of interest are walkable and
    ignored. Degenerate or fully out-of-range rectangles add nothing.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"grid size must be > 0, got {width}x{height}")

    grid = np.zeros((height, width), dtype=bool)

    for el in obstacles:
        if not el.blocks:
            continue

        x0, y0 = world_to_cell(el.position)
        x1 = min(x0 + int(math.floor(el.size[0])), width)
        y1 = min(y0 + int(math.floor(el.size[1])), height)

        # clip the low side too (negative indices would wrap in numpy)
        x0 = max(x0, 0)
        y0 = max(y0, 0)
        if x1 <= x0 or y1 <= y0:
            continue

        grid[y0:y1, x0:x1] = True

    return OccupancyGrid(grid=grid)
