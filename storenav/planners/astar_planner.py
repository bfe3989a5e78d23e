from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from storenav.types import Cell, MapElement, Point2D
from storenav.map_grid import OccupancyGrid, compute_grid, world_to_cell
from storenav.math.heuristics import DIAGONAL_COST, ORTHOGONAL_COST, get_heuristic

FOUND = "found"
EXHAUSTED = "exhausted"
BUDGET_EXCEEDED = "budget_exceeded"

# Expansion order matters: ties on f go to whichever node entered the open list first.
DIRECTIONS: List[Cell] = [
    (0, 1), (1, 0), (0, -1), (-1, 0),
    (1, 1), (-1, 1), (1, -1), (-1, -1),
]


@dataclass(frozen=True)
class SearchConfig:
    """
    Tuning for one grid search.

    max_expansions bounds the number of nodes closed before giving up
    (None = unbounded). A search that hits the budget reports no path.
    """
    orthogonal_cost: float = ORTHOGONAL_COST
    diagonal_cost: float = DIAGONAL_COST
    heuristic: str = "manhattan"
    max_expansions: Optional[int] = None


@dataclass
class PathNode:
    x: int
    y: int
    g: float      # cost from start
    h: float      # estimate to goal
    f: float      # g + h
    parent: int = -1  # index into the search's node arena, -1 for the root


@dataclass(frozen=True)
class SearchResult:
    status: str
    path: List[Cell]
    cost: float
    nodes_expanded: int

    @property
    def found(self) -> bool:
        return self.status == FOUND


def validate_search_config(config: SearchConfig) -> None:
    if config.orthogonal_cost <= 0.0:
        raise ValueError(f"orthogonal_cost must be > 0, got {config.orthogonal_cost}")
    if config.diagonal_cost <= 0.0:
        raise ValueError(f"diagonal_cost must be > 0, got {config.diagonal_cost}")
    if config.max_expansions is not None and config.max_expansions <= 0:
        raise ValueError(f"max_expansions must be > 0 or None, got {config.max_expansions}")
    get_heuristic(config.heuristic)


def _reconstruct(nodes: List[PathNode], idx: int) -> List[Cell]:
    path: List[Cell] = []
    while idx != -1:
        node = nodes[idx]
        path.append((node.x, node.y))
        idx = node.parent
    path.reverse()
    return path


def search(
    grid: OccupancyGrid,
    start: Point2D,
    goal: Point2D,
    config: SearchConfig = SearchConfig(),
) -> SearchResult:
    """
    Best-first (A*-style) search over an 8-connected occupancy grid.

    start/goal are floor coordinates and are floored to cells. A start or
    goal that is out of bounds or blocked gives an EXHAUSTED result with
    an empty path; unreachable goals are never an exception.

    The open list is scanned linearly for the lowest f, keeping the first
    minimum found, so results are deterministic and tie-break in insertion
    order. An open neighbour reached more cheaply is relaxed in place.
    Closed cells are never reopened.
    """
    validate_search_config(config)
    heuristic = get_heuristic(config.heuristic, config.orthogonal_cost, config.diagonal_cost)

    s = world_to_cell(start)
    t = world_to_cell(goal)
    if grid.is_blocked(s) or grid.is_blocked(t):
        return SearchResult(status=EXHAUSTED, path=[], cost=float("inf"), nodes_expanded=0)

    h0 = heuristic(s, t)
    nodes: List[PathNode] = [PathNode(x=s[0], y=s[1], g=0.0, h=h0, f=h0)]
    open_list: List[int] = [0]
    open_index: Dict[Cell, int] = {s: 0}
    closed: Set[Cell] = set()
    expanded = 0

    while open_list:
        if config.max_expansions is not None and expanded >= config.max_expansions:
            return SearchResult(status=BUDGET_EXCEEDED, path=[], cost=float("inf"), nodes_expanded=expanded)

        # 1) lowest f, first one wins
        best = 0
        for i in range(1, len(open_list)):
            if nodes[open_list[i]].f < nodes[open_list[best]].f:
                best = i
        idx = open_list.pop(best)
        current = nodes[idx]
        cell = (current.x, current.y)
        del open_index[cell]

        # 2) close it
        closed.add(cell)
        expanded += 1

        # 3) goal check
        if cell == t:
            return SearchResult(
                status=FOUND,
                path=_reconstruct(nodes, idx),
                cost=current.g,
                nodes_expanded=expanded,
            )

        # 4) expand neighbours
        for dx, dy in DIRECTIONS:
            nb = (current.x + dx, current.y + dy)
            if grid.is_blocked(nb) or nb in closed:
                continue

            step = config.diagonal_cost if abs(dx) + abs(dy) == 2 else config.orthogonal_cost
            g_new = current.g + step

            j = open_index.get(nb)
            if j is None:
                h = heuristic(nb, t)
                nodes.append(PathNode(x=nb[0], y=nb[1], g=g_new, h=h, f=g_new + h, parent=idx))
                open_index[nb] = len(nodes) - 1
                open_list.append(len(nodes) - 1)
            elif g_new < nodes[j].g:
                node = nodes[j]
                node.g = g_new
                node.f = g_new + node.h
                node.parent = idx

    return SearchResult(status=EXHAUSTED, path=[], cost=float("inf"), nodes_expanded=expanded)


def find_path(
    grid: OccupancyGrid,
    start: Point2D,
    goal: Point2D,
    config: SearchConfig = SearchConfig(),
) -> List[Cell]:
    """Cells from start to goal inclusive, or [] if there is no path."""
    return search(grid, start, goal, config).path


class PathFinder:
    """
    Grid path finder bound to one floor snapshot.

    Builds the occupancy grid once and answers any number of start/goal
    queries against it. The grid is never modified; rebuild the PathFinder
    when obstacles change.

    Example:
        finder = PathFinder(100, 100, floor.blocking_elements())
        cells = finder.find_path((10, 10), (42.5, 17.0))
    """

    def __init__(
        self,
        width: int,
        height: int,
        obstacles: Iterable[MapElement],
        config: SearchConfig = SearchConfig(),
    ):
        """
        Args:
          width, height: grid dimensions in cells. Must be > 0.
          obstacles: map elements; only walls and obstacles block.
          config: search tuning shared by every query.
        """
        validate_search_config(config)
        self.config: SearchConfig = config
        self.grid: OccupancyGrid = compute_grid(width, height, obstacles)

    def search(self, start: Point2D, goal: Point2D) -> SearchResult:
        return search(self.grid, start, goal, self.config)

    def find_path(self, start: Point2D, goal: Point2D) -> List[Cell]:
        return self.search(start, goal).path
