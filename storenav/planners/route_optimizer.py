from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from storenav.types import Cell, MapElement, Point2D, Waypoint
from storenav.map_grid import compute_grid
from storenav.planners.astar_planner import SearchConfig, search, validate_search_config
from storenav.logging.csv_logger import CsvLogger

ADVANCE_TO_WAYPOINT = "waypoint"
ADVANCE_TO_PATH_END = "path_end"

DEFAULT_GRID_SIZE: Tuple[int, int] = (100, 100)


@dataclass(frozen=True)
class RouteConfig:
    """
    Route stitching policy.

    advance_to:
      - "waypoint": after a reached leg, plan the next leg from the
        waypoint's nominal (possibly fractional) position.
      - "path_end": plan the next leg from the last cell actually reached.
    Both floor to the same cell, so the routes are identical; the switch
    only changes what is reported as each leg's origin.

    grid_size is (width, height) in cells, used unless a call passes its own.
    """
    origin: Point2D = (10.0, 10.0)
    grid_size: Tuple[int, int] = DEFAULT_GRID_SIZE
    advance_to: str = ADVANCE_TO_WAYPOINT
    search: SearchConfig = SearchConfig()


@dataclass(frozen=True)
class LegResult:
    waypoint: Waypoint
    origin: Point2D
    status: str
    cells: List[Cell]
    cost: float
    nodes_expanded: int

    @property
    def reached(self) -> bool:
        return len(self.cells) > 0


@dataclass
class RouteResult:
    points: List[Cell] = field(default_factory=list)
    legs: List[LegResult] = field(default_factory=list)

    @property
    def skipped(self) -> List[str]:
        return [leg.waypoint.name for leg in self.legs if not leg.reached]

    @property
    def cost(self) -> float:
        return sum(leg.cost for leg in self.legs if leg.reached)


def _validate_route_config(config: RouteConfig) -> None:
    if config.advance_to not in (ADVANCE_TO_WAYPOINT, ADVANCE_TO_PATH_END):
        raise ValueError(
            f"advance_to must be {ADVANCE_TO_WAYPOINT!r} or {ADVANCE_TO_PATH_END!r}, got {config.advance_to!r}"
        )
    validate_search_config(config.search)


def plan_route(
    waypoints: Sequence[Waypoint],
    obstacles: Sequence[MapElement],
    grid_size: Optional[Tuple[int, int]] = None,
    config: RouteConfig = RouteConfig(),
    logger: Optional[CsvLogger] = None,
) -> RouteResult:
    """
    Plan one continuous route through waypoints in the order given.

    Pipeline:
      - Build one occupancy grid shared by every leg
      - For each waypoint: search from the current position
      - Reached legs are appended, dropping the junction cell already in the route
      - Unreachable waypoints are skipped and the current position stays put

    No reordering is done. Nothing is raised for unreachable waypoints;
    they show up in RouteResult.skipped.
    """
    _validate_route_config(config)
    result = RouteResult()
    if len(waypoints) == 0:
        return result

    width, height = grid_size if grid_size is not None else config.grid_size
    grid = compute_grid(width, height, obstacles)
    current: Point2D = config.origin

    for i, wp in enumerate(waypoints):
        sr = search(grid, current, wp.position, config.search)
        leg = LegResult(
            waypoint=wp,
            origin=current,
            status=sr.status,
            cells=sr.path,
            cost=sr.cost,
            nodes_expanded=sr.nodes_expanded,
        )
        result.legs.append(leg)
        if logger is not None:
            logger.log_leg(i, leg)

        if not leg.reached:
            continue

        cells = leg.cells[1:] if result.points else leg.cells
        result.points.extend(cells)

        if config.advance_to == ADVANCE_TO_PATH_END:
            current = (float(leg.cells[-1][0]), float(leg.cells[-1][1]))
        else:
            current = wp.position

    return result


def optimize_route(
    waypoints: Sequence[Waypoint],
    obstacles: Sequence[MapElement],
    grid_size: Optional[Tuple[int, int]] = None,
    config: RouteConfig = RouteConfig(),
) -> List[Cell]:
    """Stitched route cells from config.origin through the reachable waypoints, or []."""
    return plan_route(waypoints, obstacles, grid_size, config).points
