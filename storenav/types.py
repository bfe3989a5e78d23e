from dataclasses import dataclass
from typing import Tuple

Point2D = Tuple[float, float]  # (x, y) floor coordinates
Size2D = Tuple[float, float]   # (width, height)
Cell = Tuple[int, int]         # (x, y) grid indices

WALL = "wall"
OBSTACLE = "obstacle"
RACK = "rack"
POI = "poi"

ELEMENT_KINDS = (WALL, OBSTACLE, RACK, POI)
BLOCKING_KINDS = frozenset({WALL, OBSTACLE})


@dataclass(frozen=True)
class MapElement:
	kind: str
	position: Point2D  # top-left corner
	size: Size2D
	name: str = ""

	@property
	def blocks(self) -> bool:
		return self.kind in BLOCKING_KINDS


@dataclass(frozen=True)
class Waypoint:
	name: str
	position: Point2D

