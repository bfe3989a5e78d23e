# storenav/floor.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from storenav.types import (
    ELEMENT_KINDS,
    OBSTACLE,
    POI,
    RACK,
    WALL,
    MapElement,
    Waypoint,
)


@dataclass
class Floor:
    name: str
    level: int = 1
    elements: List[MapElement] = field(default_factory=list)

    def blocking_elements(self) -> List[MapElement]:
        return [el for el in self.elements if el.blocks]

    def racks(self) -> List[MapElement]:
        return [el for el in self.elements if el.kind == RACK]

    def find_rack(self, name: str) -> Optional[MapElement]:
        for el in self.elements:
            if el.kind == RACK and el.name == name:
                return el
        return None

    def waypoints_for_route(self, rack_names: Sequence[str]) -> List[Waypoint]:
        """
        Turn an externally ordered list of rack names into waypoints.

        Order is kept. Names with no matching rack are dropped. The waypoint
        sits at the rack's top-left position.
        """
        out: List[Waypoint] = []
        for name in rack_names:
            rack = self.find_rack(name)
            if rack is None:
                continue
            out.append(Waypoint(name=rack.name, position=rack.position))
        return out


def element_from_dict(data: Dict[str, Any]) -> MapElement:
    """
    Build a MapElement from the floor-document shape:
      {"type": "rack", "name": "Dairy",
       "position": {"x": 12, "y": 30}, "size": {"width": 6, "height": 2}}
    """
    kind = data.get("type", data.get("kind"))
    if kind not in ELEMENT_KINDS:
        raise ValueError(f"unknown element type {kind!r}, expected one of {list(ELEMENT_KINDS)}")

    # a missing or null position/size means zero
    pos = data.get("position") or {}
    size = data.get("size") or {}
    if not isinstance(pos, dict) or not isinstance(size, dict):
        raise ValueError(f"position and size must be objects, got {pos!r} and {size!r}")

    return MapElement(
        kind=kind,
        position=(float(pos.get("x", 0.0)), float(pos.get("y", 0.0))),
        size=(float(size.get("width", 0.0)), float(size.get("height", 0.0))),
        name=str(data.get("name", "")),
    )


def floor_from_dict(data: Dict[str, Any]) -> Floor:
    return Floor(
        name=str(data.get("name", "")),
        level=int(data.get("level", 1)),
        elements=[element_from_dict(el) for el in data.get("elements", [])],
    )


def make_demo_floor() -> Floor:
    """Small 40x30 store: outer walls, two aisles of racks, a pillar and an entrance."""
    W, H = 40, 30

    elements = [
        # Outer walls
        MapElement(WALL, (0, 0), (W, 1)),
        MapElement(WALL, (0, H - 1), (W, 1)),
        MapElement(WALL, (0, 0), (1, H)),
        MapElement(WALL, (W - 1, 0), (1, H)),

        # Shelving runs
        MapElement(OBSTACLE, (8, 5), (2, 18)),
        MapElement(OBSTACLE, (20, 5), (2, 18)),
        MapElement(OBSTACLE, (30, 8), (3, 3)),

        # Racks are walkable targets in front of the shelving
        MapElement(RACK, (10, 7), (1, 4), name="Produce"),
        MapElement(RACK, (10, 17), (1, 4), name="Bakery"),
        MapElement(RACK, (22, 9), (1, 4), name="Dairy"),
        MapElement(RACK, (18, 19), (1, 4), name="Frozen"),
        MapElement(RACK, (34, 24), (2, 2), name="Checkout"),

        MapElement(POI, (2, 2), (2, 2), name="Entrance"),
    ]
    return Floor(name="Ground Floor", level=1, elements=elements)
