from __future__ import annotations
import argparse
import json

from storenav.floor import floor_from_dict, make_demo_floor
from storenav.logging.csv_logger import CsvLogger
from storenav.math.heuristics import HEURISTICS
from storenav.planners.astar_planner import SearchConfig
from storenav.planners.route_optimizer import RouteConfig, plan_route


def parse_args():
    p = argparse.ArgumentParser(
        description="Plan a walking route through store racks, in the order given",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    p.add_argument("racks", nargs="*", default=["Produce", "Dairy", "Frozen", "Checkout"],
                   help="Rack names in visiting order.")
    p.add_argument("--floor", type=str, default=None,
                   help="Floor JSON document. Uses the built-in demo floor if unset.")
    p.add_argument("--grid", type=int, nargs=2, default=[100, 100], metavar=("W", "H"),
                   help="Grid size in cells.")
    p.add_argument("--origin", type=float, nargs=2, default=[10.0, 10.0], metavar=("X", "Y"),
                   help="Where the shopper starts.")
    p.add_argument("--heuristic", choices=sorted(HEURISTICS), default="manhattan")
    p.add_argument("--max_expansions", type=int, default=None,
                   help="Give up on a leg after closing this many nodes.")
    p.add_argument("--log_csv", type=str, default=None,
                   help="If set, write one CSV row per leg to this path (e.g., logs/route.csv).")

    return p.parse_args()


def main():
    args = parse_args()

    if args.floor:
        with open(args.floor) as f:
            floor = floor_from_dict(json.load(f))
    else:
        floor = make_demo_floor()

    waypoints = floor.waypoints_for_route(args.racks)
    config = RouteConfig(
        origin=(args.origin[0], args.origin[1]),
        grid_size=(args.grid[0], args.grid[1]),
        search=SearchConfig(heuristic=args.heuristic, max_expansions=args.max_expansions),
    )

    logger = CsvLogger(args.log_csv) if args.log_csv else None
    try:
        result = plan_route(waypoints, floor.elements, config=config, logger=logger)
    finally:
        if logger is not None:
            logger.close()

    for leg in result.legs:
        status = f"{len(leg.cells)} cells, cost {leg.cost:.3f}" if leg.reached else leg.status
        print(f"{leg.waypoint.name:>12}: {status} ({leg.nodes_expanded} expanded)")

    unknown = [name for name in args.racks if floor.find_rack(name) is None]
    if unknown:
        print(f"unknown racks: {', '.join(unknown)}")
    if result.skipped:
        print(f"unreachable: {', '.join(result.skipped)}")

    print(f"route: {len(result.points)} points, cost {result.cost:.3f}")
    print(" ".join(f"({x},{y})" for x, y in result.points))


if __name__ == "__main__":
    main()
