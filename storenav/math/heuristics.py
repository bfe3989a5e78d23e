from __future__ import annotations

import math
from functools import partial
from typing import Callable, Dict

from storenav.types import Cell

ORTHOGONAL_COST = 1.0
DIAGONAL_COST = 1.414  # sqrt(2), truncated

Heuristic = Callable[[Cell, Cell], float]


def manhattan(a: Cell, b: Cell) -> float:
    """
    |dx| + |dy|, independent of the move costs.

    Overestimates on an 8-connected grid once diagonal steps are cheaper
    than two orthogonal ones, so search guided by it is near-optimal,
    not guaranteed optimal.
    """
    return float(abs(a[0] - b[0]) + abs(a[1] - b[1]))


def chebyshev(
    a: Cell,
    b: Cell,
    orthogonal_cost: float = ORTHOGONAL_COST,
    diagonal_cost: float = DIAGONAL_COST,
) -> float:
    # every step shrinks max(dx, dy) by at most one
    step = min(orthogonal_cost, diagonal_cost)
    return step * max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def octile(
    a: Cell,
    b: Cell,
    orthogonal_cost: float = ORTHOGONAL_COST,
    diagonal_cost: float = DIAGONAL_COST,
) -> float:
    """
    Exact cost on an open 8-connected grid:
      orthogonal_cost * max(dx, dy) + (diag - orthogonal_cost) * min(dx, dy)
    where diag is diagonal_cost capped at two orthogonal steps.
    """
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    diag = min(diagonal_cost, 2.0 * orthogonal_cost)
    return orthogonal_cost * max(dx, dy) + (diag - orthogonal_cost) * min(dx, dy)


def euclidean(
    a: Cell,
    b: Cell,
    orthogonal_cost: float = ORTHOGONAL_COST,
    diagonal_cost: float = DIAGONAL_COST,
) -> float:
    # cheapest cost per unit of straight-line distance
    per_unit = min(orthogonal_cost, diagonal_cost / math.sqrt(2.0))
    return per_unit * math.hypot(a[0] - b[0], a[1] - b[1])


HEURISTICS: Dict[str, Callable[..., float]] = {
    "manhattan": manhattan,
    "chebyshev": chebyshev,
    "octile": octile,
    "euclidean": euclidean,
}


def get_heuristic(
    name: str,
    orthogonal_cost: float = ORTHOGONAL_COST,
    diagonal_cost: float = DIAGONAL_COST,
) -> Heuristic:
    """
    Look up a heuristic by name, bound to the given move costs.

    manhattan is returned as-is; the others are scaled so they never
    overestimate for those costs.
    """
    try:
        fn = HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"unknown heuristic {name!r}, expected one of {sorted(HEURISTICS)}"
        ) from None

    if fn is manhattan:
        return fn
    return partial(fn, orthogonal_cost=orthogonal_cost, diagonal_cost=diagonal_cost)
