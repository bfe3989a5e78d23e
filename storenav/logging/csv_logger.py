# storenav/logging/csv_logger.py
from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, IO, List, Optional

from storenav.map_grid import world_to_cell

if TYPE_CHECKING:
    from storenav.planners.route_optimizer import LegResult

LEG_FIELDS = [
    "leg",
    "waypoint",
    "from_x",
    "from_y",
    "to_x",
    "to_y",
    "status",
    "n_cells",
    "cost",
    "nodes_expanded",
]


def leg_row(i: int, leg: "LegResult") -> Dict[str, Any]:
    """One trace row for leg i; cost is blank when the waypoint was not reached."""
    fx, fy = world_to_cell(leg.origin)
    tx, ty = world_to_cell(leg.waypoint.position)
    return {
        "leg": i,
        "waypoint": leg.waypoint.name,
        "from_x": fx,
        "from_y": fy,
        "to_x": tx,
        "to_y": ty,
        "status": leg.status,
        "n_cells": len(leg.cells),
        "cost": round(leg.cost, 6) if leg.reached else "",
        "nodes_expanded": leg.nodes_expanded,
    }


@dataclass
class CsvLogger:
    """
    Buffered CSV trace of route planning, one row per leg.

    - `log_leg(i, leg)` writes a LEG_FIELDS row for a planned leg.
    - `log({...})` takes any row matching `fieldnames`; pass
      `fieldnames=None` to take the columns from the first row instead.
    - Rows are buffered and written every `flush_every` rows and on close.

    The file is only created on the first flush, so a run that plans no
    legs leaves nothing on disk.
    """
    path: str
    flush_every: int = 50
    fieldnames: Optional[List[str]] = field(default_factory=lambda: list(LEG_FIELDS))

    rows_written: int = field(default=0, init=False)
    _pending: List[Dict[str, Any]] = field(default_factory=list, init=False)
    _out: Optional[IO[str]] = field(default=None, init=False)
    _writer: Optional[csv.DictWriter] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.flush_every < 1:
            raise ValueError(f"flush_every must be >= 1, got {self.flush_every}")

    def log_leg(self, i: int, leg: "LegResult") -> None:
        self.log(leg_row(i, leg))

    def log(self, row: Dict[str, Any]) -> None:
        if self.fieldnames is None:
            self.fieldnames = list(row)
        elif set(row) != set(self.fieldnames):
            missing = sorted(set(self.fieldnames) - set(row))
            extra = sorted(set(row) - set(self.fieldnames))
            raise ValueError(f"trace row does not match columns: missing={missing} extra={extra}")

        self._pending.append(row)
        if len(self._pending) >= self.flush_every:
            self.flush()

    def _open(self) -> csv.DictWriter:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self._out = open(self.path, "w", newline="")
        writer = csv.DictWriter(self._out, fieldnames=self.fieldnames)
        writer.writeheader()
        return writer

    def flush(self) -> None:
        if not self._pending:
            return
        if self._writer is None:
            self._writer = self._open()

        self._writer.writerows(self._pending)
        self.rows_written += len(self._pending)
        self._pending.clear()
        self._out.flush()

    def close(self) -> None:
        self.flush()
        if self._out is not None:
            self._out.close()
        self._out = None
        self._writer = None

    def __enter__(self) -> "CsvLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
