"""Scatter plot collaborator: primary table points plus overlay lines.

The first table supplies the points: its first two numeric columns are x and
y. Each further table is drawn as a line over the points (e.g. a fitted
curve) and must provide numeric columns with the same two names. Any other
shape cannot be combined and parsing returns ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from plchart.domain.tables import DataTable

from .types import ChartBackendProtocol

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OverlayLine:
    name: str
    x: Tuple[float, ...]
    y: Tuple[float, ...]


@dataclass(frozen=True, slots=True)
class ScatterData:
    x: Tuple[float, ...]
    y: Tuple[float, ...]
    x_label: str
    y_label: str
    name: str = ""
    overlays: Tuple[OverlayLine, ...] = ()


def _xy_pairs(table: DataTable, x_name: str, y_name: str) -> Tuple[np.ndarray, np.ndarray]:
    pairs = [
        (float(x), float(y))
        for x, y in zip(table.column_values(x_name), table.column_values(y_name))
        if x is not None and y is not None
    ]
    if not pairs:
        return np.empty(0), np.empty(0)
    arr = np.asarray(pairs, dtype=float)
    return arr[:, 0], arr[:, 1]


def _overlay_line(table: DataTable, x_name: str, y_name: str) -> Optional[OverlayLine]:
    for col_name in (x_name, y_name):
        col = table.column(col_name)
        if col is None or not col.dtype.is_numeric:
            log.debug("overlay table %s lacks numeric column %s", table.name, col_name)
            return None
    xs, ys = _xy_pairs(table, x_name, y_name)
    order = np.argsort(xs, kind="stable")
    return OverlayLine(name=table.name, x=tuple(xs[order].tolist()), y=tuple(ys[order].tolist()))


def parse_scatter_data(tables: Sequence[DataTable]) -> Optional[ScatterData]:
    """Combine a primary table and overlay tables, or ``None`` if incompatible."""
    if not tables:
        return None
    primary, *rest = tables
    numeric = primary.numeric_columns()
    if len(numeric) < 2:
        log.debug("scatter table %s needs two numeric columns, has %d", primary.name, len(numeric))
        return None
    x_name, y_name = numeric[0].name, numeric[1].name
    xs, ys = _xy_pairs(primary, x_name, y_name)

    overlays: List[OverlayLine] = []
    for table in rest:
        line = _overlay_line(table, x_name, y_name)
        if line is None:
            return None
        overlays.append(line)
    return ScatterData(
        x=tuple(xs.tolist()),
        y=tuple(ys.tolist()),
        x_label=x_name,
        y_label=y_name,
        name=primary.name,
        overlays=tuple(overlays),
    )


def render_scatter_plot(
    data: ScatterData, backend: ChartBackendProtocol, *, title: str | None = None
) -> Any:
    return backend.create_scatter_plot(data, title=title)


__all__ = ["OverlayLine", "ScatterData", "parse_scatter_data", "render_scatter_plot"]
