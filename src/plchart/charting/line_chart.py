"""Line chart collaborator: table → line series → rendered chart.

Parsing rules:
    - x axis: the first ``time`` column, otherwise the first column.
    - every other numeric column becomes a y series.
    - string columns (other than x) split rows into one series per distinct
      value combination, named ``"<group> <column>"`` (just ``"<group>"``
      when there is a single y column).
    - rows with a missing x or y value are skipped for that series.

Series keep first-seen order so colors stay stable between renders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from plchart.domain.tables import ColumnType, DataTable

from .types import ChartBackendProtocol


@dataclass(frozen=True, slots=True)
class LineSeries:
    name: str
    x: Tuple[Any, ...]
    y: Tuple[float, ...]


@dataclass(frozen=True, slots=True)
class LineSeriesData:
    lines: Tuple[LineSeries, ...]
    x_label: Optional[str] = None
    y_label: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any(line.x for line in self.lines)


def _x_column(table: DataTable) -> Optional[str]:
    times = table.columns_of(ColumnType.TIME)
    if times:
        return times[0].name
    return table.columns[0].name if table.columns else None


def _cell(row: Tuple[Any, ...], idx: int) -> Any:
    return row[idx] if idx < len(row) else None


def parse_line_data(table: DataTable) -> LineSeriesData:
    x_name = _x_column(table)
    if x_name is None:
        return LineSeriesData(lines=())
    y_names = [c.name for c in table.numeric_columns() if c.name != x_name]
    group_names = [c.name for c in table.columns_of(ColumnType.STRING) if c.name != x_name]

    x_idx = table.column_index(x_name)
    y_idx = [table.column_index(n) for n in y_names]
    g_idx = [table.column_index(n) for n in group_names]

    points: Dict[Tuple[str, str], Tuple[List[Any], List[float]]] = {}
    for row in table.rows:
        x = _cell(row, x_idx)
        if x is None:
            continue
        keys = [_cell(row, i) for i in g_idx]
        group = " ".join(str(k) for k in keys if k is not None)
        for y_name, i in zip(y_names, y_idx):
            y = _cell(row, i)
            if y is None:
                continue
            xs, ys = points.setdefault((group, y_name), ([], []))
            xs.append(x)
            ys.append(float(y))

    lines = []
    for (group, y_name), (xs, ys) in points.items():
        if group:
            name = group if len(y_names) == 1 else f"{group} {y_name}"
        else:
            name = y_name
        lines.append(LineSeries(name=name, x=tuple(xs), y=tuple(ys)))
    y_label = y_names[0] if len(y_names) == 1 else None
    return LineSeriesData(lines=tuple(lines), x_label=x_name, y_label=y_label)


def render_line_chart(
    data: LineSeriesData, backend: ChartBackendProtocol, *, title: str | None = None
) -> Any:
    return backend.create_line_chart(data, title=title)


__all__ = ["LineSeries", "LineSeriesData", "parse_line_data", "render_line_chart"]
