# Shared fixtures: headless Qt platform, sample tables and a recording backend
# that stands in for matplotlib when a test only cares about dispatch.

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, List, Tuple

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from plchart.domain.tables import Column, ColumnType, DataTable  # noqa: E402


@dataclass
class RecordingBackend:
    """Backend fake returning tagged tuples and remembering every call."""

    calls: List[Tuple[str, Any]] = field(default_factory=list)

    def create_line_chart(self, data, *, title=None):
        self.calls.append(("line", data))
        return ("line", data)

    def create_scatter_plot(self, data, *, title=None):
        self.calls.append(("scatter", data))
        return ("scatter", data)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


def make_xy_table(name: str, points, *, x: str = "x", y: str = "y") -> DataTable:
    return DataTable(
        name=name,
        columns=(Column(x, ColumnType.FLOAT64), Column(y, ColumnType.FLOAT64)),
        rows=tuple(tuple(p) for p in points),
    )


@pytest.fixture
def cpu_table() -> DataTable:
    start = datetime(2025, 1, 1, 12, 0)
    return DataTable(
        name="cpu",
        columns=(
            Column("time_", ColumnType.TIME),
            Column("pod", ColumnType.STRING),
            Column("cpu_usage", ColumnType.FLOAT64),
        ),
        rows=tuple(
            (start + timedelta(seconds=10 * i), pod, float(i) + off)
            for i in range(3)
            for pod, off in (("pod-a", 0.0), ("pod-b", 1.0))
        ),
    )


@pytest.fixture
def points_table() -> DataTable:
    return make_xy_table("points", [(1, 2), (2, 4), (3, 5)])


@pytest.fixture
def fit_table() -> DataTable:
    return make_xy_table("fit", [(3, 6), (1, 2), (2, 4)])
