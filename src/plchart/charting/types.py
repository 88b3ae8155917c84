"""Core charting types: resolved results and the backend protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from plchart.domain.chart_spec import ChartSpec


@dataclass(frozen=True)
class ResolvedChart:
    """One panel's worth of output.

    ``renderable`` is whatever the backend produced (a Qt canvas widget or a
    matplotlib Figure) or ``None`` when nothing could be rendered.
    """

    renderable: Any
    title: Optional[str] = None
    spec: Optional[ChartSpec] = None


class ChartBackendProtocol(Protocol):  # pragma: no cover - structural only
    """Protocol all chart backends must implement."""

    def create_line_chart(self, data: Any, *, title: str | None = None) -> Any:  # QWidget | Figure
        ...

    def create_scatter_plot(self, data: Any, *, title: str | None = None) -> Any:
        ...
