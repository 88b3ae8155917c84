"""Matplotlib chart backend.

Figures are built with ``matplotlib.figure.Figure`` directly (no pyplot
state). With Qt embedding enabled each figure is wrapped in a
``FigureCanvasQTAgg`` widget ready to drop into a panel; otherwise the bare
Figure is returned, which is what headless export needs.
"""

from __future__ import annotations

from typing import Any, Tuple

import numpy as np
from matplotlib.figure import Figure

from plchart.config import settings

from . import palette
from .line_chart import LineSeriesData
from .scatter_plot import ScatterData

EXPORT_FORMATS = {"png", "svg"}


def figure_of(renderable: Any) -> Figure:
    """Return the matplotlib Figure behind a canvas widget or a Figure."""
    if isinstance(renderable, Figure):
        return renderable
    fig = getattr(renderable, "figure", None)
    if isinstance(fig, Figure):
        return fig
    raise ValueError("Unsupported renderable type for export")


class MatplotlibChartBackend:
    """Builds line and scatter figures; satisfies ``ChartBackendProtocol``."""

    def __init__(
        self,
        *,
        embed_qt: bool = settings.EMBED_QT,
        figsize: Tuple[float, float] = settings.FIGURE_SIZE,
    ) -> None:
        self.embed_qt = embed_qt
        self.figsize = figsize

    # --- shared --------------------------------------------------------
    def _new_axes(self):
        fig = Figure(figsize=self.figsize, tight_layout=True)
        fig.set_facecolor(palette.role("background.figure"))
        ax = fig.add_subplot(111)
        ax.set_facecolor(palette.role("background.plot"))
        ax.grid(True, color=palette.role("grid.line"), linewidth=0.6)
        ax.tick_params(colors=palette.role("axis.text"))
        for spine in ax.spines.values():
            spine.set_color(palette.role("axis.line"))
        return fig, ax

    def _finish(self, fig: Figure) -> Any:
        if not self.embed_qt:
            return fig
        from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg  # local import keeps Qt optional at startup

        return FigureCanvasQTAgg(fig)

    # --- line ----------------------------------------------------------
    def create_line_chart(self, data: LineSeriesData, *, title: str | None = None) -> Any:
        fig, ax = self._new_axes()
        for idx, line in enumerate(data.lines):
            ax.plot(list(line.x), np.asarray(line.y, dtype=float), label=line.name, color=palette.color_for_series(idx))
        if data.x_label:
            ax.set_xlabel(data.x_label)
        if data.y_label:
            ax.set_ylabel(data.y_label)
        if title:
            ax.set_title(title)
        if len(data.lines) > 1:
            ax.legend(fontsize=8)
        if any(line.x and hasattr(line.x[0], "isoformat") for line in data.lines):
            fig.autofmt_xdate()
        return self._finish(fig)

    # --- scatter -------------------------------------------------------
    def create_scatter_plot(self, data: ScatterData, *, title: str | None = None) -> Any:
        fig, ax = self._new_axes()
        ax.scatter(
            np.asarray(data.x, dtype=float),
            np.asarray(data.y, dtype=float),
            s=settings.SCATTER_MARKER_SIZE,
            color=palette.color_for_series(0),
            label=data.name or None,
        )
        for idx, overlay in enumerate(data.overlays, start=1):
            ax.plot(
                np.asarray(overlay.x, dtype=float),
                np.asarray(overlay.y, dtype=float),
                color=palette.color_for_series(idx),
                label=overlay.name,
            )
        ax.set_xlabel(data.x_label)
        ax.set_ylabel(data.y_label)
        if title:
            ax.set_title(title)
        if data.overlays:
            ax.legend(fontsize=8)
        return self._finish(fig)

    # --- export --------------------------------------------------------
    def export_widget(self, renderable: Any, path: str, *, format: str = "png", dpi: int = settings.DEFAULT_DPI) -> None:
        fmt = format.lower()
        if fmt not in EXPORT_FORMATS:
            raise ValueError("format must be 'png' or 'svg'")
        fig = figure_of(renderable)
        fig.savefig(path, format=fmt, dpi=dpi if fmt == "png" else None)


__all__ = ["MatplotlibChartBackend", "figure_of", "EXPORT_FORMATS"]
