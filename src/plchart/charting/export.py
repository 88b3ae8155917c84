"""Chart export helpers.

Thin wrappers around the default backend so callers holding a
``ResolvedChart.renderable`` (Qt canvas or Figure) can write it to disk
without touching backend APIs directly.
"""
from __future__ import annotations

from typing import Any

from plchart.config import settings

from .resolver import default_backend


def export_chart(renderable: Any, path: str, *, format: str = "png", dpi: int = settings.DEFAULT_DPI) -> None:
    """Export a rendered chart to disk.

    Args:
        renderable: Canvas widget or Figure from ``ResolvedChart.renderable``.
        path: Destination file path (existing directory required).
        format: 'png' or 'svg'.
        dpi: Raster resolution for PNG.

    Raises:
        ValueError: Unknown format or a renderable without a matplotlib figure.
    """
    default_backend().export_widget(renderable, path, format=format, dpi=dpi)
