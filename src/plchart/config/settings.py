"""Global configuration and constants for chart directive rendering."""

from __future__ import annotations

import os
from typing import Final

# Literal token that opens a directive line; a colon follows it.
DIRECTIVE_PREFIX: Final = os.environ.get("PLCHART_DIRECTIVE_PREFIX", "#pl.chart")

# Wrap figures in a FigureCanvasQTAgg widget (UI render path). Disable for
# headless use; backends then hand back the bare matplotlib Figure.
EMBED_QT: Final = os.environ.get("PLCHART_EMBED_QT", "1").strip().lower() not in {"0", "false", "no", "off"}

FIGURE_SIZE: Final = (5.2, 3.2)  # inches
DEFAULT_DPI: Final = int(os.environ.get("PLCHART_DPI", "120"))
SCATTER_MARKER_SIZE: Final = 14

LOG_CAPACITY: Final = 500
