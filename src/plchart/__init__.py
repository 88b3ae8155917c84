"""plchart: chart directives embedded in script text, resolved against data tables."""

from plchart.charting import MatplotlibChartBackend, ResolvedChart, resolve_all, resolve_one, table_from_spec
from plchart.domain.chart_spec import BaseChartSpec, ChartSpec, ChartType
from plchart.domain.tables import Column, ColumnType, DataTable

__all__ = [
    "BaseChartSpec",
    "ChartSpec",
    "ChartType",
    "Column",
    "ColumnType",
    "DataTable",
    "MatplotlibChartBackend",
    "ResolvedChart",
    "resolve_all",
    "resolve_one",
    "table_from_spec",
]

__version__ = "0.1.0"
