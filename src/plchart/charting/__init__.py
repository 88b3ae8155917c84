"""Charting layer: chart directive resolution and matplotlib rendering.

``resolve_all`` is the entry point used by panels: it turns script text
containing ``#pl.chart:`` directives plus the query's result tables into an
ordered list of ``ResolvedChart`` values, one per valid directive.
"""

from .backends import MatplotlibChartBackend  # noqa: F401
from .resolver import resolve_all, resolve_one, table_from_spec  # noqa: F401
from .types import ChartBackendProtocol, ResolvedChart  # noqa: F401
