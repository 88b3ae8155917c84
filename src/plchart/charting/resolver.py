"""Chart resolution: directive text + tables → titled renderables.

Each spec is resolved on its own. Failures never raise; they produce a
``ResolvedChart`` whose renderable is ``None``:

    - the primary table reference matches no table
    - the chart type is not a ``ChartType``
    - the scatter collaborator cannot combine the resolved tables

Dispatch goes through ``_BUILDERS``, keyed by ``ChartType``. Adding a chart
type means adding an enum member and a builder here; the import-time check
below refuses a missing builder.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Callable, Dict, List, Optional, Sequence

from plchart.config.settings import DIRECTIVE_PREFIX
from plchart.domain.chart_spec import BaseChartSpec, ChartSpec, ChartType
from plchart.domain.tables import DataTable
from plchart.parsing.spec_validator import iter_specs

from .backends import MatplotlibChartBackend
from .line_chart import parse_line_data, render_line_chart
from .scatter_plot import parse_scatter_data, render_scatter_plot
from .types import ChartBackendProtocol, ResolvedChart

log = logging.getLogger(__name__)

_default_backend: Optional[MatplotlibChartBackend] = None


def default_backend() -> MatplotlibChartBackend:
    global _default_backend
    if _default_backend is None:
        _default_backend = MatplotlibChartBackend()
    return _default_backend


def table_from_spec(tables: Sequence[DataTable], spec: BaseChartSpec) -> Optional[DataTable]:
    """Resolve ``spec.table`` to one table or ``None``.

    Numbers index the list (no wrapping or clamping), strings match a table
    name exactly. Anything else falls back to the first table.
    """
    ref = spec.table
    if isinstance(ref, bool):
        return tables[0] if tables else None
    if isinstance(ref, int):
        return tables[ref] if 0 <= ref < len(tables) else None
    if isinstance(ref, Real):
        if float(ref).is_integer() and 0 <= ref < len(tables):
            return tables[int(ref)]
        return None
    if isinstance(ref, str):
        for table in tables:
            if table.name == ref:
                return table
        return None
    return tables[0] if tables else None


def _extra(directive: Optional[int], event: str, table_ref: Any) -> Dict[str, Any]:
    return {"directive": directive, "event": event, "table_ref": table_ref}


def _build_line(
    tables: Sequence[DataTable],
    spec: ChartSpec,
    primary: DataTable,
    backend: ChartBackendProtocol,
    directive: Optional[int],
) -> Any:
    return render_line_chart(parse_line_data(primary), backend)


def _build_scatter(
    tables: Sequence[DataTable],
    spec: ChartSpec,
    primary: DataTable,
    backend: ChartBackendProtocol,
    directive: Optional[int],
) -> Any:
    overlay_tables: List[DataTable] = []
    for idx, overlay in enumerate(spec.overlays):
        table = table_from_spec(tables, overlay)
        if table is None:
            log.debug(
                "skipping overlay %d: no table for reference %r",
                idx,
                overlay.table,
                extra=_extra(directive, "overlay_unresolved", overlay.table),
            )
            continue
        overlay_tables.append(table)
    data = parse_scatter_data([primary, *overlay_tables])
    if data is None:
        log.debug(
            "scatter tables are incompatible: %s",
            ", ".join(t.name for t in (primary, *overlay_tables)),
            extra=_extra(directive, "incompatible_tables", spec.table),
        )
        return None
    return render_scatter_plot(data, backend)


_Builder = Callable[[Sequence[DataTable], ChartSpec, DataTable, ChartBackendProtocol, Optional[int]], Any]

_BUILDERS: Dict[ChartType, _Builder] = {
    ChartType.LINE: _build_line,
    ChartType.SCATTER: _build_scatter,
}

_missing = set(ChartType) - set(_BUILDERS)
if _missing:  # pragma: no cover - guards future enum additions
    raise RuntimeError(f"No chart builder registered for: {sorted(t.value for t in _missing)}")


def resolve_one(
    tables: Sequence[DataTable],
    spec: ChartSpec,
    *,
    backend: Optional[ChartBackendProtocol] = None,
    directive: Optional[int] = None,
) -> ResolvedChart:
    primary = table_from_spec(tables, spec)
    if primary is None:
        log.debug("no table for reference %r", spec.table, extra=_extra(directive, "unresolved_table", spec.table))
        return ResolvedChart(renderable=None, title=spec.title, spec=spec)
    chart_type = spec.chart_type
    if chart_type is None:
        log.debug("unsupported chart type %r", spec.type, extra=_extra(directive, "unsupported_type", spec.table))
        return ResolvedChart(renderable=None, title=spec.title, spec=spec)
    builder = _BUILDERS[chart_type]
    renderable = builder(tables, spec, primary, backend or default_backend(), directive)
    return ResolvedChart(renderable=renderable, title=spec.title, spec=spec)


def resolve_all(
    tables: Sequence[DataTable],
    text: str,
    *,
    backend: Optional[ChartBackendProtocol] = None,
    prefix: str = DIRECTIVE_PREFIX,
) -> List[ResolvedChart]:
    """Resolve every chart directive in ``text`` against ``tables``, in order."""
    return [
        resolve_one(tables, spec, backend=backend, directive=idx)
        for idx, spec in iter_specs(text, prefix)
    ]


__all__ = ["table_from_spec", "resolve_one", "resolve_all", "default_backend"]
