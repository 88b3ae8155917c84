"""Tests for resolve_all / resolve_one dispatch."""

from __future__ import annotations

import json

import pytest

from plchart.charting import resolver
from plchart.charting.line_chart import LineSeriesData
from plchart.charting.scatter_plot import ScatterData
from plchart.charting.resolver import resolve_all, resolve_one
from plchart.domain.chart_spec import BaseChartSpec, ChartSpec
from plchart.domain.tables import Column, ColumnType, DataTable


def _directive(**payload) -> str:
    return "#pl.chart: " + json.dumps(payload)


def test_no_directives_returns_empty(backend, cpu_table):
    assert resolve_all([cpu_table], "px.display(df)\n# plain comment\n", backend=backend) == []
    assert backend.calls == []


def test_line_end_to_end(backend, cpu_table):
    results = resolve_all([cpu_table], '#pl.chart: {"type":"line","table":0}', backend=backend)
    assert len(results) == 1
    chart = results[0]
    assert chart.title is None
    kind, data = chart.renderable
    assert kind == "line"
    assert isinstance(data, LineSeriesData)
    assert {line.name for line in data.lines} == {"pod-a", "pod-b"}


def test_count_and_order_preserved(backend, cpu_table, points_table):
    text = "\n".join(
        [
            _directive(type="line", table=0, title="one"),
            "some code",
            _directive(type="scatter", table="points", title="two"),
            _directive(type="line", table="cpu", title="three"),
        ]
    )
    results = resolve_all([cpu_table, points_table], text, backend=backend)
    assert [r.title for r in results] == ["one", "two", "three"]
    assert [r.renderable[0] for r in results] == ["line", "scatter", "line"]


def test_malformed_directive_between_valid_ones(backend, cpu_table):
    text = "\n".join(
        [
            _directive(type="line", table=0, title="a"),
            "#pl.chart: {not json}",
            _directive(type="line", table=0, title="b"),
        ]
    )
    results = resolve_all([cpu_table], text, backend=backend)
    assert [r.title for r in results] == ["a", "b"]


@pytest.mark.parametrize(
    "payload",
    [
        pytest.param('{"type": "line", "table": ' + "1" * 5000 + "}", id="oversized-int"),
        pytest.param("[" * 100000, id="deep-nesting"),
    ],
)
def test_undecodable_directive_dropped_next_to_valid_one(backend, cpu_table, payload):
    text = f"#pl.chart: {payload}\n" + _directive(type="line", table=0, title="kept")
    results = resolve_all([cpu_table], text, backend=backend)
    assert [r.title for r in results] == ["kept"]
    assert results[0].renderable[0] == "line"


def test_huge_ordinal_resolves_to_no_table(backend, cpu_table):
    text = '#pl.chart: {"type": "line", "table": 1' + "0" * 400 + ', "title": "far"}\n' + _directive(
        type="line", table=0, title="near"
    )
    results = resolve_all([cpu_table], text, backend=backend)
    assert [r.title for r in results] == ["far", "near"]
    assert results[0].renderable is None
    assert results[1].renderable[0] == "line"


def test_line_on_ragged_table(backend):
    table = DataTable(
        name="ragged",
        columns=(Column("x", ColumnType.INT64), Column("y", ColumnType.FLOAT64)),
        rows=((1, 2.0), (2,), (3, 4.0)),
    )
    results = resolve_all([table], _directive(type="line", table=0), backend=backend)
    kind, data = results[0].renderable
    assert kind == "line"
    assert data.lines[0].x == (1, 3)
    assert data.lines[0].y == (2.0, 4.0)


def test_unresolvable_primary_keeps_title(backend, cpu_table):
    results = resolve_all([cpu_table], _directive(type="line", table=5, title="gone"), backend=backend)
    assert len(results) == 1
    assert results[0].renderable is None
    assert results[0].title == "gone"
    assert backend.calls == []


def test_unknown_type_has_no_renderable(backend, cpu_table):
    results = resolve_all([cpu_table], _directive(type="pie", table=0, title="Pie"), backend=backend)
    assert results[0].renderable is None
    assert results[0].title == "Pie"
    assert backend.calls == []


def test_missing_type_has_no_renderable(backend, cpu_table):
    results = resolve_all([cpu_table], _directive(table=0), backend=backend)
    assert results[0].renderable is None


def test_scatter_skips_unresolvable_overlay(backend, points_table, fit_table, monkeypatch):
    spec = ChartSpec(
        type="scatter",
        table="points",
        overlays=(BaseChartSpec(type="line", table="missing"), BaseChartSpec(type="line", table="fit")),
    )
    captured = []
    real_impl = resolver.parse_scatter_data

    def _spy(tables):
        captured.append(list(tables))
        return real_impl(tables)

    monkeypatch.setattr(resolver, "parse_scatter_data", _spy)
    result = resolve_one([points_table, fit_table], spec, backend=backend)

    assert captured == [[points_table, fit_table]]
    kind, data = result.renderable
    assert kind == "scatter"
    assert isinstance(data, ScatterData)
    assert [o.name for o in data.overlays] == ["fit"]


def test_scatter_overlays_keep_listed_order(backend, points_table, fit_table, monkeypatch):
    other = DataTable(name="other", columns=fit_table.columns, rows=fit_table.rows)
    spec = ChartSpec(
        type="scatter",
        table=0,
        overlays=(BaseChartSpec(type="line", table="other"), BaseChartSpec(type="line", table="fit")),
    )
    captured = []
    monkeypatch.setattr(resolver, "parse_scatter_data", lambda tables: captured.append(list(tables)))
    result = resolve_one([points_table, fit_table, other], spec, backend=backend)
    assert captured == [[points_table, other, fit_table]]
    # Collaborator returned None -> nothing to render
    assert result.renderable is None
    assert backend.calls == []


def test_scatter_incompatible_overlay_has_no_renderable(backend, points_table, cpu_table):
    spec = ChartSpec(type="scatter", table="points", overlays=(BaseChartSpec(type="line", table="cpu"),))
    result = resolve_one([points_table, cpu_table], spec, backend=backend)
    assert result.renderable is None
    assert backend.calls == []


def test_line_never_resolves_overlays(backend, cpu_table, points_table, monkeypatch):
    seen = []
    real_impl = resolver.table_from_spec

    def _counting(tables, spec):
        seen.append(spec)
        return real_impl(tables, spec)

    monkeypatch.setattr(resolver, "table_from_spec", _counting)
    spec = ChartSpec(
        type="line",
        table=0,
        overlays=(BaseChartSpec(type="line", table=1), BaseChartSpec(type="line", table="points")),
    )
    result = resolve_one([cpu_table, points_table], spec, backend=backend)
    assert seen == [spec]
    assert result.renderable[0] == "line"


def test_unresolvable_primary_never_resolves_overlays(backend, points_table, monkeypatch):
    seen = []
    real_impl = resolver.table_from_spec

    def _counting(tables, spec):
        seen.append(spec)
        return real_impl(tables, spec)

    monkeypatch.setattr(resolver, "table_from_spec", _counting)
    spec = ChartSpec(type="scatter", table="nope", overlays=(BaseChartSpec(type="line", table=0),))
    result = resolve_one([points_table], spec, backend=backend)
    assert seen == [spec]
    assert result.renderable is None


def test_failure_in_one_entry_does_not_affect_others(backend, points_table, cpu_table):
    text = "\n".join(
        [
            _directive(type="scatter", table="cpu", title="bad scatter"),
            _directive(type="scatter", table="points", title="good scatter"),
        ]
    )
    results = resolve_all([points_table, cpu_table], text, backend=backend)
    assert results[0].renderable is None
    assert results[1].renderable[0] == "scatter"


def test_resolution_is_repeatable(backend, cpu_table):
    text = _directive(type="line", table="cpu", title="t")
    first = resolve_all([cpu_table], text, backend=backend)
    second = resolve_all([cpu_table], text, backend=backend)
    assert [r.spec for r in first] == [r.spec for r in second]
    assert first[0].renderable == second[0].renderable


def test_custom_prefix(backend, cpu_table):
    text = '#viz: {"type": "line", "table": 0}\n#pl.chart: {"type": "line", "table": 0}'
    results = resolve_all([cpu_table], text, backend=backend, prefix="#viz")
    assert len(results) == 1
