"""Render chart directives from a script file to image files.

Reads a script containing ``#pl.chart:`` directive lines, loads the given
CSV tables (command line order defines ordinal table references), resolves
every directive and writes one image per renderable chart.

Features:
 - ``--table`` accepts ``NAME=PATH`` or ``PATH`` (name defaults to file stem).
 - Emits either a human-readable summary or JSON (via ``--json``).
 - Each chart entry lists the diagnostic events of its directive (unresolved
   table, unsupported type, ...); malformed directives are listed as dropped.
 - ``--log-jsonl`` writes those events as JSON Lines.
 - Exit code 0 when all tables load, 2 on a table load failure.

Example:
  plchart-render query.pxl --table cpu=cpu.csv --table fit.csv --out charts/ --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from plchart.charting.backends import EXPORT_FORMATS, MatplotlibChartBackend
from plchart.charting.resolver import resolve_one
from plchart.config import settings
from plchart.domain.table_loader import load_tables
from plchart.parsing.errors import TableLoadError
from plchart.parsing.spec_validator import iter_specs
from plchart.services.directive_log import DirectiveLog

log = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render #pl.chart directives in a script to image files")
    p.add_argument("script", help="Script file containing chart directives")
    p.add_argument(
        "--table",
        dest="tables",
        action="append",
        default=[],
        metavar="[NAME=]PATH",
        help="CSV table; repeat in ordinal order",
    )
    p.add_argument("--out", default=".", help="Output directory (created if missing)")
    p.add_argument("--format", choices=sorted(EXPORT_FORMATS), default="png")
    p.add_argument("--dpi", type=int, default=settings.DEFAULT_DPI)
    p.add_argument("--prefix", default=settings.DIRECTIVE_PREFIX, help="Directive prefix token")
    p.add_argument("--json", action="store_true", help="Print JSON summary")
    p.add_argument("--log-jsonl", metavar="PATH", help="Write directive diagnostics as JSON Lines")
    return p.parse_args(argv)


def _file_stem(index: int, title: Optional[str]) -> str:
    if not title:
        return f"chart_{index}"
    safe = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in title).strip("_")
    return f"chart_{index}_{safe}" if safe else f"chart_{index}"


def render_script(
    script_text: str,
    table_args: Sequence[str],
    out_dir: Path,
    *,
    format: str = "png",
    dpi: int = settings.DEFAULT_DPI,
    prefix: str = settings.DIRECTIVE_PREFIX,
    diagnostics: Optional[DirectiveLog] = None,
) -> Dict[str, Any]:
    """Resolve and export every chart; returns the summary payload.

    Each chart entry carries the index of the directive it came from and the
    diagnostic events recorded for it; ``dropped`` lists malformed directives.

    Raises:
        TableLoadError: A table file could not be loaded.
    """
    tables = load_tables(table_args)
    backend = MatplotlibChartBackend(embed_qt=False)
    if diagnostics is None:
        diagnostics = DirectiveLog()
    with diagnostics:
        resolved = [
            (directive, resolve_one(tables, spec, backend=backend, directive=directive))
            for directive, spec in iter_specs(script_text, prefix)
        ]
    out_dir.mkdir(parents=True, exist_ok=True)

    entries: List[Dict[str, Any]] = []
    rendered = 0
    for idx, (directive, chart) in enumerate(resolved):
        entry: Dict[str, Any] = {
            "index": idx,
            "directive": directive,
            "title": chart.title,
            "type": chart.spec.type if chart.spec else None,
            "file": None,
            "events": [e.event for e in diagnostics.for_directive(directive)],
        }
        if chart.renderable is not None:
            path = out_dir / f"{_file_stem(idx, chart.title)}.{format}"
            backend.export_widget(chart.renderable, str(path), format=format, dpi=dpi)
            entry["file"] = str(path)
            rendered += 1
            log.info("rendered directive %d to %s", directive, path)
        else:
            log.info("directive %d has nothing to render: %s", directive, ", ".join(entry["events"]) or "empty")
        entries.append(entry)
    return {
        "charts": entries,
        "rendered": rendered,
        "skipped": len(resolved) - rendered,
        "dropped": diagnostics.dropped(),
    }


def _print_summary(summary: Dict[str, Any]) -> None:
    for entry in summary["charts"]:
        label = entry["title"] or "(untitled)"
        target = entry["file"] or "skipped"
        notes = f" [{', '.join(entry['events'])}]" if entry["events"] else ""
        print(f"[{entry['index']}] {label} ({entry['type']}): {target}{notes}")
    for directive in summary["dropped"]:
        print(f"directive {directive}: malformed, dropped")
    print(f"Rendered: {summary['rendered']}  Skipped: {summary['skipped']}  Dropped: {len(summary['dropped'])}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    diagnostics = DirectiveLog()
    try:
        script_text = Path(args.script).read_text(encoding="utf-8")
        try:
            summary = render_script(
                script_text,
                args.tables,
                Path(args.out),
                format=args.format,
                dpi=args.dpi,
                prefix=args.prefix,
                diagnostics=diagnostics,
            )
        except TableLoadError as e:
            print(f"Table load failed: {e} {json.dumps(e.context, sort_keys=True)}", file=sys.stderr)
            return 2
        if args.json:
            print(json.dumps(summary, indent=2))
        else:
            _print_summary(summary)
        return 0
    finally:
        if args.log_jsonl:
            diagnostics.export_jsonl(args.log_jsonl)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
