"""CSV loading for data tables (command line input).

Cell text is converted per column: the narrowest type every non-empty cell
of the column parses as wins (int64, float64, time, boolean), otherwise the
column stays a string column. Empty cells become ``None``.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from plchart.domain.tables import Column, ColumnType, DataTable
from plchart.parsing.errors import TableLoadError

log = logging.getLogger(__name__)

_BOOL_WORDS = {"true": True, "false": False}


def _parse_bool(text: str) -> bool:
    try:
        return _BOOL_WORDS[text.strip().lower()]
    except KeyError:
        raise ValueError(f"not a boolean: {text!r}") from None


# Tried in order; the first converter accepting every cell decides the type.
_CONVERTERS: Tuple[Tuple[ColumnType, Callable[[str], Any]], ...] = (
    (ColumnType.INT64, int),
    (ColumnType.FLOAT64, float),
    (ColumnType.TIME, datetime.fromisoformat),
    (ColumnType.BOOLEAN, _parse_bool),
)


def _convert_column(cells: Sequence[str]) -> Tuple[ColumnType, List[Any]]:
    present = [c for c in cells if c != ""]
    for dtype, conv in _CONVERTERS:
        if not present:
            break
        try:
            converted = [conv(c) if c != "" else None for c in cells]
        except ValueError:
            continue
        return dtype, converted
    return ColumnType.STRING, [c if c != "" else None for c in cells]


def load_csv_table(path: str | Path, name: Optional[str] = None) -> DataTable:
    """Load a CSV file with a header row into a ``DataTable``.

    Args:
        path: CSV file path.
        name: Table name; defaults to the file stem.

    Raises:
        TableLoadError: When the file is missing, unreadable or has no header.
    """
    p = Path(path)
    table_name = name or p.stem
    try:
        with p.open(newline="", encoding="utf-8") as fh:
            reader = csv.reader(fh)
            header = next(reader, None)
            body = [row for row in reader if row]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise TableLoadError(
            f"Cannot read table file {p}", context={"path": str(p), "reason": str(e)}
        ) from e
    if not header:
        raise TableLoadError(f"Table file {p} has no header row", context={"path": str(p)})

    width = len(header)
    padded = [(row + [""] * width)[:width] for row in body]
    columns: List[Column] = []
    converted_cols: List[List[Any]] = []
    for idx, col_name in enumerate(header):
        dtype, values = _convert_column([row[idx] for row in padded])
        columns.append(Column(col_name.strip(), dtype))
        converted_cols.append(values)
    rows = tuple(zip(*converted_cols))
    log.debug("loaded table %s (%d rows, %d columns) from %s", table_name, len(rows), width, p)
    return DataTable(name=table_name, columns=tuple(columns), rows=rows)


def parse_table_arg(arg: str) -> Tuple[Optional[str], str]:
    """Split a ``[NAME=]PATH`` command line argument."""
    if "=" in arg:
        name, path = arg.split("=", 1)
        if name and path:
            return name, path
    return None, arg


def load_tables(args: Sequence[str]) -> List[DataTable]:
    """Load tables in argument order; order defines ordinal references."""
    tables: List[DataTable] = []
    for arg in args:
        name, path = parse_table_arg(arg)
        tables.append(load_csv_table(path, name))
    return tables


__all__ = ["load_csv_table", "load_tables", "parse_table_arg"]
