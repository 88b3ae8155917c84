"""Data table model handed to chart builders.

A ``DataTable`` is a named, ordered relation: typed columns plus row tuples.
The resolver only looks at ``name``; the line and scatter builders read
columns through the accessors below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple


class ColumnType(str, Enum):
    INT64 = "int64"
    FLOAT64 = "float64"
    STRING = "string"
    TIME = "time"
    BOOLEAN = "boolean"

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnType.INT64, ColumnType.FLOAT64)


@dataclass(frozen=True, slots=True)
class Column:
    name: str
    dtype: ColumnType = ColumnType.STRING


@dataclass(frozen=True, slots=True)
class DataTable:
    """Named relation with typed columns.

    Attributes:
        name: Table name matched by string table references.
        columns: Ordered column definitions.
        rows: Row tuples, one value per column (``None`` for missing).
    """

    name: str
    columns: Tuple[Column, ...] = ()
    rows: Tuple[Tuple[Any, ...], ...] = field(default_factory=tuple)

    def column(self, name: str) -> Optional[Column]:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def column_index(self, name: str) -> int:
        for idx, col in enumerate(self.columns):
            if col.name == name:
                return idx
        raise KeyError(f"Unknown column: {name}")

    def column_values(self, name: str) -> List[Any]:
        idx = self.column_index(name)
        return [row[idx] if idx < len(row) else None for row in self.rows]

    def numeric_columns(self) -> List[Column]:
        return [c for c in self.columns if c.dtype.is_numeric]

    def columns_of(self, dtype: ColumnType) -> List[Column]:
        return [c for c in self.columns if c.dtype == dtype]

    def __len__(self) -> int:
        return len(self.rows)

    @classmethod
    def from_records(
        cls,
        name: str,
        records: Sequence[Mapping[str, Any]],
        *,
        dtypes: Mapping[str, ColumnType] | None = None,
    ) -> "DataTable":
        """Build a table from row dicts, inferring column types when not given.

        Column order follows first appearance across records.
        """
        names: List[str] = []
        for rec in records:
            for key in rec.keys():
                if key not in names:
                    names.append(key)
        dtypes = dtypes or {}
        columns = tuple(
            Column(n, dtypes.get(n) or infer_column_type(r.get(n) for r in records)) for n in names
        )
        rows = tuple(tuple(rec.get(n) for n in names) for rec in records)
        return cls(name=name, columns=columns, rows=rows)


def infer_column_type(values: Iterable[Any]) -> ColumnType:
    """Infer a column type from Python values (``None`` entries ignored).

    Mixed int/float promotes to FLOAT64; any other mix falls back to STRING.
    """
    seen: set[ColumnType] = set()
    for v in values:
        if v is None:
            continue
        if isinstance(v, bool):
            seen.add(ColumnType.BOOLEAN)
        elif isinstance(v, int):
            seen.add(ColumnType.INT64)
        elif isinstance(v, float):
            seen.add(ColumnType.FLOAT64)
        elif hasattr(v, "isoformat"):
            seen.add(ColumnType.TIME)
        else:
            seen.add(ColumnType.STRING)
    if not seen:
        return ColumnType.STRING
    if len(seen) == 1:
        return next(iter(seen))
    if seen == {ColumnType.INT64, ColumnType.FLOAT64}:
        return ColumnType.FLOAT64
    return ColumnType.STRING


__all__ = ["ColumnType", "Column", "DataTable", "infer_column_type"]
