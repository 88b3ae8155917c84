"""Series colors and axis roles shared by chart backends."""

from __future__ import annotations

from typing import Dict, List

SERIES_FALLBACK: List[str] = [
    "#4E79A7",
    "#F28E2B",
    "#E15759",
    "#76B7B2",
    "#59A14F",
    "#EDC948",
    "#B07AA1",
    "#FF9DA7",
]

ROLES: Dict[str, str] = {
    "axis.text": "#222222",
    "axis.line": "#CCCCCC",
    "grid.line": "#E0E0E0",
    "background.plot": "#FFFFFF",
    "background.figure": "#FFFFFF",
}


def color_for_series(index: int) -> str:
    if index < 0:
        index = 0
    return SERIES_FALLBACK[index % len(SERIES_FALLBACK)]


def role(key: str, default: str | None = None) -> str | None:
    return ROLES.get(key, default)


__all__ = ["SERIES_FALLBACK", "ROLES", "color_for_series", "role"]
