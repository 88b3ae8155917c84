"""Structured errors for directive parsing and table loading."""

from __future__ import annotations
from typing import Any


class DirectiveError(Exception):
    """Base class for chart directive issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class MalformedDirectiveError(DirectiveError):
    """Raised when a directive payload is not a JSON object."""


class TableLoadError(DirectiveError):
    """Raised when a data table file cannot be read or is empty."""
