"""Per-directive diagnostics collected from log records.

The parser and the resolver report every dropped directive and every failed
lookup through their module loggers, tagging the record with ``extra``
fields: ``directive`` (position of the directive in its text), ``event``
(what went wrong) and, for lookups, ``table_ref``. ``DirectiveLog`` is a
handler on the ``plchart`` logger that keeps those tagged records as
``DirectiveEvent`` entries so a host can say why a panel is empty.

Usage::

    diagnostics = DirectiveLog()
    with diagnostics:
        charts = resolve_all(tables, text)
    diagnostics.for_directive(2)  # -> [DirectiveEvent(event="unresolved_table", ...)]

Untagged records pass through untouched.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional

from plchart.config import settings

__all__ = ["DirectiveEvent", "DirectiveLog", "EVENTS"]

# Event tags emitted by plchart.parsing and plchart.charting.
EVENTS = frozenset(
    {"malformed", "unresolved_table", "unsupported_type", "overlay_unresolved", "incompatible_tables"}
)


@dataclass(frozen=True)
class DirectiveEvent:
    directive: Optional[int]
    event: str
    message: str
    table_ref: Any = None
    logger: str = ""


class DirectiveLog(logging.Handler):
    def __init__(self, capacity: int = settings.LOG_CAPACITY, *, logger_name: str = "plchart") -> None:
        super().__init__(level=logging.DEBUG)
        self._events: Deque[DirectiveEvent] = deque(maxlen=capacity)
        self._logger_name = logger_name
        self._previous_level: Optional[int] = None

    @property
    def attached(self) -> bool:
        return self in logging.getLogger(self._logger_name).handlers

    def attach(self) -> "DirectiveLog":
        logger = logging.getLogger(self._logger_name)
        if self in logger.handlers:
            return self
        self._previous_level = logger.level
        # Drop and lookup records are DEBUG; make sure they get created.
        if logger.level == logging.NOTSET or logger.level > logging.DEBUG:
            logger.setLevel(logging.DEBUG)
        logger.addHandler(self)
        return self

    def detach(self) -> None:
        logger = logging.getLogger(self._logger_name)
        if self not in logger.handlers:
            return
        logger.removeHandler(self)
        if self._previous_level is not None:
            logger.setLevel(self._previous_level)
            self._previous_level = None

    def __enter__(self) -> "DirectiveLog":
        return self.attach()

    def __exit__(self, *exc: Any) -> None:
        self.detach()

    def emit(self, record: logging.LogRecord) -> None:
        event = getattr(record, "event", None)
        if event not in EVENTS:
            return
        self._events.append(
            DirectiveEvent(
                directive=getattr(record, "directive", None),
                event=event,
                message=record.getMessage(),
                table_ref=getattr(record, "table_ref", None),
                logger=record.name,
            )
        )

    def events(self, *, event: str | None = None) -> List[DirectiveEvent]:
        return [e for e in self._events if event is None or e.event == event]

    def for_directive(self, directive: int) -> List[DirectiveEvent]:
        return [e for e in self._events if e.directive == directive]

    def dropped(self) -> List[int]:
        """Indexes of directives discarded as malformed, in text order."""
        return [e.directive for e in self._events if e.event == "malformed" and e.directive is not None]

    def by_directive(self) -> Dict[Optional[int], List[str]]:
        out: Dict[Optional[int], List[str]] = {}
        for e in self._events:
            out.setdefault(e.directive, []).append(e.event)
        return out

    def clear(self) -> None:
        self._events.clear()

    def export_jsonl(self, path: str | Path) -> int:
        """Write one JSON object per event; returns the number of lines."""
        events = list(self._events)
        with open(path, "w", encoding="utf-8") as f:
            for e in events:
                # table_ref is whatever the payload held; repr anything JSON can't take
                f.write(json.dumps(asdict(e), sort_keys=True, default=repr) + "\n")
        return len(events)
