"""Chart directive extraction.

A directive is a comment line of the form::

    #pl.chart: {"type": "line", "table": 0}

The prefix must start the line. At most one space or tab may follow the
colon; everything after it up to the end of the line is the payload. The
scan never modifies the text and yields payloads in order of appearance.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterator, Pattern

from plchart.config.settings import DIRECTIVE_PREFIX


@lru_cache(maxsize=8)
def directive_pattern(prefix: str = DIRECTIVE_PREFIX) -> Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}:[ \t]?(.*)$", re.MULTILINE)


def extract_directives(text: str, prefix: str = DIRECTIVE_PREFIX) -> Iterator[str]:
    """Yield the raw payload of every directive line in ``text``.

    A directive with nothing after the colon yields ``""``.
    """
    for match in directive_pattern(prefix).finditer(text):
        yield match.group(1).rstrip("\r")


__all__ = ["directive_pattern", "extract_directives"]
