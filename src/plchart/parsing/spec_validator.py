"""Validation and normalization of directive payloads into ``ChartSpec``.

Only structure is checked here: the payload must be a JSON object. Field
values are carried through as written (an unknown ``type`` is still a valid
spec; the resolver decides it has nothing to render). Missing or falsy
``overlays`` normalize to an empty tuple and non-object overlay entries are
dropped.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator, List, Optional, Tuple

from plchart.domain.chart_spec import BaseChartSpec, ChartSpec
from plchart.config.settings import DIRECTIVE_PREFIX
from plchart.parsing.directive_extractor import extract_directives
from plchart.parsing.errors import MalformedDirectiveError

log = logging.getLogger(__name__)


def _normalize_overlays(raw: Any) -> Tuple[BaseChartSpec, ...]:
    if not raw or not isinstance(raw, list):
        return ()
    overlays: List[BaseChartSpec] = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            log.debug("dropping overlay %d: expected object, got %s", idx, type(entry).__name__)
            continue
        overlays.append(BaseChartSpec(type=entry.get("type"), table=entry.get("table")))
    return tuple(overlays)


def parse_spec(payload: str) -> ChartSpec:
    """Parse one directive payload.

    Raises:
        MalformedDirectiveError: Payload is not valid JSON or not a JSON object.
    """
    try:
        raw = json.loads(payload)
    except (ValueError, RecursionError, TypeError) as e:
        raise MalformedDirectiveError(
            "Directive payload is not valid JSON", context={"payload": payload, "reason": str(e)}
        ) from e
    if not isinstance(raw, dict):
        raise MalformedDirectiveError(
            "Directive payload must be a JSON object",
            context={"payload": payload, "reason": f"got {type(raw).__name__}"},
        )
    title = raw.get("title")
    return ChartSpec(
        type=raw.get("type"),
        table=raw.get("table"),
        title=title if isinstance(title, str) else None,
        overlays=_normalize_overlays(raw.get("overlays")),
    )


def validate_spec(payload: str, *, directive: Optional[int] = None) -> Optional[ChartSpec]:
    """Return the canonical spec for ``payload`` or ``None`` if it is malformed.

    ``directive`` is the payload's position among the directives of its text;
    it is attached to the drop record so diagnostics can point at the line.
    """
    try:
        return parse_spec(payload)
    except MalformedDirectiveError as e:
        log.debug(
            "dropping chart directive: %s (%s)",
            e,
            e.context.get("reason"),
            extra={"directive": directive, "event": "malformed"},
        )
        return None


def iter_specs(text: str, prefix: str = DIRECTIVE_PREFIX) -> Iterator[Tuple[int, ChartSpec]]:
    """Yield ``(directive index, spec)`` for every well-formed directive in ``text``."""
    for idx, payload in enumerate(extract_directives(text, prefix)):
        spec = validate_spec(payload, directive=idx)
        if spec is not None:
            yield idx, spec


def extract_specs(text: str, prefix: str = DIRECTIVE_PREFIX) -> List[ChartSpec]:
    """Extract and validate every directive in ``text``, keeping appearance order."""
    return [spec for _idx, spec in iter_specs(text, prefix)]


__all__ = ["parse_spec", "validate_spec", "iter_specs", "extract_specs"]
