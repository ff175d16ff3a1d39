"""Resolution of ``{{path}}`` template tokens against an execution context."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Sequence

TOKEN_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

_MISSING = object()


def _lookup(path: str, context: Any) -> Any:
    value = context
    for segment in path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                return _MISSING
            value = value[segment]
        elif (
            isinstance(value, Sequence)
            and not isinstance(value, (str, bytes))
            and segment.isdigit()
        ):
            index = int(segment)
            if index >= len(value):
                return _MISSING
            value = value[index]
        else:
            return _MISSING
    return value


def get_context_value(path: str, context: Mapping[str, Any]) -> Any:
    """Return the value at dotted ``path`` inside ``context``.

    Each segment indexes into the next nested mapping (or list, for integer
    segments). ``None`` is returned when any segment is missing.
    """
    value = _lookup(path, context)
    return None if value is _MISSING else value


def to_text(value: Any) -> str:
    """Render a context value as template text.

    ``None`` is empty, booleans are lowercase, mappings and lists are JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def interpolate(template: str, context: Mapping[str, Any]) -> str:
    """Substitute ``{{path}}`` tokens in ``template`` with context values.

    Unresolved tokens are left in the output exactly as written.
    """

    def _replace(match: re.Match) -> str:
        value = _lookup(match.group(1).strip(), context)
        if value is _MISSING:
            return match.group(0)
        return to_text(value)

    return TOKEN_PATTERN.sub(_replace, template)


def interpolate_value(value: Any, context: Mapping[str, Any]) -> Any:
    """Interpolate every templated string nested inside ``value``.

    Strings without a ``{{`` marker and non-string scalars pass through
    untouched.
    """
    if isinstance(value, str):
        return interpolate(value, context) if "{{" in value else value
    if isinstance(value, Mapping):
        return {k: interpolate_value(v, context) for k, v in value.items()}
    if isinstance(value, list):
        return [interpolate_value(item, context) for item in value]
    return value


__all__ = [
    "get_context_value",
    "interpolate",
    "interpolate_value",
    "to_text",
    "TOKEN_PATTERN",
]
