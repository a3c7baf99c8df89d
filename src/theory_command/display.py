"""Display-name formatting for theory invocations.

Renders ``Type.Method(x: 42, y: "text")`` style names from a method
descriptor and the supplied argument values. Formatting never raises: the
name is needed for reporting arity failures as well as passing runs.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

from theory_command.binding import bind_arguments
from theory_command.models import MethodDescriptor

logger = logging.getLogger(__name__)

MAX_STRING_LENGTH = 50
"""Default number of string characters kept before truncation."""

MISSING_VALUE = "???"
"""Placeholder for an absent value, and for the name of an excess value."""

_TRUNCATION_MARKER = "..."

# XML 1.0 cannot carry NUL even as a character reference.
_NUL = "\0"
_NUL_ESCAPE = "\\0"


def format_value(value: Any, max_string_length: int = MAX_STRING_LENGTH) -> str:
    """Render a single argument value for a display name.

    Strings are double-quoted with NUL characters written as ``\\0``;
    strings longer than *max_string_length* keep only their first
    *max_string_length* characters and get ``...`` after the closing quote.
    ``None`` renders as ``null``; anything else uses ``str()``.

    Args:
        value: The argument value.
        max_string_length: Truncation threshold for strings.

    Returns:
        The rendered value.
    """
    if value is None:
        return "null"

    if isinstance(value, str):
        truncated = len(value) > max_string_length
        text = value[:max_string_length] if truncated else value
        rendered = '"' + text.replace(_NUL, _NUL_ESCAPE) + '"'
        return rendered + _TRUNCATION_MARKER if truncated else rendered

    try:
        return str(value)
    except Exception:
        logger.warning(
            "Could not render %s value for display name",
            type(value).__name__,
            exc_info=True,
        )
        return f"<unprintable {type(value).__name__}>"


def format_display_name(
    method: MethodDescriptor,
    arguments: Sequence[Any] | None,
    max_string_length: int = MAX_STRING_LENGTH,
) -> str:
    """Build the display name for one theory invocation.

    Declared parameters appear in order as ``name: value``, with ``???``
    standing in for values that were not supplied. Values beyond the last
    declared parameter are appended as ``???: value``.

    Args:
        method: Descriptor of the theory method.
        arguments: Supplied values, or ``None`` for none.
        max_string_length: Truncation threshold for string values.

    Returns:
        The display name, e.g. ``My display name(x: 42, y: ???)``.
    """
    binding = bind_arguments(method.parameters, arguments)
    prefix = method.metadata.display_name or method.qualified_name

    parts = [
        f"{param.name}: {format_value(value, max_string_length)}"
        for param, value in binding.pairs()
    ]
    parts.extend(f"{param.name}: {MISSING_VALUE}" for param in binding.missing)
    parts.extend(
        f"{MISSING_VALUE}: {format_value(value, max_string_length)}"
        for value in binding.excess
    )
    return f"{prefix}({', '.join(parts)})"
