"""Value converters applied to collected text before it is committed.

WHY: The API transmits every value as text. Numbers, flags and
delimited lists need converting before they land in a product, and the
same handful of conversions recurs across every response shape.

HOW: Small pure functions taking the raw (already stripped) text.
convert_list and convert_choice are factories returning a converter
configured with a delimiter or a lookup table.

RULES:
- Integer text -> int, decimal or exponent text -> float
- Blank text converts to None (numbers) or [] (lists)
- Non-numeric text raises ValueError; converters never guess
- Booleans: "1" is True, as the API encodes flags
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

Converter = Callable[[Any], Any]

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_TRUE_VALUES = frozenset({"1", "true", "yes"})


def identity(value: Any) -> Any:
    return value


def convert_number(value: Any) -> int | float | None:
    """Convert API text to int or float.

    RULES:
    - "12" -> 12, "-3" -> -3, "12.50" -> 12.5, "1.2e+06" -> 1200000.0
    - "" or whitespace -> None
    - Non-string numbers pass through unchanged; None stays None
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if not text:
        return None
    if _INTEGER_RE.match(text):
        return int(text)
    return float(text)


def convert_boolean(value: Any) -> bool:
    """Return True for "1" (and "true"/"yes"), False for anything else."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def convert_list(delimiter: str, item: Converter | None = None) -> Converter:
    """Build a converter splitting text on delimiter.

    An empty delimiter splits into single characters, which the API uses
    for officer authority codes ("XWCE" -> ["X", "W", "C", "E"]).
    """
    if not isinstance(delimiter, str):
        raise TypeError(f"Invalid list delimiter: {delimiter!r}")
    convert_item = item or identity

    def _convert(value: Any) -> list[Any]:
        text = str(value).strip()
        if not text:
            return []
        parts = list(text) if delimiter == "" else text.split(delimiter)
        return [convert_item(part) for part in parts if part != ""]

    return _convert


def convert_choice(mapping: dict[str, Any], default: Any = None) -> Converter:
    """Build a converter looking the text up in mapping."""

    def _convert(value: Any) -> Any:
        return mapping.get(str(value).strip(), default)

    return _convert


def convert_null_if_zero(value: Any) -> Any:
    """Return None for "0" or blank text; the API uses "0" for "nobody"."""
    text = str(value).strip()
    if text in ("", "0"):
        return None
    return text
