"""Conversion helpers shared by the lamp controller and its interfaces."""

from __future__ import annotations

import re
from collections.abc import Iterable

ULONG_MAX = 0xFFFFFFFF

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    """Parse a leading integer the way a C ``atol`` does; 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def is_number_string(text: str) -> bool:
    """Return True when every character of ``text`` is an ASCII digit.

    An empty string counts as a number.
    """
    return all("0" <= ch <= "9" for ch in text)


def ul_list_to_string(values: Iterable[int]) -> str:
    """Join integers into a comma separated string."""
    return ",".join(str(value) for value in values)


def string_to_ul_list(text: str) -> list[int]:
    """Split a comma separated string into unsigned 32-bit integers.

    Fields that do not start with a number become 0; negative numbers wrap.
    """
    return [_to_int(part) & ULONG_MAX for part in text.split(",")]


def timer_string_to_seconds(text: str) -> int:
    """Convert an ``HHMMSS`` string into seconds since midnight.

    Raises ValueError when the string is not exactly six characters long.
    """
    if len(text) != 6:
        raise ValueError(f"invalid timer format: {text!r}")
    hours, minutes, seconds = (_to_int(text[i:i + 2]) for i in (0, 2, 4))
    return (hours * 3600 + minutes * 60 + seconds) & ULONG_MAX


def seconds_to_time_string(seconds: int) -> str:
    """Format seconds as ``H:M:S`` without zero padding, wrapping at 24 hours."""
    return f"{(seconds // 3600) % 24}:{(seconds // 60) % 60}:{seconds % 60}"


def string_to_bool(text: str) -> bool:
    """Return True for ``"1"`` and ``"true"``, False for anything else."""
    return text in ("1", "true")