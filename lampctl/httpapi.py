"""Request handling helpers for the HTTP control interface."""

from __future__ import annotations

import base64
import binascii
import json
from enum import Enum

from .lamp import LampController
from .utils import (
    ULONG_MAX,
    _to_int,
    is_number_string,
    seconds_to_time_string,
)

TOKEN_LIFETIME_MS = 3_600_000

_COLOR_INDEX = {"red": 0, "green": 1, "blue": 2, "white": 3}


class TimePattern(Enum):
    """Layouts a time string can be checked against."""

    HHMMSS = "HHMMSS"
    HHMM = "HHMM"
    HHMMSS_DDMMYYYY = "HHMMSS_DDMMYYYY"
    HHMMSS_DDMMYY = "HHMMSS_DDMMYY"
    HHMM_DDMMYYYY = "HHMM_DDMMYYYY"
    HHMM_DDMMYY = "HHMM_DDMMYY"
    DDMMYYYY = "DDMMYYYY"
    DDMMYY = "DDMMYY"


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _substring(text: str, left: int, right: int | None = None) -> str:
    """Slice with swapped bounds when reversed and clamping at the end."""
    if right is None or right < 0:
        right = len(text)
    if left > right:
        left, right = right, left
    if left > len(text):
        return ""
    return text[left:min(right, len(text))]


def create_token(username: str, now_ms: int, key: str) -> str:
    """Build a session token for ``username`` valid for one hour from ``now_ms``."""
    payload = json.dumps(
        {"username": username, "exp": (now_ms + TOKEN_LIFETIME_MS) & ULONG_MAX},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return f"{_b64encode(payload)}.{_b64encode(key)}"


def check_token(token: str, now_ms: int, key: str) -> bool:
    """Return True when the token is well formed, unexpired and signed with ``key``."""
    if "." not in token:
        return False
    payload, signature = token.split(".", 1)
    try:
        decoded = base64.b64decode(payload, validate=True).decode("utf-8")
        doc = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return False
    exp = doc.get("exp") if isinstance(doc, dict) else None
    if not isinstance(exp, int) or isinstance(exp, bool):
        exp = 0
    if now_ms > exp:
        return False
    return signature == _b64encode(key)


def match_time_pattern(text: str, pattern: TimePattern = TimePattern.HHMM) -> bool:
    """Check ``text`` against ``HH:MM`` or ``HH:MM:SS``; other layouts never match."""
    if pattern is TimePattern.HHMM:
        if len(text) != 5:
            return False
        first = text.find(":")
        if first == -1 or first == len(text) - 1:
            return False
        return is_number_string(text[:first]) and is_number_string(text[first + 1:])
    if pattern is TimePattern.HHMMSS:
        if len(text) != 8:
            return False
        first = text.find(":")
        if first == -1 or first == len(text) - 1:
            return False
        if text.count(":") != 2:
            return False
        second = text.find(":", first + 1)
        hours = text[:first]
        minutes = _substring(text, 3, second)
        seconds = text[text.rfind(":") + 1:]
        return all(is_number_string(part) for part in (hours, minutes, seconds))
    return False


def parse_hhmm_timer(text: str) -> str:
    """Turn ``H:M`` into a count of seconds as a string; other text is returned as is."""
    if not text or ":" not in text:
        return text
    first = text.index(":")
    if first == len(text) - 1:
        return text
    hours, minutes = text[:first], text[first + 1:]
    if is_number_string(hours) and is_number_string(minutes):
        return str((_to_int(hours) * 3600 + _to_int(minutes) * 60) & ULONG_MAX)
    return text


def parse_time_update(
    hours: str | None, minutes: str | None, seconds: str | None
) -> int:
    """Seconds since midnight from request arguments.

    Raises ValueError when an argument is missing or out of range.
    """
    h = (_to_int(hours) if hours is not None else 25) & 0xFF
    m = (_to_int(minutes) if minutes is not None else 61) & 0xFF
    s = (_to_int(seconds) if seconds is not None else 61) & 0xFF
    if h > 24 or m > 60 or s > 60:
        raise ValueError("request params error")
    return h * 3600 + m * 60 + s


def _update_one(
    lamp: LampController,
    number: int,
    all_colors: bool,
    bright: str,
    color: str,
    timer: str,
) -> None:
    values = list(lamp.get_profile(number))
    if is_number_string(bright):
        level = _to_int(bright) & ULONG_MAX
        if all_colors:
            values[:4] = [level] * 4
        elif color in _COLOR_INDEX:
            values[_COLOR_INDEX[color]] = level
    if is_number_string(timer):
        values[4] = _to_int(timer) & ULONG_MAX
    lamp.set_profile(number, values)


def apply_profile_update(
    lamp: LampController,
    profile: str | None,
    color: str = "",
    bright: str = "",
    timer: str = "",
) -> list[int]:
    """Apply a profile update request and return the numbers of changed profiles.

    ``profile`` is ``"all"`` or text ending in the profile digit. Raises
    ValueError when it is missing or names no profile.
    """
    if profile is None:
        raise ValueError("request with incorrect body")
    color = color or ""
    bright = bright or ""
    timer = parse_hhmm_timer(timer or "")
    all_colors = color == "all"
    if profile == "all":
        numbers = list(range(1, lamp.profile_count + 1))
    else:
        last = profile[-1:]
        numbers = [_to_int(last) if is_number_string(last) else 0]
    for number in numbers:
        _update_one(lamp, number, all_colors, bright, color, timer)
    return numbers


def profiles_info(lamp: LampController) -> str:
    """Plain-text summary of every profile, one line each."""
    lines = []
    for number in range(1, lamp.profile_count + 1):
        p = lamp.get_profile(number)
        lines.append(
            f"Profile {number} [red: {p.red}],[green: {p.green}],"
            f"[blue: {p.blue}],[white: {p.white}],"
            f"[starts from: {seconds_to_time_string(p.start)}]\n"
        )
    return "".join(lines)