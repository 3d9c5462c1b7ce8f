"""JSON message protocol for the WebSocket control channel."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from .clock import Clock, TimeUnit
from .lamp import LampController
from .temperature import TemperatureMonitor
from .utils import ULONG_MAX, is_number_string

_MAX_WIFI_FIELD = 40


def _dump(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"))


def _error(message: str) -> str:
    return _dump({"error": message})


_UPDATED = _dump({"updated": True})


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_bool(value: Any) -> bool:
    return bool(value) if isinstance(value, (bool, int, float)) else False


def _response(kind: str, data: Any) -> dict[str, Any]:
    return {"event": "response", "type": kind, "data": data}


def parse_profile_timer(text: str) -> int:
    """Turn ``H:M`` (anything after a second colon is ignored) into seconds.

    Returns ULONG_MAX when the text holds no usable time.
    """
    if not text or ":" not in text:
        return ULONG_MAX
    hours, rest = text.split(":", 1)
    if not rest or rest.endswith(":") and rest.index(":") == len(rest) - 1:
        return ULONG_MAX
    minutes = rest.split(":", 1)[0]
    if is_number_string(hours) and is_number_string(minutes):
        return (int(hours or 0) * 3600 + int(minutes or 0) * 60) & ULONG_MAX
    return ULONG_MAX


class WsApi:
    """Answers JSON requests about profiles, time, wifi and the sensor.

    ``on_change(kind, value)`` is called whenever settings should be saved,
    with kind ``"time"``, ``"wifi"`` or ``"profile"``.
    """

    def __init__(
        self,
        lamp: LampController,
        clock: Clock,
        temperature: TemperatureMonitor | None = None,
        on_change: Callable[[str, Any], None] | None = None,
    ) -> None:
        self.lamp = lamp
        self.clock = clock
        self.temperature = temperature
        self._on_change = on_change
        self.ssid = ""
        self.password = ""
        self.signal_quality = 0

    def _changed(self, kind: str, value: Any) -> None:
        if self._on_change is not None:
            self._on_change(kind, value)

    def handle(self, message: str) -> str | None:
        """Process one text message and return the reply, if any."""
        try:
            doc = json.loads(message)
        except ValueError:
            return _error("invalid JSON")
        if not isinstance(doc, dict):
            doc = {}
        event = doc.get("event")
        kind = doc.get("type")
        data = doc.get("data")
        if not isinstance(data, dict):
            data = {}
        if event == "get":
            getters = {
                "all": lambda: self._get_all(),
                "time": lambda: self._get_time(),
                "detector": lambda: self._get_detector(data),
                "wifi": lambda: self._get_wifi(data),
                "profile": lambda: self._get_profile(data),
            }
            getter = getters.get(kind)
            return getter() if getter else None
        if event == "update":
            updaters = {
                "time": self._update_time,
                "wifi": self._update_wifi,
                "profile": self._update_profile,
            }
            updater = updaters.get(kind)
            return updater(data) if updater else None
        if kind == "connected":
            return self.active_profile_event(self.lamp.active_profile)
        return _error("bad request")

    def profile_payload(self, number: int) -> dict[str, Any] | None:
        """Description of a profile, or None when the number is out of range."""
        if not 1 <= number <= self.lamp.profile_count:
            return None
        profile, end = self.lamp.get_profile_with_end(number)
        payload: dict[str, Any] = {}
        if self.lamp.is_profile_active(number):
            payload["active"] = True
        payload.update(
            name=f"profile {number}",
            red=profile.red,
            green=profile.green,
            blue=profile.blue,
            white=profile.white,
            start=profile.start,
            end=end,
        )
        return payload

    def active_profile_event(self, number: int) -> str | None:
        """Broadcast message announcing a profile, None if there is none."""
        payload = self.profile_payload(number)
        if payload is None:
            return None
        return _dump(_response("profile", payload))

    def temperature_event(self, value: float) -> str:
        """Broadcast message carrying a temperature reading."""
        return _dump(_response("detector", {"id": "temperature", "value": value}))

    def _all_profiles(self) -> list[dict[str, Any]]:
        return [
            self.profile_payload(n) or {}
            for n in range(1, self.lamp.profile_count + 1)
        ]

    def _get_all(self) -> str:
        data = {
            "profiles": self._all_profiles(),
            "password": self.password,
            "ssid": self.ssid,
            "quality": self.signal_quality,
            "time": self.clock.format(),
        }
        return _dump(_response("all", data))

    def _get_time(self) -> str:
        data = {
            "time": self.clock.format(),
            "seconds": self.clock.format(TimeUnit.SECONDS),
            "minutes": self.clock.format(TimeUnit.MINUTES),
            "hours": self.clock.format(TimeUnit.HOURS),
        }
        return _dump(_response("time", data))

    def _get_wifi(self, req: dict[str, Any]) -> str:
        fulldata = req.get("fulldata")
        if not isinstance(fulldata, bool):
            return _error("missing parameters")
        data: dict[str, Any] = {}
        if fulldata:
            data["ssid"] = self.ssid
            data["password"] = self.password
        data["quality"] = self.signal_quality
        return _dump(_response("wifi", data))

    def _get_profile(self, req: dict[str, Any]) -> str:
        ident = req.get("id")
        single = _is_int(ident)
        data: dict[str, Any] = {}
        if _as_bool(req.get("active")):
            data["profile"] = self.profile_payload(self.lamp.get_active_profile()) or {}
        elif single:
            data["profile"] = self.profile_payload(ident) or {}
        else:
            data["profiles"] = self._all_profiles()
        return _dump(_response("profile" if single else "profiles", data))

    def _get_detector(self, req: dict[str, Any]) -> str | None:
        if req.get("id") != "temperature":
            return None
        value = self.temperature.temperature if self.temperature is not None else 0.0
        return _dump(_response("detector", {"id": "temperature", "value": value}))

    def _update_time(self, data: dict[str, Any]) -> str:
        fields = [data.get(k) for k in ("hours", "minutes", "seconds")]
        if not all(_is_int(v) for v in fields):
            return _error("missing parameters")
        hours, minutes, seconds = (v & 0xFF for v in fields)
        if hours > 23 or minutes > 59 or seconds > 59:
            return _error("invalid time")
        total = hours * 3600 + minutes * 60 + seconds
        self.clock.set_time(total)
        self._changed("time", total)
        return _UPDATED

    def _update_wifi(self, data: dict[str, Any]) -> str:
        ssid = data.get("ssid")
        password = data.get("password")
        if not isinstance(ssid, str) and not isinstance(password, str):
            return _error("missing parameters")
        ssid = ssid if isinstance(ssid, str) else ""
        password = password if isinstance(password, str) else ""
        if len(ssid) > _MAX_WIFI_FIELD:
            return _error("ssid too long")
        if len(password) > _MAX_WIFI_FIELD:
            return _error("password too long")
        if ssid:
            self.ssid = ssid
        if password:
            self.password = password
        self._changed("wifi", (self.ssid, self.password))
        return _UPDATED

    def _update_profile(self, data: dict[str, Any]) -> str:
        ints = [data.get(k) for k in ("id", "red", "green", "blue", "white")]
        timer = data.get("timer")
        if not all(_is_int(v) for v in ints) or not isinstance(timer, str):
            return _error("missing parameters")
        number, *colors = (v & ULONG_MAX for v in ints)
        if not 1 <= number <= self.lamp.profile_count:
            return _error("profile isn't exist")
        values = [*colors, parse_profile_timer(timer)]
        self.lamp.set_profile(number, values)
        self._changed("profile", (number, values))
        return _UPDATED