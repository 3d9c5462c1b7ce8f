"""Periodic polling of a temperature sensor."""

from __future__ import annotations

import time
from collections.abc import Callable


def _default_monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class TemperatureMonitor:
    """Reads a sensor no more often than every ``request_delay`` milliseconds."""

    def __init__(
        self,
        read_sensor: Callable[[], float],
        on_reading: Callable[[float], None] | None = None,
        request_delay: int = 4000,
        monotonic_ms: Callable[[], int] | None = None,
    ) -> None:
        self._read = read_sensor
        self._on_reading = on_reading
        self.request_delay = request_delay
        self._now = monotonic_ms or _default_monotonic_ms
        self._started = self._now()
        self.temperature = 0.0

    def poll(self) -> bool:
        """Take a reading if the delay has passed; True when one was taken."""
        if self._now() - self._started < self.request_delay:
            return False
        self.temperature = self._read()
        if self._on_reading is not None:
            self._on_reading(self.temperature)
        self._started = self._now()
        return True