"""Software clock that drives the lamp schedule."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from .utils import ULONG_MAX

if TYPE_CHECKING:
    from .lamp import LampController

_RESYNC_INTERVAL_MS = 10_800_000  # three hours
_SLEEP_AFTER_TICKS = 2500
_LAST_SECOND_OF_DAY = 86399


def _default_monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class TimeUnit(Enum):
    """The part of the time that ``Clock.format`` renders."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    FULLTIME = "fulltime"


class Clock:
    """Counts seconds from a millisecond source and keeps a calendar date.

    ``time_source``, when set, returns epoch seconds and is consulted every
    three hours to resynchronise the clock.
    """

    def __init__(
        self,
        lamp: "LampController | None" = None,
        monotonic_ms: Callable[[], int] | None = None,
    ) -> None:
        self._lamp = lamp
        self._now = monotonic_ms or _default_monotonic_ms
        self._timer = self._now()
        self._synced_at = 0
        self.time_source: Callable[[], int] | None = None
        self.fulltime = 0
        self.sleeping = False
        self.sleep_timer = 0
        self.day = 1
        self.month = 1
        self.year = 1970
        self._date_updated = False

    def tick(self) -> None:
        """Advance the clock, run the lamp schedule and roll the date."""
        now = self._now()
        elapsed = now - self._timer
        self.fulltime = (self.fulltime + elapsed // 1000) & ULONG_MAX
        self._timer = now - elapsed % 1000
        if self._lamp is not None:
            self._lamp.check_time(self.fulltime)
        if self.time_source is not None and now - self._synced_at >= _RESYNC_INTERVAL_MS:
            self.sync(self.time_source())
        if not self.sleeping:
            self.sleep_timer += 1
        if self.sleep_timer >= _SLEEP_AFTER_TICKS:
            self.sleeping = True
        if self.fulltime == _LAST_SECOND_OF_DAY:
            if not self._date_updated:
                self._date_updated = True
                self._advance_day()
        else:
            self._date_updated = False

    def _advance_day(self) -> None:
        self.day += 1
        if self.day > 31:
            self.day = 1
            self.month += 1
            if self.month > 12:
                self.month = 1
                self.year += 1

    def format(self, unit: TimeUnit = TimeUnit.FULLTIME) -> str:
        """Render the time of day, or one of its parts without padding."""
        hours = (self.fulltime // 3600) % 24
        minutes = (self.fulltime // 60) % 60
        seconds = self.fulltime % 60
        if unit is TimeUnit.SECONDS:
            return str(seconds)
        if unit is TimeUnit.MINUTES:
            return str(minutes)
        if unit is TimeUnit.HOURS:
            return str(hours)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def date_string(self) -> str:
        """The date as ``DD.MM.YYYY``."""
        return f"{self.day:02d}.{self.month:02d}.{self.year}"

    def set_time(self, seconds: int) -> None:
        self.fulltime = seconds & ULONG_MAX

    def sync(self, epoch: int) -> None:
        """Set the clock and the date from epoch seconds."""
        self.fulltime = epoch & ULONG_MAX
        self._synced_at = self._now()
        moment = datetime.fromtimestamp(self.fulltime, timezone.utc)
        self.day, self.month, self.year = moment.day, moment.month, moment.year

    def wake(self) -> None:
        """Leave sleep mode and restart the sleep countdown."""
        self.sleeping = False
        self.sleep_timer = 0