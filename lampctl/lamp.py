"""Lamp profiles and the schedule that switches between them."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .utils import ULONG_MAX

# The schedule wraps around after this many seconds (sic: not 86400).
_DAY_WRAP = 86000
_DAY = 86400
_COLORS = ("red", "green", "blue", "white")


@dataclass
class Profile:
    """Brightness per channel and the second of the day the profile starts."""

    red: int = 0
    green: int = 0
    blue: int = 0
    white: int = 0
    start: int = ULONG_MAX

    def __iter__(self) -> Iterator[int]:
        return iter((self.red, self.green, self.blue, self.white, self.start))

    @classmethod
    def from_values(cls, values: Iterable[int]) -> "Profile":
        items = list(values)
        if len(items) != 5:
            raise ValueError("a profile needs exactly five values")
        return cls(*items)


@dataclass
class _Timer:
    start: int = ULONG_MAX
    end: int = ULONG_MAX


def _unset_profile() -> Profile:
    return Profile(0, 0, 0, 0, ULONG_MAX)


class LampController:
    """Holds the lamp profiles and activates them as the time of day passes."""

    def __init__(
        self,
        profile_count: int = 4,
        on_activate: Callable[[int], None] | None = None,
    ) -> None:
        self.profile_count = profile_count
        self._on_activate = on_activate
        self._profiles = {n: _unset_profile() for n in range(1, profile_count + 1)}
        self._default = Profile(ULONG_MAX, ULONG_MAX, ULONG_MAX, ULONG_MAX, ULONG_MAX)
        self._timers = [_Timer() for _ in range(profile_count)]
        self._on = {color: False for color in _COLORS}
        self._bright = {color: 0 for color in _COLORS}
        self.end_timer = ULONG_MAX
        self.active_profile = 0
        self.any_profile_active = False
        self.settings_loaded = False

    @property
    def timers(self) -> list[tuple[int, int]]:
        """The (start, end) pairs of the schedule slots."""
        return [(t.start, t.end) for t in self._timers]

    def setup(self) -> None:
        """Reset the profiles unless settings were loaded beforehand."""
        if not self.settings_loaded:
            self._profiles = {n: _unset_profile() for n in self._profiles}
        self._default = Profile(ULONG_MAX, ULONG_MAX, ULONG_MAX, ULONG_MAX, ULONG_MAX)

    def set_settings_loaded(self, loaded: bool) -> None:
        self.settings_loaded = loaded

    def profile_start(self, number: int) -> int:
        """Start second of a profile, or ULONG_MAX for an unknown one."""
        profile = self._profiles.get(number)
        return ULONG_MAX if profile is None else profile.start

    def set_profile(self, number: int, values: Iterable[int]) -> None:
        """Store five values (red, green, blue, white, start) for a profile."""
        if number not in self._profiles:
            raise ValueError(f"no such profile: {number}")
        profile = Profile.from_values(values)
        self._profiles[number] = profile
        timer = self._timers[number - 1]
        timer.start = profile.start
        timer.end = self._end_for_new_start(profile.start)

    def _end_for_new_start(self, new_start: int) -> int:
        end = ULONG_MAX
        index = -1
        for i, timer in enumerate(self._timers):
            if new_start > timer.start:
                end = timer.end
                index = i
        last = self.profile_count - 1
        if 0 <= index != last:
            self._timers[index].end = new_start
        return (end + _DAY_WRAP) & ULONG_MAX if index == last else end

    def recompute_end_timers(self) -> None:
        """Sort the schedule and make each slot end where the next begins."""
        starts = sorted(t.start for t in self._timers)
        for timer, start, following in zip(self._timers, starts, starts[1:]):
            timer.start = start
            timer.end = following
        self._timers[-1].start = starts[-1]
        self._timers[-1].end = (starts[0] + _DAY_WRAP) & ULONG_MAX

    def get_profile(self, number: int) -> Profile:
        """A copy of a profile; the all-ULONG_MAX default for an unknown one."""
        return dataclasses.replace(self._profiles.get(number, self._default))

    def _end_for_start(self, start: int) -> int | None:
        for timer in self._timers:
            if timer.start == start:
                return timer.end - _DAY if timer.end >= _DAY else timer.end
        return None

    def get_profile_with_end(self, number: int) -> tuple[Profile, int | None]:
        """A profile with the second its slot ends, None if it has no slot."""
        profile = self.get_profile(number)
        return profile, self._end_for_start(profile.start)

    def get_active_profile(self) -> int:
        """Number of the active profile among all but the last, or 0."""
        for number in range(1, self.profile_count):
            if self.is_profile_active(number):
                return number
        return 0

    def is_profile_active(self, number: int) -> bool:
        return self.active_profile == number

    def load_profile(self, number: int) -> None:
        """Apply a profile's brightness to the lamp and notify the listener."""
        profile = self.get_profile(number)
        if profile == self._default:
            return
        for color, value in zip(_COLORS, profile):
            self._on[color] = value > 0
            self._bright[color] = value & 0xFF
        end = self._end_for_start(profile.start)
        if end is not None:
            self.end_timer = end
        if self._on_activate is not None:
            self._on_activate(number)

    def check_time(self, fulltime: int) -> None:
        """Activate the profile whose slot holds the given time."""
        now = fulltime % _DAY
        if self.end_timer != ULONG_MAX and now < self.end_timer:
            return
        for number in range(1, self.profile_count + 1):
            tmr = self.get_profile(number).start
            if not tmr:
                continue
            start = end = ULONG_MAX
            for timer in self._timers:
                if timer.start == tmr:
                    start, end = timer.start, timer.end
            if start == ULONG_MAX or end == ULONG_MAX:
                continue
            moment = _DAY_WRAP + now if end >= _DAY_WRAP and now < start else now
            if start <= moment < end:
                self.any_profile_active = True
                if self.active_profile != number:
                    self.load_profile(number)
                    self.active_profile = number
                break

    def check_end(self, hour: int, minute: int, second: int, number: int | None = None) -> bool:
        """Drop the active profile once the given time reaches its limit.

        The limit is the start of profile ``number`` when one is given,
        otherwise the current end timer. Returns True when it was dropped.
        """
        limit = self.end_timer if number is None else self.profile_start(number)
        if hour * 3600 + minute * 60 + second < limit:
            return False
        self.any_profile_active = False
        self.load_profile(0)
        self.active_profile = 0
        return True

    def lamp_state(self) -> dict[str, tuple[bool, int]]:
        """Per colour, whether the channel is on and its brightness."""
        return {color: (self._on[color], self._bright[color]) for color in _COLORS}