import pytest

from lampctl.lamp import LampController, Profile
from lampctl.utils import ULONG_MAX

STARTS = {1: 3600, 2: 7200, 3: 36000, 4: 72000}
BRIGHT = {1: (10, 20, 30, 40), 2: (50, 0, 60, 0), 3: (1, 2, 3, 4), 4: (90, 80, 70, 60)}


def _scheduled(events=None):
    lamp = LampController(4, None if events is None else events.append)
    lamp.setup()
    for number, start in STARTS.items():
        lamp.set_profile(number, [*BRIGHT[number], start])
    lamp.recompute_end_timers()
    return lamp


def test_unknown_profile_is_default():
    lamp = LampController()
    lamp.setup()
    assert list(lamp.get_profile(9)) == [ULONG_MAX] * 5
    assert list(lamp.get_profile(0)) == [ULONG_MAX] * 5


def test_setup_resets_profiles():
    lamp = LampController()
    lamp.set_profile(2, [1, 2, 3, 4, 500])
    lamp.setup()
    assert lamp.get_profile(2) == Profile(0, 0, 0, 0, ULONG_MAX)


def test_setup_keeps_loaded_profiles():
    lamp = LampController()
    lamp.set_profile(2, [1, 2, 3, 4, 500])
    lamp.set_settings_loaded(True)
    lamp.setup()
    assert list(lamp.get_profile(2)) == [1, 2, 3, 4, 500]


def test_set_and_get_profile():
    lamp = LampController()
    lamp.setup()
    lamp.set_profile(3, Profile(5, 6, 7, 8, 1234))
    assert lamp.get_profile(3) == Profile(5, 6, 7, 8, 1234)
    assert lamp.profile_start(3) == 1234


def test_get_profile_returns_copy():
    lamp = LampController()
    lamp.setup()
    copy = lamp.get_profile(1)
    copy.red = 99
    assert lamp.get_profile(1).red == 0


@pytest.mark.parametrize("number", [0, 5, -1])
def test_set_profile_bad_number(number):
    lamp = LampController()
    with pytest.raises(ValueError):
        lamp.set_profile(number, [0, 0, 0, 0, 0])


def test_set_profile_wrong_length():
    lamp = LampController()
    with pytest.raises(ValueError):
        lamp.set_profile(1, [1, 2, 3])


@pytest.mark.parametrize("number", [0, 5])
def test_profile_start_unknown(number):
    lamp = LampController()
    lamp.setup()
    assert lamp.profile_start(number) == ULONG_MAX


def test_recompute_end_timers_chains_slots():
    lamp = _scheduled()
    timers = lamp.timers
    starts = [start for start, _ in timers]
    assert starts == sorted(STARTS.values())
    for (_, end), (next_start, _) in zip(timers, timers[1:]):
        assert end == next_start
    assert timers[-1][1] == starts[0] + 86000


def test_check_time_activates_matching_profile():
    events = []
    lamp = _scheduled(events)
    lamp.check_time(STARTS[1] + 100)
    assert lamp.active_profile == 1
    assert lamp.any_profile_active
    assert events == [1]
    assert lamp.end_timer == STARTS[2]
    assert lamp.lamp_state()["red"] == (True, BRIGHT[1][0])


def test_check_time_keeps_profile_until_end():
    events = []
    lamp = _scheduled(events)
    lamp.check_time(STARTS[1] + 100)
    lamp.check_time(STARTS[2] - 1)
    assert lamp.active_profile == 1
    lamp.check_time(STARTS[2] + 1)
    assert lamp.active_profile == 2
    assert events == [1, 2]
    assert lamp.lamp_state()["green"] == (False, 0)


def test_check_time_uses_time_of_day():
    lamp = _scheduled()
    lamp.check_time(86400 + STARTS[1] + 100)
    assert lamp.active_profile == 1


def test_last_profile_end_wraps_past_midnight():
    lamp = _scheduled()
    lamp.check_time(STARTS[4] + 100)
    assert lamp.active_profile == 4
    _, end = lamp.get_profile_with_end(4)
    assert lamp.end_timer == end
    assert end < STARTS[1]
    lamp.check_time(end - 1)
    assert lamp.active_profile == 4


def test_get_profile_with_end():
    lamp = _scheduled()
    profile, end = lamp.get_profile_with_end(2)
    assert list(profile) == [*BRIGHT[2], STARTS[2]]
    assert end == STARTS[3]


def test_get_active_profile():
    lamp = _scheduled()
    assert lamp.get_active_profile() == 0
    lamp.check_time(STARTS[1] + 5)
    assert lamp.get_active_profile() == 1
    assert lamp.is_profile_active(1)
    assert not lamp.is_profile_active(2)


def test_check_end_resets_at_end_timer():
    events = []
    lamp = _scheduled(events)
    lamp.check_time(STARTS[1] + 5)
    assert lamp.check_end(2, 0, 0) is True
    assert lamp.active_profile == 0
    assert not lamp.any_profile_active
    assert events == [1]


def test_check_end_against_profile_start():
    lamp = _scheduled()
    lamp.check_time(STARTS[1] + 5)
    assert lamp.check_end(0, 30, 0, 1) is False
    assert lamp.active_profile == 1


def test_load_default_profile_changes_nothing():
    events = []
    lamp = _scheduled(events)
    lamp.load_profile(1)
    before = lamp.lamp_state()
    lamp.load_profile(0)
    assert lamp.lamp_state() == before
    assert events == [1]