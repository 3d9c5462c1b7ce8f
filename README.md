# lampctl

Control logic for a lamp with four colour channels (red, green, blue, white)
driven by up to four daily profiles.

The package covers:

- `lampctl.lamp` — `LampController` and `Profile`: storing profiles, working
  out when each one starts and ends, and activating the right profile for the
  time of day (`check_time`).
- `lampctl.clock` — `Clock` and `TimeUnit`: a seconds-since-midnight clock
  that advances from a millisecond counter, keeps a date, tracks an idle
  "sleeping" state and drives the lamp on every `tick`.
- `lampctl.temperature` — `TemperatureMonitor`: polls a sensor callable at a
  fixed interval and reports each reading.
- `lampctl.wsapi` — `WsApi`: handles JSON messages (`get` / `update` events
  for time, wifi, profiles and the temperature detector) and produces JSON
  replies.
- `lampctl.httpapi` — helpers behind the HTTP endpoints: token creation and
  checking, time pattern matching, time and profile updates, and a plain-text
  summary of all profiles.
- `lampctl.utils` — small conversions between strings, number lists and
  timers.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from lampctl.lamp import LampController
from lampctl.clock import Clock

lamp = LampController(4, on_activate=lambda n: print("profile", n, "active"))
lamp.setup()
lamp.set_profile(1, [80, 20, 10, 100, 8 * 3600])    # from 08:00
lamp.set_profile(2, [0, 0, 30, 10, 20 * 3600])      # from 20:00
lamp.recompute_end_timers()

lamp.check_time(9 * 3600)
print(lamp.get_active_profile())   # 1
print(lamp.lamp_state())
```

Profiles are lists of five numbers: the brightness of red, green, blue and
white (0–100), and the start of the profile in seconds after midnight.