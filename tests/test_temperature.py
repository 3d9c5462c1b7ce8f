from lampctl.temperature import TemperatureMonitor


class FakeMs:
    def __init__(self):
        self.value = 0

    def __call__(self):
        return self.value


def test_poll_waits_for_delay():
    ms = FakeMs()
    readings = iter([21.5, 22.0])
    seen = []
    monitor = TemperatureMonitor(lambda: next(readings), seen.append, 4000, ms)
    ms.value = 3999
    assert monitor.poll() is False
    assert monitor.temperature == 0.0
    assert seen == []


def test_poll_reads_and_reports_after_delay():
    ms = FakeMs()
    readings = iter([21.5, 22.0])
    seen = []
    monitor = TemperatureMonitor(lambda: next(readings), seen.append, 4000, ms)
    ms.value = 4000
    assert monitor.poll() is True
    assert monitor.temperature == 21.5
    assert seen == [21.5]


def test_poll_restarts_delay_after_reading():
    ms = FakeMs()
    readings = iter([21.5, 22.0])
    monitor = TemperatureMonitor(lambda: next(readings), None, 1000, ms)
    ms.value = 1000
    assert monitor.poll() is True
    ms.value = 1500
    assert monitor.poll() is False
    ms.value = 2000
    assert monitor.poll() is True
    assert monitor.temperature == 22.0