"""Tests for timer.py — one-shot countdown."""

from timer import Countdown


class FakeClock:

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestCountdown:

    def test_fires_once(self):
        clock = FakeClock()
        countdown = Countdown(clock)
        countdown.start(60, round_index=2)
        clock.now = 59.5
        assert countdown.poll() is None
        assert countdown.remaining() == 0.5
        clock.now = 60
        assert countdown.poll() == 2
        clock.now = 90
        assert countdown.poll() is None
        assert not countdown.is_running

    def test_not_started(self):
        countdown = Countdown(FakeClock())
        assert countdown.poll() is None
        assert countdown.remaining() is None

    def test_restart_rearms(self):
        clock = FakeClock()
        countdown = Countdown(clock)
        countdown.start(10, round_index=1)
        clock.now = 10
        assert countdown.poll() == 1
        countdown.start(10, round_index=2)
        assert countdown.is_running
        clock.now = 20
        assert countdown.poll() == 2
