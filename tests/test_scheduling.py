"""Unit tests for frame schedulers."""

import unittest
from unittest.mock import MagicMock, patch

from sparkles.conf import settings
from sparkles.errors import SchedulingUnavailable
from sparkles.scheduling import (
    ClockFrameScheduler,
    ManualFrameScheduler,
    WindowFrameScheduler,
    resolve_scheduler,
)


class TestManualFrameScheduler(unittest.TestCase):
    """Test ManualFrameScheduler."""

    def test_advance_fires_pending(self) -> None:
        """Test that advance() runs queued callbacks with the new time."""
        scheduler = ManualFrameScheduler()
        callback = MagicMock()
        scheduler.request_frame(callback)

        fired = scheduler.advance(16.0)

        assert fired == 1
        callback.assert_called_once_with(16.0)
        assert scheduler.pending_count == 0

    def test_default_step(self) -> None:
        """Test that time moves by one 60 Hz frame by default."""
        scheduler = ManualFrameScheduler()
        scheduler.advance()
        scheduler.advance()
        assert abs(scheduler.time - 2000 / 60) < 1e-9

    def test_cancel(self) -> None:
        """Test that cancelled callbacks never fire."""
        scheduler = ManualFrameScheduler()
        callback = MagicMock()
        handle = scheduler.request_frame(callback)

        scheduler.cancel_frame(handle)
        scheduler.cancel_frame(handle)
        scheduler.advance()

        callback.assert_not_called()

    def test_requests_during_advance_wait(self) -> None:
        """Test that callbacks queued while firing run on the next frame."""
        scheduler = ManualFrameScheduler()
        calls = []

        def tick(timestamp: float) -> None:
            calls.append(timestamp)
            scheduler.request_frame(tick)

        scheduler.request_frame(tick)
        scheduler.advance(1)
        scheduler.advance(2)

        assert calls == [1, 2]

    def test_run_stops_when_idle(self) -> None:
        """Test that run() stops early once nothing is pending."""
        scheduler = ManualFrameScheduler()
        scheduler.request_frame(MagicMock())

        assert scheduler.run(10) == 1


class TestWindowFrameScheduler(unittest.TestCase):
    """Test WindowFrameScheduler."""

    def setUp(self) -> None:
        """Attach to a mock window with a fake clock."""
        self.window = MagicMock()
        self.now = 5.0
        self.scheduler = WindowFrameScheduler(self.window, clock=lambda: self.now)
        self.on_draw = self.window.push_handlers.call_args.kwargs["on_draw"]

    def test_fires_on_draw(self) -> None:
        """Test that pending callbacks run on the next draw with a ms timestamp."""
        callback = MagicMock()
        self.scheduler.request_frame(callback)
        self.now = 5.5

        self.on_draw()

        callback.assert_called_once_with(500.0)

    def test_fires_once(self) -> None:
        """Test that a callback runs on one draw only."""
        callback = MagicMock()
        self.scheduler.request_frame(callback)

        self.on_draw()
        self.on_draw()

        callback.assert_called_once()

    def test_cancel(self) -> None:
        """Test that cancelled callbacks are dropped."""
        callback = MagicMock()
        handle = self.scheduler.request_frame(callback)

        self.scheduler.cancel_frame(handle)
        self.on_draw()

        callback.assert_not_called()

    def test_close_removes_handler(self) -> None:
        """Test that close() detaches from the window."""
        self.scheduler.close()
        self.window.remove_handlers.assert_called_once_with(on_draw=self.on_draw)

    def test_window_without_events(self) -> None:
        """Test that windows without event dispatch are rejected."""
        with self.assertRaises(SchedulingUnavailable):
            WindowFrameScheduler(object())


class TestClockFrameScheduler(unittest.TestCase):
    """Test ClockFrameScheduler."""

    def test_schedules_once_per_request(self) -> None:
        """Test that requests go to the pyglet clock with the interval."""
        with patch("sparkles.scheduling.pyglet.clock") as clock:
            scheduler = ClockFrameScheduler(0.05, clock=lambda: 0.0)
            callback = MagicMock()
            scheduler.request_frame(callback)

            fire, interval = clock.schedule_once.call_args.args
            fire(0.05)

        assert interval == 0.05
        callback.assert_called_once_with(0.0)

    def test_interval_defaults_to_setting(self) -> None:
        """Test the SPARKLE_FALLBACK_FRAME_INTERVAL default."""
        settings.configure(SPARKLE_FALLBACK_FRAME_INTERVAL=0.1)
        assert ClockFrameScheduler().interval == 0.1

    def test_cancel_unschedules(self) -> None:
        """Test that cancelling removes the clock entry, once."""
        with patch("sparkles.scheduling.pyglet.clock") as clock:
            scheduler = ClockFrameScheduler()
            handle = scheduler.request_frame(MagicMock())
            fire = clock.schedule_once.call_args.args[0]

            scheduler.cancel_frame(handle)
            scheduler.cancel_frame(handle)

        clock.unschedule.assert_called_once_with(fire)

    def test_close_unschedules_everything(self) -> None:
        """Test that close() drops every pending callback from the clock."""
        with patch("sparkles.scheduling.pyglet.clock") as clock:
            scheduler = ClockFrameScheduler()
            scheduler.request_frame(MagicMock())
            scheduler.request_frame(MagicMock())
            fires = [call.args[0] for call in clock.schedule_once.call_args_list]

            scheduler.close()
            scheduler.close()

        assert [call.args[0] for call in clock.unschedule.call_args_list] == fires


class TestResolveScheduler(unittest.TestCase):
    """Test resolve_scheduler()."""

    def test_window(self) -> None:
        """Test that windows get a paint-synchronized scheduler."""
        assert isinstance(resolve_scheduler(MagicMock()), WindowFrameScheduler)

    def test_no_window(self) -> None:
        """Test the fixed-interval fallback without a window."""
        assert isinstance(resolve_scheduler(), ClockFrameScheduler)

    def test_unusable_window_falls_back(self) -> None:
        """Test that unusable windows fall back with a warning instead of raising."""
        with self.assertLogs("sparkles.scheduling", level="WARNING"):
            scheduler = resolve_scheduler(object())

        assert isinstance(scheduler, ClockFrameScheduler)


if __name__ == "__main__":
    unittest.main()
