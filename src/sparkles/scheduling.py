"""Frame schedulers that drive sparkle animation ticks.

A scheduler runs a callback once on the next frame and passes it a
millisecond timestamp that only ever increases. Each animation asks for one
frame at a time and asks again after its tick finishes, so a scheduler never
has two ticks of the same animation pending.

Available schedulers:
- WindowFrameScheduler: fires on the host window's draw event, once per
  displayed frame. This is the default when a window is available.
- ClockFrameScheduler: fixed-interval fallback on the pyglet clock that
  arcade runs on, used when there is no window to sync with.
- ManualFrameScheduler: fires only when advance() is called. Used for offline
  rendering and tests.

Example usage:
    scheduler = resolve_scheduler(window)
    handle = scheduler.request_frame(lambda timestamp: print(timestamp))
    scheduler.cancel_frame(handle)
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import TYPE_CHECKING, Any, Protocol

import pyglet

from sparkles.conf import settings
from sparkles.errors import SchedulingUnavailable

if TYPE_CHECKING:
    from collections.abc import Callable

    FrameCallback = Callable[[float], None]

logger = logging.getLogger(__name__)

DEFAULT_FRAME_STEP = 1000 / 60
"""Milliseconds ManualFrameScheduler.advance() moves the clock by default."""


class FrameScheduler(Protocol):
    """Interface every frame scheduler implements."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Run callback once on the next frame and return a handle for cancel_frame()."""
        ...

    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending callback. Unknown or already fired handles are ignored."""
        ...


class WindowFrameScheduler:
    """Paint-synchronized scheduler bound to a window's on_draw event.

    Pending callbacks are run together at the start of the next draw event,
    before the window's own drawing, so overlays are up to date when the
    frame is rendered. Callbacks requested while running are deferred to
    the following frame.
    """

    def __init__(self, window: Any, clock: Callable[[], float] = time.perf_counter) -> None:  # noqa: ANN401
        """Attach to window.

        Args:
            window: An arcade or pyglet window (anything with push_handlers).
            clock: Monotonic clock in seconds, used for timestamps.

        Raises:
            SchedulingUnavailable: If window does not dispatch events.
        """
        if not callable(getattr(window, "push_handlers", None)):
            msg = f"{type(window).__name__} does not dispatch draw events"
            raise SchedulingUnavailable(msg)
        self._window = window
        self._clock = clock
        self._origin = clock()
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)
        window.push_handlers(on_draw=self._on_draw)

    def request_frame(self, callback: FrameCallback) -> int:
        """Run callback on the next draw event."""
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Drop a pending callback."""
        self._pending.pop(handle, None)

    def close(self) -> None:
        """Detach from the window and drop every pending callback."""
        self._pending.clear()
        self._window.remove_handlers(on_draw=self._on_draw)

    def _on_draw(self) -> None:
        if not self._pending:
            return
        timestamp = (self._clock() - self._origin) * 1000
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback(timestamp)


class ClockFrameScheduler:
    """Fixed-interval scheduler on the pyglet clock.

    Approximates the display refresh rate when no window is available.
    Callbacks only fire while something ticks the pyglet clock, such as
    arcade.run() or pyglet.app.run(). Without an event loop an effect stays
    ACTIVE but never advances; drive it with ManualFrameScheduler instead.
    """

    def __init__(self, interval: float | None = None, clock: Callable[[], float] = time.perf_counter) -> None:
        """Initialize the scheduler.

        Args:
            interval: Seconds between frames. Defaults to settings.SPARKLE_FALLBACK_FRAME_INTERVAL.
            clock: Monotonic clock in seconds, used for timestamps.
        """
        self.interval = settings.SPARKLE_FALLBACK_FRAME_INTERVAL if interval is None else interval
        self._clock = clock
        self._origin = clock()
        self._pending: dict[int, Callable[[float], None]] = {}
        self._ids = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        """Run callback after one interval."""
        handle = next(self._ids)

        def fire(_delta_time: float) -> None:
            self._pending.pop(handle, None)
            callback((self._clock() - self._origin) * 1000)

        self._pending[handle] = fire
        pyglet.clock.schedule_once(fire, self.interval)
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Unschedule a pending callback."""
        fire = self._pending.pop(handle, None)
        if fire is not None:
            pyglet.clock.unschedule(fire)

    def close(self) -> None:
        """Unschedule every pending callback."""
        for fire in self._pending.values():
            pyglet.clock.unschedule(fire)
        self._pending.clear()


class ManualFrameScheduler:
    """Scheduler that only fires when told to.

    Attributes:
        time: Timestamp in milliseconds passed to the last fired callbacks.
    """

    def __init__(self, start: float = 0.0) -> None:
        """Initialize with the clock at start milliseconds."""
        self.time = start
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    @property
    def pending_count(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        """Queue callback for the next advance()."""
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Drop a queued callback."""
        self._pending.pop(handle, None)

    def advance(self, timestamp: float | None = None, step: float = DEFAULT_FRAME_STEP) -> int:
        """Fire every callback queued before this call.

        Args:
            timestamp: New clock value in milliseconds. Defaults to time + step.
            step: Milliseconds to move the clock when timestamp is not given.

        Returns:
            Number of callbacks fired.
        """
        self.time = self.time + step if timestamp is None else timestamp
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback(self.time)
        return len(callbacks)

    def run(self, frames: int, step: float = DEFAULT_FRAME_STEP) -> int:
        """Advance up to frames times, stopping early once nothing is pending.

        Returns:
            Number of frames that fired at least one callback.
        """
        fired = 0
        for _ in range(frames):
            if not self._pending:
                break
            self.advance(step=step)
            fired += 1
        return fired


def resolve_scheduler(window: Any = None) -> WindowFrameScheduler | ClockFrameScheduler:  # noqa: ANN401
    """Pick the best scheduler for a host.

    Uses the window's draw event when possible. Falls back to the fixed
    interval clock otherwise. Never raises.

    Args:
        window: Optional host window to synchronize with.

    Returns:
        A ready-to-use scheduler.
    """
    if window is not None:
        try:
            return WindowFrameScheduler(window)
        except SchedulingUnavailable as e:
            logger.warning("Paint-synchronized scheduling unavailable, using fixed interval: %s", e)
    else:
        logger.debug("No window given, using fixed interval scheduling")
    return ClockFrameScheduler()
