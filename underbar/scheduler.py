"""
underbar.scheduler - Timer scheduling for the time-based decorators

delay() and throttle() never sleep; they hand callbacks to a Scheduler.

- Scheduler: the interface (now / call_later / cancel)
- ThreadingScheduler: real timers backed by threading.Timer
- ManualScheduler: a virtual clock that only moves when told to, so tests
  and single-threaded event loops can drive time explicitly
- get_default_scheduler / set_default_scheduler: the scheduler used when a
  decorator is not given one
"""

import abc
import heapq
import itertools
import logging
import threading
import time
from typing import Any, Callable, Optional

from underbar.config import load_config

logger = logging.getLogger(__name__)


class Scheduler(abc.ABC):
    """Schedules callbacks to run after a delay expressed in milliseconds."""

    @abc.abstractmethod
    def now(self) -> float:
        """Current time in milliseconds on this scheduler's clock."""
        pass

    @abc.abstractmethod
    def call_later(self, delay_ms: float, callback: Callable, *args) -> Any:
        """Run callback(*args) no earlier than delay_ms from now.

        Returns a handle that can be passed to cancel().
        """
        pass

    @abc.abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a scheduled callback. Cancelling twice is harmless."""
        pass


def _run_callback(callback: Callable, args: tuple) -> None:
    try:
        callback(*args)
    except Exception:
        logger.exception("Scheduled callback %r raised", callback)
        raise


class ThreadingScheduler(Scheduler):
    """Scheduler backed by threading.Timer and time.monotonic()."""

    def __init__(self, daemon: bool = True):
        self.daemon = daemon

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable, *args) -> threading.Timer:
        timer = threading.Timer(
            max(delay_ms, 0) / 1000.0, _run_callback, args=(callback, args)
        )
        timer.daemon = self.daemon
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class ScheduledCall:
    """A pending callback on a ManualScheduler."""

    __slots__ = ("due", "order", "callback", "args", "cancelled")

    def __init__(self, due: float, order: int, callback: Callable, args: tuple):
        self.due = due
        self.order = order
        self.callback = callback
        self.args = args
        self.cancelled = False

    def __lt__(self, other: "ScheduledCall") -> bool:
        return (self.due, self.order) < (other.due, other.order)

    def __repr__(self):
        state = " cancelled" if self.cancelled else ""
        return f"<ScheduledCall due={self.due} {self.callback!r}{state}>"


class ManualScheduler(Scheduler):
    """
    A scheduler with a virtual clock.

    Time only moves through advance() or run_all(). Due callbacks run in
    order of due time; callbacks due at the same time run in the order they
    were scheduled. Callbacks run synchronously on the caller's thread, and
    anything they schedule that falls due inside the advanced window runs
    in the same pass.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: list[ScheduledCall] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable, *args) -> ScheduledCall:
        call = ScheduledCall(
            self._now + max(delay_ms, 0), next(self._counter), callback, args
        )
        heapq.heappush(self._queue, call)
        return call

    def cancel(self, handle: ScheduledCall) -> None:
        handle.cancelled = True

    @property
    def pending(self) -> list[ScheduledCall]:
        """Callbacks still waiting to run, earliest first."""
        return sorted(call for call in self._queue if not call.cancelled)

    def advance(self, ms: float) -> int:
        """Move the clock forward by ms, running everything that falls due.

        Returns the number of callbacks that ran. A raising callback does not
        stop the pass: the rest of the window still runs and the clock ends at
        now + ms. The first error is re-raised once the pass is done.
        """
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards (got {ms})")
        target = self._now + ms
        ran = 0
        error: Optional[BaseException] = None
        try:
            while self._queue and self._queue[0].due <= target:
                call = heapq.heappop(self._queue)
                if call.cancelled:
                    continue
                self._now = call.due
                ran += 1
                try:
                    _run_callback(call.callback, call.args)
                except Exception as e:
                    if error is None:
                        error = e
        finally:
            self._now = target
        if error is not None:
            raise error
        return ran

    def run_all(self) -> int:
        """Run callbacks until the queue is empty, moving the clock as needed.

        Errors are handled as in advance().
        """
        ran = 0
        error: Optional[BaseException] = None
        while self._queue:
            call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, call.due)
            ran += 1
            try:
                _run_callback(call.callback, call.args)
            except Exception as e:
                if error is None:
                    error = e
        if error is not None:
            raise error
        return ran


# =============================================================================
# Default scheduler
# =============================================================================

_default_scheduler: Optional[Scheduler] = None
_default_lock = threading.Lock()


def get_default_scheduler() -> Scheduler:
    """Return the process default scheduler, creating it on first use."""
    global _default_scheduler
    with _default_lock:
        if _default_scheduler is None:
            config = load_config()
            _default_scheduler = ThreadingScheduler(daemon=config.timer_daemon)
        return _default_scheduler


def set_default_scheduler(scheduler: Optional[Scheduler]) -> Optional[Scheduler]:
    """Replace the default scheduler and return the previous one.

    Passing None resets it so the next lookup builds a fresh one.
    """
    global _default_scheduler
    with _default_lock:
        previous = _default_scheduler
        _default_scheduler = scheduler
        return previous


__all__ = [
    "Scheduler",
    "ThreadingScheduler",
    "ScheduledCall",
    "ManualScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
]
