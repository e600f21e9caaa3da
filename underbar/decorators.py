"""
underbar.decorators - Function decorators with explicit state

Each decorator returns a callable object that owns its state, so the state
can be inspected directly:

- Once: fired flag and cached result
- Memoize: cache of results keyed by the argument list
- Throttle: last call time plus at most one pending trailing call
- delay: schedules a single deferred call (stateless)

The wrapped function's exceptions always propagate to the caller, and a
call that raises leaves no trace in Once or Memoize state.
"""

import functools
import logging
import threading
import types
from typing import Any, Callable, Hashable, Optional

from underbar.scheduler import Scheduler, get_default_scheduler

logger = logging.getLogger(__name__)


def _name_of(fn: Callable) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


class _Decorated:
    """
    Shared plumbing: wrapper metadata and binding as a method.

    Used on a method, each instance gets its own copy of the decorator the
    first time the attribute is looked up, stored in the instance __dict__
    under the same name (the way functools.cached_property stores values).
    Later lookups find the copy there, so state is never shared between
    instances.
    """

    def __init__(self, fn: Callable):
        functools.update_wrapper(self, fn)
        self.fn = fn
        self.attrname: Optional[str] = None

    def __set_name__(self, owner, name):
        self.attrname = name

    def _bind(self, method: Callable) -> "_Decorated":
        """Return a fresh decorator of the same kind wrapping method."""
        raise NotImplementedError

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        if self.attrname is None:
            raise TypeError(
                f"Cannot bind {type(self).__name__} without __set_name__; "
                "decorate the method inside the class body"
            )
        try:
            cache = instance.__dict__
        except AttributeError:
            raise TypeError(
                f"No '__dict__' attribute on {type(instance).__name__!r} "
                f"to hold per-instance state for {self.attrname!r}"
            ) from None
        bound = self._bind(types.MethodType(self.fn, instance))
        bound.attrname = self.attrname
        cache[self.attrname] = bound
        return bound


class Once(_Decorated):
    """
    A function that runs at most once.

    The first call that returns normally caches its result; every later call
    returns that result without calling the function again. If the first
    call raises, nothing is cached and the next call tries again.
    """

    def __init__(self, fn: Callable):
        super().__init__(fn)
        self.fired = False
        self.result = None

    def _bind(self, method):
        return Once(method)

    def __call__(self, *args, **kwargs):
        if not self.fired:
            self.result = self.fn(*args, **kwargs)
            self.fired = True
            logger.debug("once(%s) fired", _name_of(self.fn))
        return self.result

    def __repr__(self):
        state = "fired" if self.fired else "unfired"
        return f"<Once {_name_of(self.fn)} {state}>"


def make_key(args: tuple, kwargs: dict) -> Hashable:
    """
    Build the canonical cache key for an argument list.

    Every argument is paired with its type so that 1, 1.0, True and "1" get
    different keys. Positional order matters; keyword order does not.
    """
    key = tuple((type(arg), arg) for arg in args)
    if kwargs:
        key += tuple(
            (name, type(value), value) for name, value in sorted(kwargs.items())
        )
    return key


class Memoize(_Decorated):
    """
    A function whose results are cached per distinct argument list.

    Arguments must be hashable (primitives are assumed). The cache is never
    evicted; each entry is written exactly once.
    """

    def __init__(self, fn: Callable):
        super().__init__(fn)
        self.cache: dict[Hashable, Any] = {}

    def _bind(self, method):
        return Memoize(method)

    def __call__(self, *args, **kwargs):
        key = make_key(args, kwargs)
        if key in self.cache:
            logger.debug("memoize(%s) hit for %r", _name_of(self.fn), key)
            return self.cache[key]

        logger.debug("memoize(%s) miss for %r", _name_of(self.fn), key)
        result = self.fn(*args, **kwargs)
        self.cache[key] = result
        return result

    def __repr__(self):
        return f"<Memoize {_name_of(self.fn)} entries={len(self.cache)}>"


class Throttle(_Decorated):
    """
    A function that runs at most once per wait_ms window.

    A call outside any window runs immediately (leading edge) and opens a
    new window. Calls inside the window are deferred to a single trailing
    call at the end of the window. The first deferred call schedules it and
    later ones only replace its arguments, so the last arguments win and a
    window never holds more than one timer. The trailing call opens the
    next window.

    Leading calls return the function's result; deferred calls return None.
    """

    def __init__(
        self, fn: Callable, wait_ms: float, scheduler: Optional[Scheduler] = None
    ):
        super().__init__(fn)
        self.wait_ms = wait_ms
        self.scheduler = scheduler or get_default_scheduler()
        self.last_call: Optional[float] = None
        self.pending: Any = None
        self.pending_args: Optional[tuple[tuple, dict]] = None
        self._generation = 0
        self._lock = threading.RLock()

    def _bind(self, method):
        return Throttle(method, self.wait_ms, scheduler=self.scheduler)

    def __call__(self, *args, **kwargs):
        with self._lock:
            now = self.scheduler.now()
            if self.last_call is not None and now < self.last_call + self.wait_ms:
                self.pending_args = (args, kwargs)
                if self.pending is None:
                    self.pending = self.scheduler.call_later(
                        self.last_call + self.wait_ms - now,
                        self._fire_trailing,
                        self._generation,
                    )
                    logger.debug(
                        "throttle(%s) deferred to trailing edge", _name_of(self.fn)
                    )
                else:
                    # Same window, same due time: only the arguments change
                    logger.debug(
                        "throttle(%s) replaced trailing arguments", _name_of(self.fn)
                    )
                return None

            # A trailing call that is due but has not run yet is superseded
            self._cancel_pending()
            self.last_call = now

        logger.debug("throttle(%s) leading call", _name_of(self.fn))
        return self.fn(*args, **kwargs)

    def _fire_trailing(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self.pending_args is None:
                return
            args, kwargs = self.pending_args
            self.pending = None
            self.pending_args = None
            self.last_call = self.scheduler.now()

        logger.debug("throttle(%s) trailing call", _name_of(self.fn))
        self.fn(*args, **kwargs)

    def _cancel_pending(self) -> None:
        if self.pending is not None:
            self.scheduler.cancel(self.pending)
            logger.debug("throttle(%s) cancelled trailing call", _name_of(self.fn))
        self.pending = None
        self.pending_args = None
        self._generation += 1

    def cancel(self) -> None:
        """Drop the pending trailing call, if any."""
        with self._lock:
            self._cancel_pending()

    def __repr__(self):
        state = "pending" if self.pending is not None else "idle"
        return f"<Throttle {_name_of(self.fn)} wait_ms={self.wait_ms} {state}>"


# =============================================================================
# Decorator entry points
# =============================================================================


def once(fn: Callable) -> Once:
    """Return a version of fn that can only run once."""
    return Once(fn)


def memoize(fn: Callable) -> Memoize:
    """Return a version of fn that caches results per argument list."""
    return Memoize(fn)


def delay(
    fn: Callable, wait_ms: float, *args, scheduler: Optional[Scheduler] = None
) -> Any:
    """
    Call fn(*args) once, no earlier than wait_ms milliseconds from now.

    Does not block. The return value of fn is discarded; the scheduler's
    handle is returned so the call can still be cancelled.

    Example:
        delay(print, 500, "a", "b")  # prints "a b" after 500ms
    """
    scheduler = scheduler or get_default_scheduler()
    logger.debug("delay(%s) scheduled in %sms", _name_of(fn), wait_ms)
    return scheduler.call_later(wait_ms, fn, *args)


def throttle(
    fn: Callable, wait_ms: float, scheduler: Optional[Scheduler] = None
) -> Throttle:
    """Return a version of fn that runs at most once every wait_ms milliseconds."""
    return Throttle(fn, wait_ms, scheduler=scheduler)


__all__ = [
    "Once",
    "Memoize",
    "Throttle",
    "make_key",
    "once",
    "memoize",
    "delay",
    "throttle",
]
