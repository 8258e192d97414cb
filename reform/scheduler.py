"""
Reform Schedulers - The Designated Delivery Context
===================================================

Debounced observables never block. They ask a scheduler to run a callback
later and cancel that request when a newer value arrives. All timer callbacks
run on the scheduler's single context, so every recomputation triggered by a
settled value finishes before the next timer can fire.

Two schedulers are provided:

**VirtualScheduler**: A manually driven clock. Time only moves when
`advance()` is called, which makes debounce behaviour fully deterministic.
Used by tests and by headless drivers that replay recorded input.

**AsyncioScheduler**: Delegates to an asyncio event loop's ``call_later``.
Use it when the form lives inside an asyncio application.

Any object with ``now()`` and ``call_later(delay, callback)`` returning a
handle with ``cancel()`` can act as a scheduler.
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Cancellable(Protocol):
    """A pending callback that can be cancelled before it runs."""

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """
    Protocol for the single context that runs deferred callbacks.

    Example:
        ```python
        def run_later(scheduler: Scheduler) -> None:
            handle = scheduler.call_later(0.2, lambda: print("settled"))
            handle.cancel()  # never prints
        ```
    """

    def now(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


# ============================================================================
# VIRTUAL TIME
# ============================================================================


class TimerHandle:
    """Pending callback registered with a `VirtualScheduler`."""

    __slots__ = ("due", "callback", "_cancelled")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = " cancelled" if self._cancelled else ""
        return f"<TimerHandle due={self.due:.3f}{state}>"


class VirtualScheduler:
    """
    Scheduler driven by an explicit clock.

    Callbacks fire in due-time order; callbacks due at the same instant fire
    in the order they were scheduled.

    Example:
        ```python
        scheduler = VirtualScheduler()
        scheduler.call_later(0.8, lambda: print("username settled"))
        scheduler.advance(0.5)  # nothing yet
        scheduler.advance(0.5)  # prints
        ```
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        handle = TimerHandle(self._now + delay, callback)
        heapq.heappush(self._queue, (handle.due, next(self._sequence), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, running every callback that falls due.

        Args:
            seconds: How far to move the clock.

        Returns:
            The number of callbacks that ran.
        """
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards ({seconds})")

        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self) -> int:
        """Advance until no callbacks remain, including ones scheduled on the way."""
        fired = 0
        while self._queue:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = max(self._now, due)
            handle.callback()
            fired += 1
        return fired


# ============================================================================
# ASYNCIO
# ============================================================================


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Without an explicit loop, every `call_later` needs a running loop.
    `SignupForm` schedules its first timers while it is constructed, so build
    the form inside a coroutine, or pass ``loop=`` when building it outside:

    ```python
    loop = asyncio.new_event_loop()
    form = SignupForm(scorer, scheduler=AsyncioScheduler(loop))
    loop.run_until_complete(asyncio.sleep(1.0))
    ```

    Args:
        loop: Loop to schedule on. When omitted, the loop running at the time
            of each call is used.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)
