"""
Reform Debounced Observable - Settling Raw Input
================================================

A `DebouncedObservable` turns a value that changes on every keystroke into a
stream of *settled* values:

- each change of the source cancels the pending timer and starts a new one;
- when a timer fires, the source's latest value is emitted, unless it equals
  the value emitted last time (``distinct=True``, the default);
- the source's current value at construction goes through the same window,
  so an idle input settles once on its own.

Before the first settle the value is `NULL_EVENT`.

```python
scheduler = VirtualScheduler()
username = Observable("username", "")
settled = username.debounce(0.8, scheduler)

username.set("j")
username.set("jo")
username.set("joe")
scheduler.advance(1.0)
print(settled.value)  # "joe" -- one emission for the whole burst
```
"""

import logging
from typing import Any, Optional

from ..scheduler import Cancellable, Scheduler
from .computed import ComputedObservable
from .primitives.observable import NULL_EVENT, Observable

logger = logging.getLogger(__name__)


class DebouncedObservable(ComputedObservable):
    """
    Read-only observable that emits a source's value after a quiet period.

    Args:
        source: Observable to debounce.
        interval: Quiet period in seconds.
        scheduler: Context that runs the settle timers.
        distinct: Suppress settled values equal to the last emitted one.
    """

    def __init__(
        self,
        source: Observable,
        interval: float,
        scheduler: Scheduler,
        distinct: bool = True,
    ) -> None:
        if interval < 0:
            raise ValueError(f"debounce interval must be non-negative, got {interval}")

        super().__init__(f"{source.key}~{interval:g}s", NULL_EVENT)
        self._source_observable = source
        self._spreads_arguments = source._spreads_arguments
        self._interval = interval
        self._scheduler = scheduler
        self._distinct = distinct
        self._pending: Optional[Cancellable] = None
        self._last_emitted: Any = NULL_EVENT
        self._disposed = False

        self._source_subscription = source.subscribe(self._on_source_change)
        if source.value is not NULL_EVENT:
            self._schedule()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_settling(self) -> bool:
        """True while a timer is pending for an unsettled change."""
        return self._pending is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _on_source_change(self, _: Any) -> None:
        if self._disposed:
            return
        self._schedule()

    def _schedule(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = self._scheduler.call_later(self._interval, self._settle)

    def _settle(self) -> None:
        self._pending = None
        if self._disposed:
            return

        value = self._source_observable.value
        if self._distinct and value == self._last_emitted:
            logger.debug("%s settled on unchanged value, suppressed", self._key)
            return

        logger.debug("%s settled", self._key)
        self._last_emitted = value
        self._set_computed_value(value, force=not self._distinct)

    def dispose(self) -> None:
        """Cancel the pending timer and detach from the source. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        super().dispose()
