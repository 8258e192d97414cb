"""
Reform Observable - Core Reactive Value Implementation
======================================================

This module provides the source node of every pipeline: a reactive value that
notifies its observers when it changes.

Change propagation is breadth-first. Notifications are queued and drained by a
single loop, so a long chain of derived observables never grows the call
stack, and every notification caused by one change is delivered before the
call that made the change returns.

```python
from reform import Observable

username = Observable("username", "")
username.subscribe(lambda value: print(f"typed: {value}"))

username.set("jo")    # prints "typed: jo"
username.set("jo")    # equal value, nothing is printed
```
"""

import threading
from collections import deque
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ...subscription import Subscription
from ..operations import OperatorMixin

T = TypeVar("T")


# ============================================================================
# SENTINEL VALUES
# ============================================================================


class _NullEvent:
    """Sentinel for 'no value yet' in derived observables."""

    def __repr__(self) -> str:
        return "NULL_EVENT"

    def __bool__(self) -> bool:
        return False


NULL_EVENT = _NullEvent()


# ============================================================================
# PROPAGATION
# ============================================================================


class PropagationContext:
    """Manages breadth-first change propagation to prevent stack overflow."""

    _local = threading.local()

    @classmethod
    def _get_state(cls) -> dict:
        if not hasattr(cls._local, "state"):
            cls._local.state = {"is_propagating": False, "pending": deque()}
        return cls._local.state

    @classmethod
    def _enqueue_notification(cls, observer: Callable, value: Any) -> None:
        cls._get_state()["pending"].append((observer, value))

    @classmethod
    def _process_notifications(cls) -> None:
        state = cls._get_state()
        if state["is_propagating"]:
            return

        state["is_propagating"] = True
        try:
            while state["pending"]:
                observer, value = state["pending"].popleft()
                observer(value)
        except Exception:
            # Drop the rest of the aborted change.
            state["pending"].clear()
            raise
        finally:
            state["is_propagating"] = False

    @classmethod
    def _reset(cls) -> None:
        cls._local.__dict__.clear()


# ============================================================================
# OBSERVABLE
# ============================================================================


class Observable(OperatorMixin, Generic[T]):
    """
    A reactive value that notifies its observers when it changes.

    Setting a value equal to the current one is ignored, so observers only
    ever see actual changes. `NULL_EVENT` is never delivered to observers.

    Args:
        key: Name used in reprs and log records.
        initial_value: Starting value.
    """

    # Values are tuples that derived observables spread into their function.
    _spreads_arguments = False

    def __init__(self, key: Optional[str] = None, initial_value: Optional[T] = None) -> None:
        self._key = key or "<unnamed>"
        self._value = initial_value
        self._observers: List[Callable[[T], None]] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Optional[T]:
        return self._value

    def set(self, value: Optional[T]) -> "Observable[T]":
        self._update(value)
        return self

    def get(self) -> Optional[T]:
        return self.value

    def _update(self, value: Any, force: bool = False) -> bool:
        """Store a new value and notify observers. Returns False if nothing changed."""
        if not force and value == self._value:
            return False
        self._value = value
        self._notify_observers(value)
        return True

    # ------------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------------

    def add_observer(self, observer: Callable[[T], None]) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: Callable[[T], None]) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def has_observer(self, observer: Callable[[T], None]) -> bool:
        return observer in self._observers

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(self, func: Callable[[T], None]) -> Subscription:
        """
        Call ``func`` with every new value.

        Returns:
            A `Subscription`; cancelling (or calling) it removes ``func``.
        """
        self.add_observer(func)
        return Subscription(lambda: self.remove_observer(func))

    def unsubscribe(self, func: Callable[[T], None]) -> None:
        self.remove_observer(func)

    def _notify_observers(self, value: Any) -> None:
        if value is NULL_EVENT:
            return

        for observer in tuple(self._observers):
            PropagationContext._enqueue_notification(observer, value)

        PropagationContext._process_notifications()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key!r}, {self._value!r})"
