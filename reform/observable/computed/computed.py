"""
Reform Observable Computed - Computed Observable Implementation
===============================================================

This module provides the ComputedObservable class, a read-only observable that
derives its value from another observable.

Key characteristics:
- **Read-only**: Cannot be set from outside (prevents accidental mutation)
- **Eager**: Recomputes synchronously whenever its source changes
- **Deduplicated**: Observers are only notified when the result changes
- **Null-aware**: While the source has no value (`NULL_EVENT`) the computation
  is not run and the computed value is `NULL_EVENT` too

```python
username = Observable("username", "jo")
is_long_enough = username >> (lambda name: len(name) >= 3)

print(is_long_enough.value)  # False
username.set("john")
print(is_long_enough.value)  # True

is_long_enough.set(True)     # ValueError: ComputedObservable is read-only
```

Internal Updates
----------------

The framework writes computed values through ``_set_computed_value()``.
Stores use the same entry point for their read-only output fields.
"""

from typing import Any, Callable, Optional, TypeVar

from ..primitives.observable import NULL_EVENT, Observable

T = TypeVar("T")


class ComputedObservable(Observable[T]):
    """
    A read-only observable whose value is derived from a source observable.

    Args:
        key: Name used in reprs and log records.
        initial_value: Value used when there is no source to compute from.
        computation_func: Function applied to each source value.
        source_observable: Observable to derive from. When omitted, the
            observable is only updated through ``_set_computed_value``.
    """

    def __init__(
        self,
        key: Optional[str] = None,
        initial_value: Optional[T] = None,
        computation_func: Optional[Callable[..., T]] = None,
        source_observable: Optional[Observable] = None,
    ) -> None:
        self._computation_func = computation_func
        self._source_observable = source_observable
        self._source_subscription = None

        if source_observable is not None and computation_func is not None:
            initial_value = self._compute(source_observable.value)

        super().__init__(key, initial_value)

        if source_observable is not None and computation_func is not None:
            self._source_subscription = source_observable.subscribe(self._on_source_change)

    @property
    def source(self) -> Optional[Observable]:
        return self._source_observable

    def _compute(self, source_value: Any) -> Any:
        if source_value is NULL_EVENT:
            return NULL_EVENT

        if self._source_observable._spreads_arguments:
            return self._computation_func(*source_value)
        return self._computation_func(source_value)

    def _on_source_change(self, value: Any) -> None:
        self._set_computed_value(self._compute(value))

    def set(self, value: Optional[T]) -> "ComputedObservable[T]":
        raise ValueError(
            "ComputedObservable is read-only and cannot be set directly"
        )

    def _set_computed_value(self, value: Optional[T], force: bool = False) -> bool:
        """Internal write used by the framework. Returns True if observers were notified."""
        return self._update(value, force=force)

    def dispose(self) -> None:
        """Stop following the source. The last value stays readable."""
        if self._source_subscription is not None:
            self._source_subscription.cancel()
            self._source_subscription = None
