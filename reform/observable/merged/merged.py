"""
Reform MergedObservable - Latest-Value Combination
==================================================

This module provides a MergedObservable that combines multiple observables
into a single reactive tuple.

Merging follows latest-value semantics, like a spreadsheet recompute: whenever
any source changes, the tuple is rebuilt from the most recent value of every
source. Sources are never paired up by arrival order.

Until every source has a value, the merged value is `NULL_EVENT` and nothing
is emitted.

```python
password = Observable("password", "abc")
password_again = Observable("password_again", "abd")

pair = password + password_again
print(pair.value)  # ("abc", "abd")

are_equal = pair >> (lambda a, b: a == b)
password_again.set("abc")
print(are_equal.value)  # True
```
"""

from typing import Any, Callable, List, Tuple

from ..computed import ComputedObservable
from ..primitives.observable import NULL_EVENT, Observable


class MergedObservable(ComputedObservable[Tuple[Any, ...]]):
    """
    A read-only tuple of the latest values of several observables.

    Nested merges are flattened, so ``(a + b) + c`` has the same three sources
    as ``a + b + c``.

    Raises:
        ValueError: If no observables are provided.
        TypeError: If a source is not an observable.
    """

    _spreads_arguments = True

    def __init__(self, *observables: Observable) -> None:
        if not observables:
            raise ValueError("At least one observable must be provided for merging")

        flattened: List[Observable] = []
        for obs in observables:
            if isinstance(obs, MergedObservable):
                flattened.extend(obs._source_observables)
            elif isinstance(obs, Observable):
                flattened.append(obs)
            else:
                raise TypeError(f"Cannot merge Observable with {type(obs).__name__}")

        self._source_observables = flattened
        self._current_values = [obs.value for obs in flattened]

        key = "+".join(obs.key for obs in flattened)
        super().__init__(key, self._combined())

        self._source_subscriptions = [
            obs.subscribe(self._create_update_handler(index))
            for index, obs in enumerate(flattened)
        ]

    @property
    def sources(self) -> Tuple[Observable, ...]:
        return tuple(self._source_observables)

    def _combined(self) -> Any:
        if any(value is NULL_EVENT for value in self._current_values):
            return NULL_EVENT
        return tuple(self._current_values)

    def _create_update_handler(self, index: int) -> Callable[[Any], None]:
        def update_merged(_: Any = None) -> None:
            self._current_values[index] = self._source_observables[index].value
            self._set_computed_value(self._combined())

        return update_merged

    def __add__(self, other: Observable) -> "MergedObservable":
        return MergedObservable(*self._source_observables, other)

    def __iter__(self):
        """Support tuple unpacking of the current values."""
        return iter(self._current_values)

    def __len__(self) -> int:
        return len(self._source_observables)

    def dispose(self) -> None:
        for subscription in self._source_subscriptions:
            subscription.cancel()
        self._source_subscriptions = []
