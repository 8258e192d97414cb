"""
Reform Operations - Natural Language Reactive Operations and Operator Mixins
===========================================================================

Methods and operators shared by every observable:

- `then(func)` / `>>` - Transform values into a derived observable
- `alongside(other)` / `+` - Combine observables by latest value
- `debounce(interval, scheduler)` - Wait for a quiet period before emitting

```python
password = Observable("password", "")
password_again = Observable("password_again", "")

are_equal = (password + password_again) >> (lambda a, b: a == b)
settled = password.debounce(0.2, scheduler)
```
"""

from typing import TYPE_CHECKING, Any, Callable, TypeVar

if TYPE_CHECKING:
    from ..scheduler import Scheduler
    from .computed import ComputedObservable
    from .debounced import DebouncedObservable
    from .merged import MergedObservable

T = TypeVar("T")
U = TypeVar("U")


class OperatorMixin:
    """Mixin providing the reactive operators used to build pipelines."""

    def then(self, func: Callable[..., U]) -> "ComputedObservable[U]":
        """
        Transform this observable's value with ``func``.

        Values of merged observables are unpacked into positional arguments,
        so ``(a + b).then(lambda x, y: ...)`` receives both values.
        """
        from .computed import ComputedObservable

        return ComputedObservable(
            key=f"{getattr(self, 'key', 'unknown')}>>{getattr(func, '__name__', 'func')}",
            computation_func=func,
            source_observable=self,
        )

    def __rshift__(self, func: Callable[..., U]) -> "ComputedObservable[U]":
        return self.then(func)

    def alongside(self, *others: Any) -> "MergedObservable":
        """Combine with other observables into a latest-value tuple."""
        from .merged import MergedObservable

        return MergedObservable(self, *others)

    def __add__(self, other: Any) -> "MergedObservable":
        return self.alongside(other)

    def debounce(
        self, interval: float, scheduler: "Scheduler", distinct: bool = True
    ) -> "DebouncedObservable":
        """
        Emit the latest value once it has been stable for ``interval`` seconds.

        Args:
            interval: Quiet period in seconds.
            scheduler: Context the timers run on.
            distinct: Suppress a settled value equal to the previous one.
        """
        from .debounced import DebouncedObservable

        return DebouncedObservable(self, interval, scheduler, distinct=distinct)
