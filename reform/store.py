"""
Reform Store - Reactive State Containers
========================================

A Store groups the observables a presentation layer talks to. Subclasses
declare two kinds of fields:

**observable(initial)**: A writable input field. Assigning to the attribute
sets the observable; reading the attribute returns the `Observable` itself.

**readonly(initial)**: An output field. Only the store's own pipeline can
write it (through `Store._assign`); assigning from outside raises
`ValueError`.

Each store instance gets its own observables and its own `SubscriptionBag`.
Disposing the store releases the bag exactly once. After disposal, writes are
ignored and reads return the last values, so a view that still holds a
reference during its own teardown never crashes.

```python
from reform import Store, observable, readonly

class GreetingStore(Store):
    name = observable("")
    greeting = readonly("")

    def __init__(self):
        super().__init__()
        self._own((self.name >> (lambda n: f"Hello {n}")).subscribe(
            self._sink("greeting")
        ))

store = GreetingStore()
store.name = "Alice"
print(store.greeting.value)  # "Hello Alice"
store.dispose()
store.name = "Bob"           # ignored
```
"""

import logging
import weakref
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
)

from .observable import ComputedObservable, Observable
from .subscription import Subscription, SubscriptionBag

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubscriptableDescriptor(Generic[T]):
    """
    Descriptor for observable attributes of Store subclasses.

    Args:
        initial_value: Value each store instance starts with.
        readonly: Reject assignment from outside the store.
    """

    def __init__(self, initial_value: Optional[T] = None, readonly: bool = False) -> None:
        self.attr_name: Optional[str] = None
        self._initial_value = initial_value
        self._readonly = readonly

    @property
    def initial_value(self) -> Optional[T]:
        return self._initial_value

    @property
    def is_readonly(self) -> bool:
        return self._readonly

    def __set_name__(self, owner: Type, name: str) -> None:
        self.attr_name = name

    def create_observable(self) -> Observable:
        if self._readonly:
            return ComputedObservable(self.attr_name, self._initial_value)
        return Observable(self.attr_name, self._initial_value)

    def __get__(
        self, instance: Optional["Store"], owner: Type
    ) -> Union["SubscriptableDescriptor[T]", Observable]:
        if instance is None:
            return self
        return instance._observables[self.attr_name]

    def __set__(self, instance: "Store", value: Optional[T]) -> None:
        if self._readonly:
            raise ValueError(f"'{self.attr_name}' is read-only and cannot be set directly")
        if instance.disposed:
            logger.debug("Ignoring write to '%s' on disposed %r", self.attr_name, instance)
            return
        instance._observables[self.attr_name].set(value)


def observable(initial_value: Optional[T] = None) -> Any:
    """Declare a writable observable field on a Store subclass."""
    return SubscriptableDescriptor(initial_value)


def readonly(initial_value: Optional[T] = None) -> Any:
    """Declare an output field that only the store itself can write."""
    return SubscriptableDescriptor(initial_value, readonly=True)


class StoreSnapshot:
    """
    Immutable snapshot of store observable values at a specific point in time.
    """

    def __init__(self, values: Dict[str, Any]) -> None:
        object.__setattr__(self, "_values", dict(values))

    def __getattr__(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("StoreSnapshot is immutable")

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoreSnapshot):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self._values.items())
        return f"StoreSnapshot({fields})"


class StoreMeta(type):
    """
    Metaclass that records a Store's observable attributes in definition
    order, including the ones inherited from base stores.
    """

    def __new__(mcs, name: str, bases: tuple, namespace: dict) -> Type:
        cls = super().__new__(mcs, name, bases, namespace)

        observable_attrs: List[str] = []
        for base in reversed(cls.__mro__[1:]):
            for attr_name in getattr(base, "_observable_attrs", []):
                if attr_name not in observable_attrs:
                    observable_attrs.append(attr_name)
        for attr_name, attr_value in namespace.items():
            if isinstance(attr_value, SubscriptableDescriptor) and attr_name not in observable_attrs:
                observable_attrs.append(attr_name)

        cls._observable_attrs = observable_attrs
        return cls


class Store(metaclass=StoreMeta):
    """
    Base class for reactive state containers with observable attributes.

    The store owns a `SubscriptionBag` for every wiring it creates. The bag
    is released by `dispose()`, by leaving a ``with`` block, or when the store
    is garbage collected, whichever happens first.
    """

    _observable_attrs: List[str]

    def __init__(self) -> None:
        self._observables: Dict[str, Observable] = {
            attr_name: self._descriptor(attr_name).create_observable()
            for attr_name in self._observable_attrs
        }
        self._subscriptions = SubscriptionBag()
        self._disposed = False
        self._finalizer = weakref.finalize(self, self._subscriptions.release)

    @classmethod
    def _descriptor(cls, attr_name: str) -> SubscriptableDescriptor:
        for klass in cls.__mro__:
            if attr_name in klass.__dict__:
                return klass.__dict__[attr_name]
        raise AttributeError(attr_name)

    # ------------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------------

    def _own(self, subscription: Union[Subscription, Callable[[], None]]) -> Subscription:
        """Hand a subscription (or teardown callable) to the store's bag."""
        return self._subscriptions.add(subscription)

    def _assign(self, attr_name: str, value: Any) -> None:
        """Write a field from inside the store. No-op once disposed."""
        if self._disposed:
            logger.debug("Ignoring assignment to '%s' after dispose", attr_name)
            return
        target = self._observables[attr_name]
        if isinstance(target, ComputedObservable):
            target._set_computed_value(value)
        else:
            target.set(value)

    def _sink(self, attr_name: str) -> Callable[[Any], None]:
        """
        Observer that assigns incoming values to ``attr_name``.

        Holds the store weakly so the pipeline never keeps it alive.
        """
        store_ref = weakref.ref(self)

        def assign(value: Any) -> None:
            store = store_ref()
            if store is not None:
                store._assign(attr_name, value)

        return assign

    # ------------------------------------------------------------------------
    # Presentation layer API
    # ------------------------------------------------------------------------

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Current values of all observable attributes, in definition order."""
        return {name: obs.value for name, obs in self._observables.items()}

    def subscribe(self, func: Callable[[StoreSnapshot], None]) -> Subscription:
        """
        Call ``func`` with a fresh snapshot whenever an output field changes.

        Only read-only fields are watched, so input that the pipeline has not
        processed yet never produces a snapshot. The subscription is owned by
        the store and released with it.
        """

        store_ref = weakref.ref(self)

        def store_reaction(_: Any = None) -> None:
            store = store_ref()
            if store is not None and not store.disposed:
                func(store.snapshot())

        observables = [
            obs
            for name, obs in self._observables.items()
            if self._descriptor(name).is_readonly
        ]
        for obs in observables:
            obs.add_observer(store_reaction)

        def unsubscribe() -> None:
            for obs in observables:
                obs.remove_observer(store_reaction)

        return self._own(Subscription(unsubscribe))

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Release every wiring owned by this store. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        logger.debug("Disposing %r", self)
        self._finalizer()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.dispose()
        return False

    def __repr__(self) -> str:
        state = " disposed" if self._disposed else ""
        return f"<{type(self).__name__}{state}>"
