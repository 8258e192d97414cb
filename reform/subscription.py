"""
Reform Subscriptions - Cancellation Handles and Ownership Bags
==============================================================

Every wiring in a reactive pipeline (an observer attached to an observable, a
pending debounce timer, a derived node listening to its sources) is
represented by a `Subscription`. A subscription is released exactly once:
calling `cancel()` a second time does nothing.

`SubscriptionBag` owns a group of subscriptions and releases all of them
together. Stores keep one bag for everything they wire up, so tearing a store
down is a single `release()` call.

```python
from reform import Observable, SubscriptionBag

name = Observable("name", "Alice")
bag = SubscriptionBag()

bag.add(name.subscribe(print))
name.set("Bob")   # prints "Bob"

bag.release()
name.set("Carol")  # prints nothing
bag.release()      # no-op
```

A subscription is also callable, so it can be used anywhere an
"unsubscribe function" is expected.
"""

import logging
from typing import Callable, Iterator, List, Optional, Union

logger = logging.getLogger(__name__)


class Subscription:
    """
    Handle for an active wiring that can be released exactly once.

    Args:
        release: Called on the first `cancel()`. Later calls never reach it.
    """

    __slots__ = ("_release", "_cancelled")

    def __init__(self, release: Optional[Callable[[], None]] = None) -> None:
        self._release = release
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        release, self._release = self._release, None
        if release is not None:
            release()

    def __call__(self) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"Subscription({state})"


class SubscriptionBag:
    """
    Owns a set of subscriptions and releases them together.

    Once released, the bag stays released: anything added afterwards is
    cancelled immediately so late wiring can never outlive its owner.
    """

    def __init__(self) -> None:
        self._subscriptions: List[Subscription] = []
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def add(
        self, subscription: Union[Subscription, Callable[[], None]]
    ) -> Subscription:
        """
        Take ownership of a subscription.

        Plain callables are wrapped in a `Subscription` so that teardown
        functions (such as a node's ``dispose``) can be owned directly.

        Returns:
            The owned `Subscription`.
        """
        if not isinstance(subscription, Subscription):
            subscription = Subscription(subscription)

        if self._released:
            logger.debug("Bag already released, cancelling %r", subscription)
            subscription.cancel()
            return subscription

        self._subscriptions.append(subscription)
        return subscription

    def release(self) -> None:
        """Cancel every owned subscription, newest first. Idempotent."""
        if self._released:
            return
        self._released = True

        subscriptions, self._subscriptions = self._subscriptions, []
        logger.debug("Releasing %d subscriptions", len(subscriptions))
        for subscription in reversed(subscriptions):
            subscription.cancel()

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __iter__(self) -> Iterator[Subscription]:
        return iter(list(self._subscriptions))

    def __enter__(self) -> "SubscriptionBag":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.release()
        return False
