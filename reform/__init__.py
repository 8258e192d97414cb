"""
Reform - Reactive Form Validation
=================================

Observables, debounced inputs and latest-value combinators, plus a sign-up
form store built from them.
"""

from .config import DebounceIntervals, ValidationConfig, ValidationMessages
from .observable import (
    NULL_EVENT,
    ComputedObservable,
    DebouncedObservable,
    MergedObservable,
    Observable,
)
from .scheduler import AsyncioScheduler, Scheduler, VirtualScheduler
from .store import Store, StoreSnapshot, observable, readonly
from .subscription import Subscription, SubscriptionBag
from .validation import (
    PasswordCheck,
    SignupForm,
    StrengthLevel,
    cached_scorer,
)

__all__ = [
    # Observables
    "Observable",
    "ComputedObservable",
    "MergedObservable",
    "DebouncedObservable",
    "NULL_EVENT",
    # Scheduling
    "Scheduler",
    "VirtualScheduler",
    "AsyncioScheduler",
    # Lifecycle
    "Subscription",
    "SubscriptionBag",
    # Stores
    "Store",
    "StoreSnapshot",
    "observable",
    "readonly",
    # Sign-up validation
    "SignupForm",
    "PasswordCheck",
    "StrengthLevel",
    "cached_scorer",
    # Configuration
    "ValidationConfig",
    "DebounceIntervals",
    "ValidationMessages",
]
