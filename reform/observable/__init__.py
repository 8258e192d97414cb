"""
Reform Observable Package
=========================

Building blocks of a reactive pipeline:

- `Observable`: a source value set from outside
- `ComputedObservable`: a read-only value derived with `>>` / `then()`
- `MergedObservable`: latest-value tuple built with `+` / `alongside()`
- `DebouncedObservable`: settled values built with `debounce()`
"""

from .computed import ComputedObservable
from .debounced import DebouncedObservable
from .merged import MergedObservable
from .operations import OperatorMixin
from .primitives import NULL_EVENT, Observable, PropagationContext

__all__ = [
    "NULL_EVENT",
    "Observable",
    "ComputedObservable",
    "MergedObservable",
    "DebouncedObservable",
    "OperatorMixin",
    "PropagationContext",
]
