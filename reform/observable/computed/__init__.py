"""
Reform Observable Computed Module
=================================

Read-only observables derived from a source through a transformation.
"""

from .computed import ComputedObservable

__all__ = ["ComputedObservable"]
