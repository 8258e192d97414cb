"""
Reform Observable Primitives
============================

Source observables, the `NULL_EVENT` sentinel and breadth-first propagation.
"""

from .observable import NULL_EVENT, Observable, PropagationContext

__all__ = ["NULL_EVENT", "Observable", "PropagationContext"]
