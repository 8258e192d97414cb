"""
Reform Observable Merged Module
===============================

Latest-value combination of several observables into one tuple.
"""

from .merged import MergedObservable

__all__ = ["MergedObservable"]
