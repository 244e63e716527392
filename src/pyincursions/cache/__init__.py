"""Incursion cache layer.

The store in this package is the single owner of the persisted
incursion state. It is created once at process start and handed to the
fetch and presentation layers explicitly.
"""

from pyincursions.cache.store import IncursionsCacheStore

__all__ = ["IncursionsCacheStore"]
