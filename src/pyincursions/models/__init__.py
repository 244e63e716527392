"""Pydantic models for the incursions cache."""

from pyincursions.models.cache import IncursionsCache, IncursionsCacheEntry
from pyincursions.models.incursion import IncursionInfo, IncursionState

__all__ = [
    "IncursionInfo",
    "IncursionState",
    "IncursionsCache",
    "IncursionsCacheEntry",
]
