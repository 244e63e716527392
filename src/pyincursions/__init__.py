"""pyincursions - Persistent cache for an EVE Online incursion tracker bot."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyincursions")
except PackageNotFoundError:
    __version__ = "0+local"
from pyincursions.cache import IncursionsCacheStore
from pyincursions.config import CacheConfig
from pyincursions.exceptions import (
    CacheLoadError,
    CachePersistError,
    IncursionsCacheError,
    IncursionsConfigError,
    IncursionsError,
)
from pyincursions.models import (
    IncursionInfo,
    IncursionsCache,
    IncursionsCacheEntry,
    IncursionState,
)

__all__ = [
    "__version__",
    "CacheConfig",
    "CacheLoadError",
    "CachePersistError",
    "IncursionInfo",
    "IncursionState",
    "IncursionsCache",
    "IncursionsCacheEntry",
    "IncursionsCacheError",
    "IncursionsCacheStore",
    "IncursionsConfigError",
    "IncursionsError",
]
