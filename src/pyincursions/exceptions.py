"""Custom exception hierarchy for pyincursions."""

from __future__ import annotations

from pathlib import Path


class IncursionsError(Exception):
    """Base exception for all pyincursions errors."""


class IncursionsConfigError(IncursionsError):
    """Invalid or missing configuration."""


class IncursionsCacheError(IncursionsError):
    """Failure reading or writing the incursions cache file."""

    def __init__(self, message: str, *, path: Path | str = "") -> None:
        self.path = str(path)
        super().__init__(message)


class CacheLoadError(IncursionsCacheError):
    """Cache file exists but could not be read or parsed.

    The store catches this internally and falls back to an empty cache.
    """


class CachePersistError(IncursionsCacheError):
    """Cache could not be written to disk.

    The store catches this internally; the in-memory state stays
    authoritative until the next successful write.
    """
