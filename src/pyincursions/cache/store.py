"""File-backed store for incursion cache state.

This is the only component allowed to mutate the persisted incursion
state. Every mutation rewrites the whole cache file before returning.
Persistence is best-effort: load and write failures are logged and never
raised to callers, and the in-memory state stays authoritative.
"""

from __future__ import annotations

import copy
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pyincursions._storage import JsonFileStorage
from pyincursions.cache.rotation import (
    find_dropped_incursions,
    merge_current_incursions,
    select_last_incursion,
)
from pyincursions.config import CacheConfig
from pyincursions.exceptions import CacheLoadError, CachePersistError
from pyincursions.models.cache import IncursionsCache, IncursionsCacheEntry

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _ms_to_iso(value_ms: int) -> str:
    return datetime.fromtimestamp(value_ms / 1000, tz=UTC).isoformat()


class IncursionsCacheStore:
    """Persistent cache of active incursions.

    The store loads the cache file once on construction and rewrites it
    after every mutation. Construct one instance at process start and pass
    it to whichever components need it.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        indent: int = 4,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._storage = JsonFileStorage(path, indent=indent)
        self._clock = clock
        self._cache = self._load()

    @classmethod
    def from_config(cls, config: CacheConfig, **kwargs: Any) -> IncursionsCacheStore:
        return cls(config.path, indent=config.indent, **kwargs)

    @property
    def path(self) -> Path:
        return self._storage.path

    def _load(self) -> IncursionsCache:
        try:
            data = self._storage.read()
            if data is None:
                _logger.info("No incursions cache at %s; starting empty", self._storage.path)
                return IncursionsCache()
            cache = IncursionsCache.model_validate(data)
        except (CacheLoadError, ValidationError):
            _logger.warning(
                "Failed to load incursions cache from %s; starting empty",
                self._storage.path,
                exc_info=True,
            )
            return IncursionsCache()

        _logger.debug(
            "Loaded incursions cache: current=%d last=%s",
            len(cache.current_incursions),
            cache.last_incursion.constellation_id if cache.last_incursion else None,
        )
        return cache

    def _save(self) -> None:
        try:
            self._storage.write(self._cache.to_json_dict())
        except CachePersistError:
            _logger.warning(
                "Failed to write incursions cache to %s; keeping in-memory state",
                self._storage.path,
                exc_info=True,
            )

    def _update(self, **changes: Any) -> None:
        # Re-validate so values written to disk always load back.
        self._cache = IncursionsCache.model_validate({**self._cache.model_dump(), **changes})
        self._save()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> IncursionsCache:
        """Return the whole cache root object."""
        return self._cache.model_copy(deep=True)

    def get_no_incursion_message_id(self) -> str | None:
        return self._cache.no_incursion_message_id

    def get_last_incursion(self) -> IncursionsCacheEntry | None:
        return self._cache.last_incursion

    def get_current_incursions(self) -> list[IncursionsCacheEntry]:
        return list(self._cache.current_incursions)

    def get_current_incursion_by_constellation_id(self, constellation_id: int) -> IncursionsCacheEntry | None:
        for entry in self._cache.current_incursions:
            if entry.constellation_id == constellation_id:
                return entry
        return None

    def is_constellation_active(self, constellation_id: int) -> bool:
        return self.get_current_incursion_by_constellation_id(constellation_id) is not None

    def get_state_change_timestamps(self) -> dict[int, dict[str, str]]:
        return copy.deepcopy(self._cache.state_change_timestamps)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_no_incursion_message_id(self, message_id: str | int) -> None:
        """Remember the posted "no incursions" message; numeric ids are stored as text."""
        self._update(no_incursion_message_id=message_id)

    def clear_no_incursion_message_id(self) -> None:
        self._update(no_incursion_message_id=None)

    def set_state_change_timestamps(self, timestamps: Mapping[int, Mapping[str, str]]) -> None:
        """Replace the whole state-change history."""
        self._update(
            state_change_timestamps={
                int(constellation_id): dict(states) for constellation_id, states in timestamps.items()
            }
        )

    def record_state_change(self, constellation_id: int, state: str, timestamp: str | None = None) -> None:
        """Record when *constellation_id* entered *state*.

        *timestamp* defaults to the current time as an ISO-8601 UTC string.
        """
        if timestamp is None:
            timestamp = _ms_to_iso(self._clock())
        timestamps = self.get_state_change_timestamps()
        timestamps.setdefault(constellation_id, {})[state] = timestamp
        self._update(state_change_timestamps=timestamps)

    def replace_and_update(self, new_entries: Sequence[IncursionsCacheEntry]) -> None:
        """Make *new_entries* the current incursions, keeping stored positions."""
        merged = merge_current_incursions(self._cache.current_incursions, new_entries)
        self._update(current_incursions=merged)

    def check_and_rotate(self, new_entries: Sequence[IncursionsCacheEntry]) -> None:
        """Archive the newest ended incursion, then replace the current list.

        Stored entries absent from *new_entries* have ended. The one with
        the greatest ``created_at`` becomes the last incursion, stamped with
        the current time as ``updated_at``.
        """
        changes: dict[str, Any] = {}
        dropped = find_dropped_incursions(self._cache.current_incursions, new_entries)
        last = select_last_incursion(dropped)
        if last is not None:
            changes["last_incursion"] = last.touched(self._clock())
            _logger.debug(
                "Rotated %d ended incursion(s); last incursion is constellation %d",
                len(dropped),
                last.constellation_id,
            )

        changes["current_incursions"] = merge_current_incursions(self._cache.current_incursions, new_entries)
        self._update(**changes)
