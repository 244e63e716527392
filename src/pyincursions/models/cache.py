"""Cache entry and root cache models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pyincursions.models._base import DisplayStr, IncursionsBaseModel
from pyincursions.models.incursion import IncursionInfo


class IncursionsCacheEntry(IncursionsBaseModel):
    """An incursion snapshot plus bookkeeping timestamps.

    ``created_at`` and ``updated_at`` are epoch milliseconds.
    """

    incursion_info: IncursionInfo
    created_at: int
    updated_at: int

    @classmethod
    def create(cls, incursion_info: IncursionInfo, now_ms: int) -> IncursionsCacheEntry:
        """Wrap a freshly fetched snapshot, stamping both timestamps with *now_ms*."""
        return cls(incursion_info=incursion_info, created_at=now_ms, updated_at=now_ms)

    @property
    def constellation_id(self) -> int:
        return self.incursion_info.constellation_id

    def touched(self, now_ms: int) -> IncursionsCacheEntry:
        """Return a copy with ``updated_at`` set to *now_ms*."""
        return self.model_copy(update={"updated_at": now_ms})


class IncursionsCache(IncursionsBaseModel):
    """Root object persisted to the cache file.

    ``null`` in place of the list or mapping fields loads as empty, so a
    partially written or hand-edited file keeps its other fields.
    """

    no_incursion_message_id: DisplayStr | None = None
    last_incursion: IncursionsCacheEntry | None = None
    current_incursions: list[IncursionsCacheEntry] = Field(default_factory=list)
    state_change_timestamps: dict[int, dict[str, DisplayStr]] = Field(default_factory=dict)

    @field_validator("current_incursions", mode="before")
    @classmethod
    def _null_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("state_change_timestamps", mode="before")
    @classmethod
    def _null_as_empty_mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: {} if states is None else states for key, states in value.items()}
        return value
