"""Deterministic rotation policy for current incursions.

This module intentionally contains *no* I/O. The store calls these
helpers and persists whatever they return.
"""

from __future__ import annotations

from collections.abc import Sequence

from pyincursions.models.cache import IncursionsCacheEntry


def find_dropped_incursions(
    stored: Sequence[IncursionsCacheEntry],
    incoming: Sequence[IncursionsCacheEntry],
) -> list[IncursionsCacheEntry]:
    """Return stored entries whose constellation is absent from *incoming*, in stored order."""
    incoming_ids = {entry.constellation_id for entry in incoming}
    return [entry for entry in stored if entry.constellation_id not in incoming_ids]


def select_last_incursion(dropped: Sequence[IncursionsCacheEntry]) -> IncursionsCacheEntry | None:
    """Pick the most recently created dropped entry.

    Ties on ``created_at`` go to the first one in stored order.
    """
    if not dropped:
        return None
    return max(dropped, key=lambda entry: entry.created_at)


def merge_current_incursions(
    stored: Sequence[IncursionsCacheEntry],
    incoming: Sequence[IncursionsCacheEntry],
) -> list[IncursionsCacheEntry]:
    """Compute the new list of current incursions.

    Policy:
    - Stored entries still present in *incoming* keep their position.
    - An incoming entry replaces the stored entry with the same
      constellation id entirely (including its timestamps).
    - Incoming entries for new constellations are appended in order.
    - Stored entries absent from *incoming* are dropped.
    """
    incoming_ids = {entry.constellation_id for entry in incoming}
    merged: list[IncursionsCacheEntry] = []
    positions: dict[int, int] = {}
    for entry in stored:
        if entry.constellation_id in incoming_ids and entry.constellation_id not in positions:
            positions[entry.constellation_id] = len(merged)
            merged.append(entry)

    for entry in incoming:
        index = positions.get(entry.constellation_id)
        if index is None:
            positions[entry.constellation_id] = len(merged)
            merged.append(entry)
        else:
            merged[index] = entry
    return merged
