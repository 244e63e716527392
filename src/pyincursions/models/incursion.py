"""Incursion snapshot model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pyincursions.models._base import DisplayStr, IncursionsBaseModel


class IncursionState(StrEnum):
    """Lifecycle states reported for an incursion."""

    MOBILIZING = "mobilizing"
    ESTABLISHED = "established"
    WITHDRAWING = "withdrawing"


class IncursionInfo(IncursionsBaseModel):
    """Snapshot of one active incursion as produced by the fetch layer.

    Parameters
    ----------
    constellation_name : str
        Name of the occupied constellation.
    constellation_id : int
        Constellation id; the dedup key for the cache.
    headquarter_system : str
        Name of the headquarters system.
    headquarter_system_id : int or None
        Solar system id of the headquarters, when resolved.
    assault_systems : list of str
        Assault system names.
    vanguard_systems : list of str
        Vanguard system names.
    staging_system : str
        Staging system name.
    influence : float
        Sansha influence, ``0.0`` to ``1.0``.
    state : str
        Lifecycle state. Usually one of :class:`IncursionState`, but any
        string reported upstream is kept as-is.
    number_of_jumps_from_last_incursion : str
        Jump distance from the previous incursion, pre-rendered for display.
    last_incursion_system_name : str
        System name of the previous incursion.
    region_icon_url : str
        Icon URL for the region.
    is_island_constellation : str
        Island flag, pre-rendered for display. JSON booleans are stored
        as ``"true"``/``"false"``.
    state_updated_at : str or None
        When the state last changed, if known.
    """

    constellation_name: DisplayStr
    constellation_id: int
    headquarter_system: DisplayStr
    headquarter_system_id: int | None = None
    assault_systems: list[DisplayStr] = Field(default_factory=list)
    vanguard_systems: list[DisplayStr] = Field(default_factory=list)
    staging_system: DisplayStr
    influence: float
    state: DisplayStr
    number_of_jumps_from_last_incursion: DisplayStr
    last_incursion_system_name: DisplayStr
    region_icon_url: DisplayStr
    is_island_constellation: DisplayStr
    state_updated_at: DisplayStr | None = None

    @property
    def known_state(self) -> IncursionState | None:
        """The state as an :class:`IncursionState`, or ``None`` if unrecognised."""
        try:
            return IncursionState(self.state.lower())
        except ValueError:
            return None

    @property
    def influence_percent(self) -> float:
        """Influence as a percentage, rounded to one decimal place."""
        return round(self.influence * 100, 1)
