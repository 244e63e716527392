"""Tests for the cache models and their camelCase file format."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyincursions.models.cache import IncursionsCache, IncursionsCacheEntry
from pyincursions.models.incursion import IncursionInfo, IncursionState

SAMPLE_INFO: dict = {
    "constellationName": "Ekura",
    "constellationId": 20000364,
    "headquarterSystem": "Oishami",
    "headquarterSystemId": 30002493,
    "assaultSystems": ["Ikami", "Waira"],
    "vanguardSystems": ["Nonni", "Ishisomo", "Otsasai"],
    "stagingSystem": "Hirtamon",
    "influence": 0.25,
    "state": "established",
    "numberOfJumpsFromLastIncursion": "12",
    "lastIncursionSystemName": "Tama",
    "regionIconUrl": "https://images.example.invalid/region.png",
    "isIslandConstellation": "false",
}


class TestIncursionInfo:
    def test_parses_camel_case_payload(self) -> None:
        info = IncursionInfo.model_validate(SAMPLE_INFO)

        assert info.constellation_name == "Ekura"
        assert info.constellation_id == 20000364
        assert info.headquarter_system_id == 30002493
        assert info.vanguard_systems == ["Nonni", "Ishisomo", "Otsasai"]
        assert info.state_updated_at is None

    def test_nullable_headquarter_system_id(self) -> None:
        info = IncursionInfo.model_validate({**SAMPLE_INFO, "headquarterSystemId": None})
        assert info.headquarter_system_id is None

    def test_missing_constellation_id_rejected(self) -> None:
        payload = dict(SAMPLE_INFO)
        del payload["constellationId"]
        with pytest.raises(ValidationError):
            IncursionInfo.model_validate(payload)

    def test_known_state(self) -> None:
        assert IncursionInfo.model_validate(SAMPLE_INFO).known_state == IncursionState.ESTABLISHED
        assert IncursionInfo.model_validate({**SAMPLE_INFO, "state": "Mobilizing"}).known_state == (
            IncursionState.MOBILIZING
        )

    def test_unknown_state_kept_verbatim(self) -> None:
        info = IncursionInfo.model_validate({**SAMPLE_INFO, "state": "defeated"})
        assert info.state == "defeated"
        assert info.known_state is None

    def test_influence_percent(self) -> None:
        assert IncursionInfo.model_validate({**SAMPLE_INFO, "influence": 0.4567}).influence_percent == 45.7

    def test_dump_uses_file_keys(self) -> None:
        dumped = IncursionInfo.model_validate(SAMPLE_INFO).to_json_dict()
        assert dumped["constellationId"] == 20000364
        assert dumped["numberOfJumpsFromLastIncursion"] == "12"
        assert "stateUpdatedAt" in dumped

    def test_frozen(self) -> None:
        info = IncursionInfo.model_validate(SAMPLE_INFO)
        with pytest.raises(ValidationError):
            info.state = "withdrawing"  # type: ignore[misc]


class TestIncursionsCacheEntry:
    def test_create_stamps_both_timestamps(self) -> None:
        entry = IncursionsCacheEntry.create(IncursionInfo.model_validate(SAMPLE_INFO), 1_700_000_000_000)

        assert entry.created_at == 1_700_000_000_000
        assert entry.updated_at == 1_700_000_000_000
        assert entry.constellation_id == 20000364

    def test_touched_returns_copy(self) -> None:
        entry = IncursionsCacheEntry.create(IncursionInfo.model_validate(SAMPLE_INFO), 100)

        touched = entry.touched(900)

        assert touched.updated_at == 900
        assert touched.created_at == 100
        assert entry.updated_at == 100

    def test_parses_file_shape(self) -> None:
        entry = IncursionsCacheEntry.model_validate(
            {"incursionInfo": SAMPLE_INFO, "createdAt": 10, "updatedAt": 20}
        )
        assert entry.incursion_info.staging_system == "Hirtamon"
        assert entry.updated_at == 20


class TestIncursionsCache:
    def test_defaults(self) -> None:
        cache = IncursionsCache()

        assert cache.no_incursion_message_id is None
        assert cache.last_incursion is None
        assert cache.current_incursions == []
        assert cache.state_change_timestamps == {}

    def test_missing_state_change_timestamps_defaults_to_empty(self) -> None:
        cache = IncursionsCache.model_validate(
            {"noIncursionMessageId": "123", "lastIncursion": None, "currentIncursions": []}
        )

        assert cache.no_incursion_message_id == "123"
        assert cache.state_change_timestamps == {}

    def test_state_change_timestamp_keys_parsed_as_ints(self) -> None:
        cache = IncursionsCache.model_validate(
            {"stateChangeTimestamps": {"20000364": {"established": "2024-05-01T10:00:00+00:00"}}}
        )

        assert cache.state_change_timestamps == {20000364: {"established": "2024-05-01T10:00:00+00:00"}}

    def test_dump_has_all_top_level_keys(self) -> None:
        dumped = IncursionsCache().to_json_dict()

        assert set(dumped) == {
            "noIncursionMessageId",
            "lastIncursion",
            "currentIncursions",
            "stateChangeTimestamps",
        }


class TestLenientLoading:
    def test_bool_island_flag_and_numeric_jumps(self) -> None:
        info = IncursionInfo.model_validate(
            {**SAMPLE_INFO, "isIslandConstellation": True, "numberOfJumpsFromLastIncursion": 12}
        )

        assert info.is_island_constellation == "true"
        assert info.number_of_jumps_from_last_incursion == "12"

    def test_false_island_flag(self) -> None:
        info = IncursionInfo.model_validate({**SAMPLE_INFO, "isIslandConstellation": False})
        assert info.is_island_constellation == "false"

    def test_null_state_change_timestamps(self) -> None:
        cache = IncursionsCache.model_validate(
            {"noIncursionMessageId": "555", "currentIncursions": None, "stateChangeTimestamps": None}
        )

        assert cache.no_incursion_message_id == "555"
        assert cache.current_incursions == []
        assert cache.state_change_timestamps == {}

    def test_null_states_for_one_constellation(self) -> None:
        cache = IncursionsCache.model_validate({"stateChangeTimestamps": {"1": None, "2": {"mobilizing": "t"}}})
        assert cache.state_change_timestamps == {1: {}, 2: {"mobilizing": "t"}}

    def test_numeric_message_id_stored_as_text(self) -> None:
        cache = IncursionsCache.model_validate({"noIncursionMessageId": 1234567890123456789})
        assert cache.no_incursion_message_id == "1234567890123456789"

    def test_unknown_keys_kept_on_dump(self) -> None:
        cache = IncursionsCache.model_validate(
            {
                "botVersion": 3,
                "currentIncursions": [
                    {
                        "incursionInfo": {**SAMPLE_INFO, "futureField": "x"},
                        "createdAt": 1,
                        "updatedAt": 2,
                        "postedMessageId": "abc",
                    }
                ],
            }
        )

        dumped = cache.to_json_dict()

        assert dumped["botVersion"] == 3
        assert dumped["currentIncursions"][0]["postedMessageId"] == "abc"
        assert dumped["currentIncursions"][0]["incursionInfo"]["futureField"] == "x"
