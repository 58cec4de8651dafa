"""Tests for ESI payload mapping (hangar_ingestion/mapping.py)."""

from datetime import datetime, timezone

import pytest

from hangar_ingestion.mapping import (
    map_asset,
    map_container_log,
    map_divisions,
    map_type_names,
    parse_timestamp,
)
from hangar_kernel.domain.values import LogAction
from hangar_kernel.exceptions import MalformedSourceDataError


def _log_row(**overrides):
    row = {
        "logged_at": "2024-06-01T12:00:00Z",
        "character_id": 123,
        "location_id": 60003760,
        "location_flag": "CorpSAG2",
        "action": "add",
        "type_id": 34,
        "quantity": 200,
        "container_id": 1000000001,
        "container_type_id": 17363,
        "password_type": None,
    }
    row.update(overrides)
    return row


def _asset_row(**overrides):
    row = {
        "item_id": 1,
        "type_id": 34,
        "location_id": 60003760,
        "location_flag": "CorpSAG2",
        "location_type": "station",
        "quantity": 300,
        "is_singleton": False,
    }
    row.update(overrides)
    return row


class TestParseTimestamp:

    def test_zulu_suffix(self):
        assert parse_timestamp("2024-06-01T12:00:00Z") == datetime(2024, 6, 1, 12, tzinfo=timezone.utc)

    def test_offset_kept(self):
        assert parse_timestamp("2024-06-01T14:00:00+02:00").utcoffset().total_seconds() == 7200

    @pytest.mark.parametrize("value", ["", None, "2024-06-01T12:00:00", "yesterday"])
    def test_bad_values_rejected(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestMapContainerLog:

    def test_add_entry(self):
        entry = map_container_log(_log_row())
        assert entry.action is LogAction.ADD
        assert entry.quantity == 200
        assert entry.location_flag == "CorpSAG2"
        assert entry.logged_at == datetime(2024, 6, 1, 12, tzinfo=timezone.utc)

    def test_configure_entry_without_quantity(self):
        row = _log_row(action="configure", new_config_bitmask=5, old_config_bitmask=1)
        del row["quantity"]
        entry = map_container_log(row)
        assert entry.quantity == 0
        assert entry.new_configuration == 5
        assert entry.old_configuration == 1

    def test_unlisted_action_maps_to_other(self):
        entry = map_container_log(_log_row(action="teleport"))
        assert entry.action is LogAction.OTHER
        assert not entry.is_add

    def test_non_string_action_is_malformed(self):
        with pytest.raises(MalformedSourceDataError) as exc_info:
            map_container_log(_log_row(action=7))
        assert exc_info.value.record_kind == "container_log"

    def test_missing_key_is_malformed(self):
        row = _log_row()
        del row["character_id"]
        with pytest.raises(MalformedSourceDataError):
            map_container_log(row)

    def test_string_type_id_is_malformed(self):
        with pytest.raises(MalformedSourceDataError):
            map_container_log(_log_row(type_id="34"))

    def test_non_object_is_malformed(self):
        with pytest.raises(MalformedSourceDataError):
            map_container_log(["not", "an", "object"])


class TestMapAsset:

    def test_asset(self):
        item = map_asset(_asset_row())
        assert (item.type_id, item.quantity, item.location_flag) == (34, 300, "CorpSAG2")
        assert item.location_type == "station"

    def test_zero_quantity_is_malformed(self):
        with pytest.raises(MalformedSourceDataError) as exc_info:
            map_asset(_asset_row(quantity=0))
        assert exc_info.value.record_kind == "asset"

    def test_boolean_quantity_is_malformed(self):
        with pytest.raises(MalformedSourceDataError):
            map_asset(_asset_row(quantity=True))


class TestMapDivisions:

    def test_hangar_divisions_sorted_with_default_names(self):
        payload = {
            "hangar": [{"division": 2, "name": "Minerals"}, {"division": 1}],
            "wallet": [{"division": 1, "name": "Master Wallet"}],
        }
        divisions = map_divisions(payload)
        assert [(d.division, d.name) for d in divisions] == [(1, "Division 1"), (2, "Minerals")]

    def test_missing_hangar_list_is_empty(self):
        assert map_divisions({}) == ()

    def test_bad_hangar_list_is_malformed(self):
        with pytest.raises(MalformedSourceDataError):
            map_divisions({"hangar": "nope"})


class TestMapTypeNames:

    def test_rows_mapped_and_junk_skipped(self):
        rows = [
            {"id": 34, "name": "Tritanium", "category": "inventory_type"},
            {"id": "35", "name": "Pyerite"},
            "junk",
        ]
        assert map_type_names(rows) == {34: "Tritanium"}
