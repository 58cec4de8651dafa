"""Tests for the hangar snapshot reader."""

import pytest

from builders import make_asset
from hangar_engines.snapshot import filter_hangar_items, summarize_hangar_contents
from hangar_kernel.exceptions import InvalidSubdivisionError


class TestSummarizeHangarContents:

    def test_division_plus_deliveries(self):
        items = [
            make_asset(type_id=34, quantity=300, location_flag="CorpSAG2", item_id=1),
            make_asset(type_id=34, quantity=50, location_flag="CorpDeliveries", item_id=2),
            make_asset(type_id=35, quantity=10, location_flag="CorpSAG3", item_id=3),
        ]
        assert summarize_hangar_contents(items, 2) == {34: 350}

    def test_other_division_sees_deliveries_only(self):
        items = [
            make_asset(type_id=34, quantity=300, location_flag="CorpSAG2", item_id=1),
            make_asset(type_id=36, quantity=4, location_flag="CorpDeliveries", item_id=2),
        ]
        assert summarize_hangar_contents(items, 5) == {36: 4}

    def test_stacks_of_same_type_summed(self):
        items = [
            make_asset(type_id=34, quantity=1, item_id=1),
            make_asset(type_id=34, quantity=2, item_id=2),
            make_asset(type_id=35, quantity=3, item_id=3),
        ]
        assert summarize_hangar_contents(items, 2) == {34: 3, 35: 3}

    def test_ship_hangar_and_offices_ignored(self):
        items = [
            make_asset(location_flag="Hangar", item_id=1),
            make_asset(location_flag="OfficeFolder", item_id=2),
            make_asset(location_flag="CorpSAG22", item_id=3),
        ]
        assert summarize_hangar_contents(items, 2) == {}

    def test_empty_snapshot(self):
        assert summarize_hangar_contents([], 1) == {}

    def test_invalid_subdivision_raises(self):
        with pytest.raises(InvalidSubdivisionError):
            summarize_hangar_contents([make_asset()], 0)


class TestFilterHangarItems:

    def test_keeps_snapshot_order(self):
        items = [
            make_asset(location_flag="CorpDeliveries", item_id=1),
            make_asset(location_flag="CorpSAG4", item_id=2),
            make_asset(location_flag="CorpSAG1", item_id=3),
        ]
        assert [i.item_id for i in filter_hangar_items(items, 4)] == [1, 2]
