"""Tests for the listing partial-update merge and image reconciliation."""
from __future__ import annotations

import pytest

from domain.properties import merge_property_update, reconcile_images


STORED = {
    "id": 7,
    "title": "Luxury Villa",
    "price": 500000,
    "year_built": 1990,
    "lot_size": 0.5,
    "parking_spaces": "2",
    "main_image": "a.jpg",
    "images": ["a.jpg"],
    "features": ["Pool"],
    "listed_by_id": 1,
}


class TestMergePropertyUpdate:
    """Presence of a key decides whether it replaces the stored value."""

    def test_absent_fields_are_kept(self):
        merged = merge_property_update(STORED, {"price": 550000})

        assert merged["price"] == 550000
        assert merged["year_built"] == 1990
        assert merged["images"] == ["a.jpg"]
        assert merged["features"] == ["Pool"]
        assert merged["title"] == "Luxury Villa"

    def test_present_fields_replace_even_when_falsy(self):
        merged = merge_property_update(STORED, {"features": [], "parking_spaces": ""})

        assert merged["features"] == []
        assert merged["parking_spaces"] == ""

    def test_null_optional_fields_fall_back_to_zero_values(self):
        merged = merge_property_update(
            STORED,
            {"year_built": None, "lot_size": None, "parking_spaces": None,
             "main_image": None, "images": None, "features": None},
        )

        assert merged["year_built"] == 0
        assert merged["lot_size"] == 0
        assert merged["parking_spaces"] == ""
        assert merged["main_image"] == ""
        assert merged["images"] == []
        assert merged["features"] == []

    def test_missing_optional_fields_get_defaults(self):
        merged = merge_property_update({"title": "Bare"}, {})

        assert merged == {
            "title": "Bare",
            "year_built": 0,
            "lot_size": 0,
            "parking_spaces": "",
            "main_image": "",
            "features": [],
            "images": [],
        }

    @pytest.mark.parametrize("field", ["id", "listed_by_id", "created_at"])
    def test_immutable_fields_are_ignored(self, field):
        merged = merge_property_update(STORED, {field: 999, "price": 1})

        assert merged.get(field) == STORED.get(field)
        assert merged["price"] == 1

    def test_inputs_are_not_modified(self):
        stored = {"images": ["a.jpg"], "features": ["Pool"]}
        update = {"features": ["Spa"]}

        merged = merge_property_update(stored, update)
        merged["images"].append("b.jpg")
        merged["features"].append("Gym")

        assert stored == {"images": ["a.jpg"], "features": ["Pool"]}
        assert update == {"features": ["Spa"]}

    def test_repeated_default_lists_are_independent(self):
        first = merge_property_update({}, {})
        first["images"].append("x.jpg")

        assert merge_property_update({}, {})["images"] == []


class TestReconcileImages:
    """The gallery is canonical and the cover is its first entry."""

    def test_cover_not_in_gallery_is_prepended(self):
        assert reconcile_images("c.jpg", ["a.jpg", "b.jpg"]) == ("c.jpg", ["c.jpg", "a.jpg", "b.jpg"])

    def test_cover_in_gallery_moves_to_front(self):
        assert reconcile_images("b.jpg", ["a.jpg", "b.jpg"]) == ("b.jpg", ["b.jpg", "a.jpg"])

    def test_empty_cover_takes_first_gallery_image(self):
        assert reconcile_images("", ["a.jpg", "b.jpg"]) == ("a.jpg", ["a.jpg", "b.jpg"])

    def test_duplicates_collapse_keeping_first_position(self):
        assert reconcile_images(None, ["a.jpg", "b.jpg", "a.jpg", ""]) == ("a.jpg", ["a.jpg", "b.jpg"])

    def test_nothing_at_all(self):
        assert reconcile_images("", []) == ("", [])
        assert reconcile_images(None, None) == ("", [])

    def test_gallery_order_wins_when_cover_not_preferred(self):
        assert reconcile_images("a.jpg", ["b.jpg", "c.jpg"], prefer_main_image=False) == (
            "b.jpg",
            ["b.jpg", "c.jpg"],
        )
