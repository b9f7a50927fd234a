"""
Unit Tests for Core Models

Tests for Photo, Record and the suggestion contracts.
"""

import pytest
from dataclasses import FrozenInstanceError

from report_toolkit.core.models import (
    ContentSuggestion,
    LayoutSuggestion,
    Photo,
    Record,
)


class TestPhoto:
    """Tests for Photo."""

    def test_when_content_or_url_then_has_source(self):
        assert Photo(id="p1", content="aGVsbG8=").has_source
        assert Photo(id="p2", url="https://photos.example/p2.jpg").has_source
        assert not Photo(id="p3").has_source

    def test_when_width_changed_then_new_instance(self):
        photo = Photo(id="p1", url="u")

        resized = photo.with_width(40)

        assert resized.width == 40
        assert photo.width == 100


class TestRecord:
    """Tests for Record."""

    def test_when_photos_given_as_list_then_stored_as_tuple(self):
        record = Record(id="r1", photos=[Photo(id="p1", url="u")])

        assert isinstance(record.photos, tuple)

    def test_when_frozen_then_assignment_fails(self):
        record = Record(id="r1")

        with pytest.raises(FrozenInstanceError):
            record.finding = "changed"

    def test_when_text_replaced_then_original_untouched(self):
        record = Record(id="r1", finding="Blocked")

        updated = record.with_text("finding", "Blocked and dirty")

        assert updated.finding == "Blocked and dirty"
        assert record.finding == "Blocked"

    def test_when_unknown_text_field_then_value_error(self):
        with pytest.raises(ValueError, match="Unknown text field"):
            Record(id="r1").with_text("item_title", "x")

    def test_when_breaks_partially_set_then_others_kept(self):
        record = Record(id="r1", page_break_after=True)

        updated = record.with_breaks(before=True)

        assert updated.page_break_before
        assert updated.page_break_after
        assert updated.has_manual_break

    def test_when_photo_looked_up_then_found_or_none(self):
        record = Record(id="r1", photos=(Photo(id="p1", url="u"),))

        assert record.find_photo("p1").id == "p1"
        assert record.find_photo("p9") is None


class TestContentSuggestion:
    """Tests for ContentSuggestion."""

    def test_when_payload_uses_legacy_key_then_accepted(self):
        suggestion = ContentSuggestion.from_dict({
            "nonComplianceId": "r1",
            "field": "finding",
            "originalText": "dirty flor",
            "suggestedText": "Dirty floor",
            "confidence": 0.9,
            "category": "grammar",
        })

        assert suggestion.key == ("r1", "finding")
        assert suggestion.to_dict()["recordId"] == "r1"

    def test_when_payload_missing_text_then_value_error(self):
        with pytest.raises(ValueError, match="missing key"):
            ContentSuggestion.from_dict({"recordId": "r1", "field": "finding"})

    @pytest.mark.parametrize("overrides", [
        {"field": "itemTitle"},
        {"confidence": 1.5},
        {"category": "tone"},
    ])
    def test_when_invalid_value_then_value_error(self, overrides):
        values = dict(
            record_id="r1",
            field="finding",
            original_text="a",
            suggested_text="b",
            confidence=0.5,
            category="clarity",
        )
        values.update(overrides)

        with pytest.raises(ValueError):
            ContentSuggestion(**values)


class TestLayoutSuggestion:
    """Tests for LayoutSuggestion."""

    def test_when_pages_unordered_then_sorted_by_page_number(self):
        suggestion = LayoutSuggestion.from_dict({
            "pages": [
                {"pageNumber": 2, "itemIds": ["c"]},
                {"pageNumber": 1, "itemIds": ["a", "b"]},
            ],
            "overallReason": "Group by area",
            "confidence": 0.7,
        })

        assert suggestion.pages == (("a", "b"), ("c",))
        assert suggestion.reason == "Group by area"
        assert suggestion.confidence == 0.7

    def test_when_no_pages_then_value_error(self):
        with pytest.raises(ValueError):
            LayoutSuggestion.from_dict({})

    @pytest.mark.parametrize("payload", [
        {"pages": ["a", "b"]},
        {"pages": [{"pageNumber": "2", "itemIds": ["a"]}]},
        {"pages": [{"pageNumber": True, "itemIds": ["a"]}]},
        {"pages": [{"pageNumber": 1, "itemIds": "a"}]},
        {"pages": [{"pageNumber": 1, "itemIds": ["a"]}], "confidence": None},
    ])
    def test_when_page_entry_malformed_then_value_error(self, payload):
        with pytest.raises(ValueError, match="Layout suggestion"):
            LayoutSuggestion.from_dict(payload)

    def test_when_page_number_missing_then_position_used(self):
        suggestion = LayoutSuggestion.from_dict({
            "pages": [{"itemIds": ["a"]}, {"pageNumber": 1, "itemIds": ["b"]}],
        })

        assert suggestion.pages == (("a",), ("b",))
