"""
Unit tests for edit operations.
"""

import pytest

from report_toolkit.core.models import ContentSuggestion, LayoutSuggestion
from report_toolkit.editing import (
    EditError,
    PhotoNotFoundError,
    RecordNotFoundError,
    apply_layout_suggestion,
    apply_suggestion,
    apply_suggestions,
    delete_photo,
    edit_text,
    pin_automatic_breaks,
    resize_photo,
    toggle_page_break,
)
from report_toolkit.layout import paginate


@pytest.fixture
def records(record_factory, photo_factory):
    return (
        record_factory("a", finding="Grease build-up"),
        record_factory("b", photos=(photo_factory("b1"), photo_factory("b2"), photo_factory("b3"))),
        record_factory("c", page_break_before=True, photos=(photo_factory("c1"),)),
    )


def _suggestion(record_id="a", field="finding", text="Grease build-up on extraction hood"):
    return ContentSuggestion(
        record_id=record_id,
        field=field,
        original_text="",
        suggested_text=text,
        confidence=0.9,
        category="specificity",
    )


class TestTextAndPhotoEdits:
    """Tests for edit_text, resize_photo and delete_photo."""

    def test_when_text_edited_then_only_target_changes(self, records):
        updated = edit_text(records, "a", "location", "Main kitchen")

        assert updated[0].location == "Main kitchen"
        assert updated[1:] == records[1:]
        assert records[0].location == ""

    def test_when_record_unknown_then_record_not_found(self, records):
        with pytest.raises(RecordNotFoundError):
            edit_text(records, "zzz", "finding", "x")

    def test_when_field_unknown_then_value_error(self, records):
        with pytest.raises(ValueError):
            edit_text(records, "a", "sectionTitle", "x")

    def test_when_photo_resized_then_width_stored(self, records):
        updated = resize_photo(records, "b", "b2", 35)

        assert [p.width for p in updated[1].photos] == [100, 35, 100]

    def test_when_photo_unknown_then_photo_not_found(self, records):
        with pytest.raises(PhotoNotFoundError):
            resize_photo(records, "b", "nope", 50)

        with pytest.raises(EditError):
            delete_photo(records, "a", "b1")

    def test_when_photo_deleted_then_order_kept(self, records):
        updated = delete_photo(records, "b", "b2")

        assert [p.id for p in updated[1].photos] == ["b1", "b3"]


class TestToggleBreak:
    """Tests for toggle_page_break."""

    def test_when_toggled_before_then_flipped(self, records):
        updated = toggle_page_break(records, "c", "before")

        assert not updated[2].page_break_before

    def test_when_toggled_after_then_flipped(self, records):
        updated = toggle_page_break(records, "a", "after")

        assert updated[0].page_break_after
        assert not updated[0].page_break_before

    def test_when_kind_invalid_then_value_error(self, records):
        with pytest.raises(ValueError, match="Invalid break kind"):
            toggle_page_break(records, "a", "middle")


class TestSuggestions:
    """Tests for content suggestions."""

    def test_when_applied_then_field_replaced(self, records):
        updated = apply_suggestion(records, _suggestion())

        assert updated[0].finding == "Grease build-up on extraction hood"

    def test_when_record_unknown_then_unchanged(self, records):
        updated = apply_suggestion(records, _suggestion(record_id="ghost"))

        assert updated == records

    def test_when_several_applied_then_in_order(self, records):
        updated = apply_suggestions(records, [
            _suggestion(text="first"),
            _suggestion(text="second"),
            _suggestion(record_id="b", field="recommendation", text="Replace seal"),
        ])

        assert updated[0].finding == "second"
        assert updated[1].recommendation == "Replace seal"


class TestLayoutSuggestion:
    """Tests for apply_layout_suggestion."""

    def test_when_applied_then_breaks_follow_suggested_pages(self, records):
        suggestion = LayoutSuggestion(pages=(("a",), ("b", "c")))

        updated = apply_layout_suggestion(records, suggestion)

        assert [r.page_break_before for r in updated] == [False, True, False]
        assert not any(r.page_break_after for r in updated)

    def test_when_record_has_several_photos_then_grid_widths(self, records):
        updated = apply_layout_suggestion(records, LayoutSuggestion(pages=(("a", "b", "c"),)))

        photos = updated[1].photos
        assert [p.width for p in photos] == [48, 48, 48]
        assert [p.column for p in photos] == [1, 2, 1]
        assert [p.grid_position for p in photos] == [0, 1, 2]
        assert updated[2].photos == records[2].photos

    def test_when_page_ids_unknown_then_ignored(self, records):
        suggestion = LayoutSuggestion(pages=(("a", "b"), ("ghost", "c")))

        updated = apply_layout_suggestion(records, suggestion)

        assert [r.page_break_before for r in updated] == [False, False, True]


class TestPinAutomaticBreaks:
    """Tests for pin_automatic_breaks."""

    def test_when_pinned_then_layout_unchanged(self, record_factory):
        records = [record_factory(f"r{i}", finding="x" * 400) for i in range(8)]
        before = paginate(records)

        pinned = pin_automatic_breaks(records)
        after = paginate(pinned)

        assert [p.item_ids for p in after.pages] == [p.item_ids for p in before.pages]
        assert before.page_count > 1
        starts = {p.items[0].id for p in before.pages[1:]}
        assert {r.id for r in pinned if r.page_break_before} == starts
