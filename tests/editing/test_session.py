"""
Unit tests for EditorSession.
"""

import pytest

from report_toolkit.core.models import ContentSuggestion, LayoutSuggestion
from report_toolkit.editing import EditorSession, Idle, ReorderError
from report_toolkit.layout import PhotoLayoutMode, paginate


BUDGET = 997


def _ids(layout):
    return [list(page.item_ids) for page in layout.pages]


@pytest.fixture
def session(record_factory, fixed_height):
    records = [record_factory(i) for i in "abcde"]
    return EditorSession(records, available_height=BUDGET, estimator=fixed_height())


class TestSessionEdits:
    """Every mutation re-paginates."""

    def test_when_opened_then_layout_computed(self, session):
        assert _ids(session.layout) == [["a", "b", "c"], ["d", "e"]]
        assert session.mode is PhotoLayoutMode.STACK

    def test_when_break_toggled_then_layout_follows(self, session):
        layout = session.toggle_page_break("b")

        assert layout is session.layout
        assert _ids(layout) == [["a"], ["b", "c", "d", "e"]]

    def test_when_break_toggled_twice_then_back_to_automatic(self, session):
        session.toggle_page_break("b")
        session.toggle_page_break("b")

        assert _ids(session.layout) == [["a", "b", "c"], ["d", "e"]]

    def test_when_recomputed_then_same_layout(self, session):
        before = _ids(session.layout)

        session.recompute()

        assert _ids(session.layout) == before

    def test_when_suggestions_applied_then_text_updated(self, session):
        session.apply_suggestion(ContentSuggestion(
            record_id="c",
            field="recommendation",
            original_text="",
            suggested_text="Replace the door seal",
            confidence=0.8,
            category="clarity",
        ))

        assert session.records[2].recommendation == "Replace the door seal"

    def test_when_layout_suggestion_applied_then_pages_match(self, session):
        layout = session.apply_layout_suggestion(LayoutSuggestion(pages=(("a", "b"), ("c", "d", "e"))))

        assert _ids(layout) == [["a", "b"], ["c", "d", "e"]]

    def test_when_breaks_pinned_then_pages_kept(self, session):
        layout = session.pin_automatic_breaks()

        assert _ids(layout) == [["a", "b", "c"], ["d", "e"]]
        assert session.records[3].page_break_before


class TestSessionDrag:
    """Drag and drop through the session."""

    def test_when_dragged_then_records_moved(self, session):
        session.start_drag(1, 0)
        layout = session.drop(0, 0)

        assert [r.id for r in layout.records] == ["d", "a", "b", "c", "e"]
        assert isinstance(session.state.drag, Idle)

    def test_when_drag_cancelled_then_unchanged(self, session):
        session.start_drag(0, 1)
        session.cancel_drag()

        assert [r.id for r in session.records] == list("abcde")

    def test_when_dropped_outside_then_unchanged(self, session):
        session.start_drag(0, 1)
        session.drop(None)

        assert [r.id for r in session.records] == list("abcde")

    def test_when_second_drag_started_then_error(self, session):
        session.start_drag(0, 0)

        with pytest.raises(ReorderError):
            session.start_drag(0, 1)


class TestSessionModes:
    """Tests for layout mode switching and snapshots."""

    def test_when_mode_switched_then_estimates_change(self, record_factory, photo_factory):
        photos = tuple(photo_factory(f"p{i}") for i in range(4))
        session = EditorSession([record_factory("a", photos=photos)])
        stack_height = session.layout.pages[0].estimated_height

        session.set_mode("grid")

        assert session.mode is PhotoLayoutMode.GRID
        assert session.layout.pages[0].estimated_height < stack_height

    def test_when_photo_resized_then_height_shrinks(self, record_factory, photo_factory):
        session = EditorSession([record_factory("a", photos=(photo_factory("p1"),))])
        before = session.layout.pages[0].estimated_height

        session.resize_photo("a", "p1", 50)

        assert session.layout.pages[0].estimated_height < before

    def test_when_photo_deleted_then_height_drops_to_baseline(self, record_factory, photo_factory):
        session = EditorSession([record_factory("a", photos=(photo_factory("p1"),))])

        session.delete_photo("a", "p1")

        assert session.layout.pages[0].estimated_height == 289.0

    def test_when_text_edited_then_layout_matches_fresh_pagination(self, record_factory):
        session = EditorSession([record_factory(f"r{i}") for i in range(4)])

        session.edit_text("r0", "finding", "f" * 2000)

        assert _ids(session.layout) == _ids(paginate(session.records))

    def test_when_snapshot_restored_then_same_records(self, session):
        session.toggle_page_break("d", "after")

        restored = EditorSession.from_snapshot(session.snapshot())

        assert restored.records == session.records
