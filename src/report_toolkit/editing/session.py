"""
Module: editing.session

Purpose:
    Stateful editor facade over the pure edit and reorder functions.
    Holds the current EditorState and recomputes the page layout after
    every mutation, so callers always read a layout consistent with the
    records.

Key Classes:
    - EditorSession: Editing session for one report

Dependencies:
    - editing.edits: Edit operations
    - editing.reorder: Drag reducer
    - core.utils.serialization: Snapshots

Used By:
    - cli: Snapshot processing
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Sequence

from report_toolkit.core.models import ContentSuggestion, LayoutSuggestion, Record
from report_toolkit.core.utils.serialization import deserialize_records, serialize_records
from report_toolkit.layout import LayoutConfig, PageModel, PhotoLayoutMode, paginate

from . import edits
from .reorder import (
    DragCancelled,
    DragEvent,
    DragStarted,
    DropTarget,
    Dropped,
    EditorState,
    reduce,
)

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Editing session for one report.

    Every mutating method replaces the state with a freshly paginated one.

    Example:
        >>> session = EditorSession(records)
        >>> session.toggle_page_break("r3")
        >>> session.layout.page_count
        2
    """

    def __init__(
        self,
        records: Sequence[Record],
        config: Optional[LayoutConfig] = None,
        mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
        *,
        available_height: Optional[float] = None,
        estimator: Optional[Callable[[Record], float]] = None,
    ):
        self._state = EditorState.initial(
            records,
            config,
            PhotoLayoutMode(mode),
            available_height=available_height,
            estimator=estimator,
        )
        logger.debug(
            f"Session opened with {len(self.records)} records on {self.layout.page_count} pages"
        )

    @classmethod
    def from_snapshot(
        cls,
        data: Any,
        config: Optional[LayoutConfig] = None,
        mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
    ) -> EditorSession:
        """Open a session from a snapshot produced by snapshot()."""
        return cls(deserialize_records(data), config, mode)

    def snapshot(self) -> dict[str, Any]:
        """Serializable snapshot of the current records."""
        return serialize_records(self.records)

    # -- State ------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def records(self) -> tuple[Record, ...]:
        return self._state.records

    @property
    def layout(self) -> PageModel:
        return self._state.layout

    @property
    def mode(self) -> PhotoLayoutMode:
        return self._state.layout.mode

    def _commit(self, records: Sequence[Record], action: str) -> PageModel:
        self._state = self._state.with_records(records)
        logger.debug(f"{action}: {self.layout.page_count} pages")
        return self.layout

    def recompute(self) -> PageModel:
        """Re-paginate the current records."""
        return self._commit(self.records, "Recomputed")

    def set_mode(self, mode: PhotoLayoutMode) -> PageModel:
        """Switch photo layout mode and re-paginate."""
        mode = PhotoLayoutMode(mode)
        layout = paginate(
            self.records,
            self.layout.config,
            mode=mode,
            available_height=self.layout.available_height,
            estimator=self._state.estimator,
        )
        self._state = EditorState(
            records=self.records,
            layout=layout,
            estimator=self._state.estimator,
        )
        logger.info(f"Photo layout mode set to {mode.value}")
        return layout

    # -- Edits ------------------------------------------------------------

    def edit_text(self, record_id: str, field: str, value: str) -> PageModel:
        return self._commit(edits.edit_text(self.records, record_id, field, value), "Edited text")

    def resize_photo(self, record_id: str, photo_id: str, width: float) -> PageModel:
        return self._commit(
            edits.resize_photo(self.records, record_id, photo_id, width), "Resized photo"
        )

    def delete_photo(self, record_id: str, photo_id: str) -> PageModel:
        return self._commit(
            edits.delete_photo(self.records, record_id, photo_id), "Deleted photo"
        )

    def toggle_page_break(self, record_id: str, kind: edits.BreakKind = "before") -> PageModel:
        return self._commit(
            edits.toggle_page_break(self.records, record_id, kind), "Toggled page break"
        )

    def apply_suggestion(self, suggestion: ContentSuggestion) -> PageModel:
        return self._commit(
            edits.apply_suggestion(self.records, suggestion), "Applied suggestion"
        )

    def apply_suggestions(self, suggestions: Iterable[ContentSuggestion]) -> PageModel:
        return self._commit(
            edits.apply_suggestions(self.records, suggestions), "Applied suggestions"
        )

    def apply_layout_suggestion(self, suggestion: LayoutSuggestion) -> PageModel:
        return self._commit(
            edits.apply_layout_suggestion(self.records, suggestion), "Applied layout suggestion"
        )

    def pin_automatic_breaks(self) -> PageModel:
        """Turn the current page boundaries into manual breaks."""
        return self._commit(
            edits.pin_page_starts(self.records, self.layout), "Pinned automatic breaks"
        )

    # -- Drag and drop ----------------------------------------------------

    def dispatch(self, event: DragEvent) -> PageModel:
        """Feed one drag event through the reducer."""
        self._state = reduce(self._state, event)
        return self.layout

    def start_drag(self, page_index: int, item_index: int) -> None:
        self.dispatch(DragStarted(DropTarget(page_index, item_index)))

    def drop(self, page_index: Optional[int], item_index: Optional[int] = None) -> PageModel:
        """Drop the dragged record; page_index None means outside any page."""
        target = None if page_index is None else DropTarget(page_index, item_index or 0)
        return self.dispatch(Dropped(target))

    def cancel_drag(self) -> None:
        self.dispatch(DragCancelled())
