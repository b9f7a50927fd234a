"""
Module: editing.reorder

Purpose:
    Drag-and-drop reordering of records across pages.
    Modelled as a pure reducer over an explicit drag state machine:
    Idle -> Dragging -> Idle. A drop translates page-local indices into a
    global move, derives the moved record's pageBreakBefore flag from
    where it landed, and re-paginates.

Key Functions:
    - reduce(): Apply one drag event to an editor state
    - resolve_destination(): Page-local drop target -> global index
    - move_record(): Move one record to a global index

Key Classes:
    - EditorState: Records, their layout and the drag state
    - Idle / Dragging: Drag states
    - DragStarted / Dropped / DragCancelled: Drag events
    - DropTarget: (page_index, item_index) pair

Dependencies:
    - layout: paginate(), PageModel
    - editing.edits: find_index()

Used By:
    - editing.session: Editor session
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Sequence, Union

from report_toolkit.core.models import Record
from report_toolkit.layout import LayoutConfig, PageModel, PhotoLayoutMode, paginate

from .edits import find_index

logger = logging.getLogger(__name__)


class ReorderError(Exception):
    """Invalid drag operation."""
    pass


@dataclass(frozen=True)
class DropTarget:
    """
    Page-local position.

    Attributes:
        page_index: 0-indexed page
        item_index: 0-indexed position within the page's items
    """

    page_index: int
    item_index: int


@dataclass(frozen=True)
class Idle:
    """No drag in progress."""
    pass


@dataclass(frozen=True)
class Dragging:
    """A record is being dragged from source."""

    source: DropTarget
    record_id: str


DragState = Union[Idle, Dragging]


@dataclass(frozen=True)
class DragStarted:
    source: DropTarget


@dataclass(frozen=True)
class Dropped:
    """Drop event; target is None when dropped outside any page."""

    target: Optional[DropTarget]


@dataclass(frozen=True)
class DragCancelled:
    pass


DragEvent = Union[DragStarted, Dropped, DragCancelled]


@dataclass(frozen=True)
class EditorState:
    """
    Editor state handed between reducer calls.

    Attributes:
        records: Records in document order
        layout: Current pagination of records
        drag: Current drag state
        estimator: Optional height function used when re-paginating
    """

    records: tuple[Record, ...]
    layout: PageModel
    drag: DragState = Idle()
    estimator: Optional[Callable[[Record], float]] = field(default=None, compare=False)

    @classmethod
    def initial(
        cls,
        records: Sequence[Record],
        config: Optional[LayoutConfig] = None,
        mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
        *,
        available_height: Optional[float] = None,
        estimator: Optional[Callable[[Record], float]] = None,
    ) -> EditorState:
        """Paginate records and return an idle state."""
        records = tuple(records)
        layout = paginate(
            records,
            config,
            mode=mode,
            available_height=available_height,
            estimator=estimator,
        )
        return cls(records=records, layout=layout, estimator=estimator)

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.drag, Dragging)

    def with_records(self, records: Sequence[Record]) -> EditorState:
        """Return an idle state for new records, re-paginated with the same settings."""
        records = tuple(records)
        layout = paginate(
            records,
            self.layout.config,
            mode=self.layout.mode,
            available_height=self.layout.available_height,
            estimator=self.estimator,
        )
        return replace(self, records=records, layout=layout, drag=Idle())


def reduce(state: EditorState, event: DragEvent) -> EditorState:
    """
    Apply one drag event.

    Transitions:
        Idle + DragStarted      -> Dragging
        Dragging + Dropped      -> Idle (records moved, re-paginated)
        Dragging + DragCancelled -> Idle (unchanged)

    Dropping outside any page, on an unknown page, or back onto the
    source position returns to Idle without changes. Drop and cancel
    events arriving while idle are ignored.

    Raises:
        ReorderError: If a drag starts while another is in flight, or the
            source position does not exist
    """
    if isinstance(event, DragStarted):
        return _start(state, event.source)

    if isinstance(event, DragCancelled):
        if state.is_dragging:
            logger.debug(f"Drag of {state.drag.record_id!r} cancelled")
        return replace(state, drag=Idle())

    if isinstance(event, Dropped):
        if not isinstance(state.drag, Dragging):
            logger.debug("Drop received while idle, ignoring")
            return state
        return _drop(state, state.drag, event.target)

    raise ReorderError(f"Unknown drag event: {event!r}")


def _start(state: EditorState, source: DropTarget) -> EditorState:
    if state.is_dragging:
        raise ReorderError(
            f"Drag already in progress for record {state.drag.record_id!r}"
        )
    pages = state.layout.pages
    if not 0 <= source.page_index < len(pages):
        raise ReorderError(f"Invalid source page: {source.page_index}")
    items = pages[source.page_index].items
    if not 0 <= source.item_index < len(items):
        raise ReorderError(
            f"Invalid source item {source.item_index} on page {source.page_index + 1} "
            f"({len(items)} items)"
        )
    record_id = items[source.item_index].id
    logger.debug(f"Drag started for {record_id!r} at {source}")
    return replace(state, drag=Dragging(source=source, record_id=record_id))


def _drop(state: EditorState, drag: Dragging, target: Optional[DropTarget]) -> EditorState:
    idle = replace(state, drag=Idle())

    if target is None:
        logger.debug(f"Drag of {drag.record_id!r} dropped outside any page")
        return idle
    if target == drag.source:
        return idle

    destination = resolve_destination(state.layout, state.records, target)
    if destination is None:
        logger.debug(f"Drop target {target} does not exist, ignoring")
        return idle

    page_number = state.layout.pages[target.page_index].page_number
    starts_page = target.item_index == 0 and page_number > 1

    records = move_record(
        state.records,
        drag.record_id,
        destination,
        page_break_before=starts_page,
    )
    logger.info(
        f"Moved {drag.record_id!r} from page {drag.source.page_index + 1} "
        f"to page {page_number} position {target.item_index}"
    )
    return state.with_records(records)


def resolve_destination(
    layout: PageModel,
    records: Sequence[Record],
    target: DropTarget,
) -> Optional[int]:
    """
    Translate a page-local drop target into a global insertion index.

    The index is expressed in the record list before the dragged record
    is removed; move_record() applies the shift.

    - empty page              -> end of the list
    - item_index 0            -> index of the page's first record
    - item_index past the end -> index after the page's last record
    - otherwise               -> index of the record currently there

    Returns:
        Global index, or None if the target page does not exist
    """
    if not 0 <= target.page_index < len(layout.pages) or target.item_index < 0:
        return None

    items = layout.pages[target.page_index].items
    if not items:
        return len(records)
    if target.item_index >= len(items):
        return find_index(records, items[-1].id) + 1
    return find_index(records, items[target.item_index].id)


def move_record(
    records: Sequence[Record],
    record_id: str,
    destination_index: int,
    *,
    page_break_before: Optional[bool] = None,
) -> tuple[Record, ...]:
    """
    Move one record to a new global position.

    destination_index is taken in the list before removal: when it lies
    after the record's current position it is shifted down by one.
    Out of range values are clamped. All other records keep their flags.

    Args:
        records: Records in document order
        record_id: Record to move
        destination_index: Insertion index before removal
        page_break_before: New flag for the moved record (None = keep)

    Raises:
        RecordNotFoundError: If no record has this id

    Example:
        Moving "a" to 3 in [a, b, c, d] gives [b, c, a, d].
    """
    source_index = find_index(records, record_id)
    updated = list(records)
    moved = updated.pop(source_index)
    if page_break_before is not None:
        moved = moved.with_breaks(before=page_break_before)

    destination = max(0, min(destination_index, len(records)))
    if destination > source_index:
        destination -= 1
    updated.insert(destination, moved)
    return tuple(updated)
