"""
Editing Package

Edit operations, drag-and-drop reordering and the editor session.
Edits are pure functions over record tuples; EditorSession wraps them
and keeps the page layout in sync.
"""

from .edits import (
    EditError,
    PhotoNotFoundError,
    RecordNotFoundError,
    apply_layout_suggestion,
    apply_suggestion,
    apply_suggestions,
    delete_photo,
    edit_text,
    pin_automatic_breaks,
    pin_page_starts,
    resize_photo,
    toggle_page_break,
)
from .reorder import (
    DragCancelled,
    DragStarted,
    Dragging,
    DropTarget,
    Dropped,
    EditorState,
    Idle,
    ReorderError,
    move_record,
    reduce,
    resolve_destination,
)
from .session import EditorSession

__all__ = [
    # Errors
    "EditError",
    "PhotoNotFoundError",
    "RecordNotFoundError",
    "ReorderError",
    # Edits
    "apply_layout_suggestion",
    "apply_suggestion",
    "apply_suggestions",
    "delete_photo",
    "edit_text",
    "pin_automatic_breaks",
    "pin_page_starts",
    "resize_photo",
    "toggle_page_break",
    # Reorder
    "DragCancelled",
    "DragStarted",
    "Dragging",
    "DropTarget",
    "Dropped",
    "EditorState",
    "Idle",
    "move_record",
    "reduce",
    "resolve_destination",
    # Session
    "EditorSession",
]
