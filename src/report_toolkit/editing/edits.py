"""
Module: editing.edits

Purpose:
    Explicit edit operations on the record list.
    Every function is pure: it takes the current records and returns a
    new tuple, leaving the input untouched. Re-pagination is the caller's
    job (see editing.session.EditorSession).

Key Functions:
    - edit_text(): Replace one free-text field
    - resize_photo(): Change a photo's width percentage
    - delete_photo(): Remove a photo
    - toggle_page_break(): Flip a manual break flag
    - apply_suggestion() / apply_suggestions(): Accept content suggestions
    - apply_layout_suggestion(): Turn a suggested page grouping into breaks
    - pin_automatic_breaks(): Freeze current page boundaries as manual breaks

Dependencies:
    - core.models: Record, Photo, ContentSuggestion, LayoutSuggestion
    - layout: paginate()

Used By:
    - editing.session: Editor session
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Literal, Optional, Sequence

from report_toolkit.core.models import ContentSuggestion, LayoutSuggestion, Record
from report_toolkit.layout import LayoutConfig, PageModel, PhotoLayoutMode, paginate

logger = logging.getLogger(__name__)


# Grid width applied to photos of records with two or more photos
GRID_PHOTO_WIDTH_PERCENT = 48

BreakKind = Literal["before", "after"]


class EditError(Exception):
    """Error applying an edit operation."""
    pass


class RecordNotFoundError(EditError):
    """No record with the requested id."""
    pass


class PhotoNotFoundError(EditError):
    """No photo with the requested id on the record."""
    pass


def find_index(records: Sequence[Record], record_id: str) -> int:
    """
    Global index of a record.

    Raises:
        RecordNotFoundError: If no record has this id
    """
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    raise RecordNotFoundError(f"Record not found: {record_id!r}")


def _replace_at(records: Sequence[Record], index: int, record: Record) -> tuple[Record, ...]:
    updated = list(records)
    updated[index] = record
    return tuple(updated)


def edit_text(
    records: Sequence[Record],
    record_id: str,
    field: str,
    value: str,
) -> tuple[Record, ...]:
    """
    Replace one free-text field of one record.

    Raises:
        RecordNotFoundError: If the record does not exist
        ValueError: If field is not a text field
    """
    index = find_index(records, record_id)
    return _replace_at(records, index, records[index].with_text(field, value))


def resize_photo(
    records: Sequence[Record],
    record_id: str,
    photo_id: str,
    width: float,
) -> tuple[Record, ...]:
    """
    Set a photo's width percentage.

    The value is stored as given; layout clamps it to [0, 100].

    Raises:
        RecordNotFoundError: If the record does not exist
        PhotoNotFoundError: If the photo does not exist
    """
    index = find_index(records, record_id)
    record = records[index]
    if record.find_photo(photo_id) is None:
        raise PhotoNotFoundError(f"Photo {photo_id!r} not found on record {record_id!r}")
    photos = [p.with_width(width) if p.id == photo_id else p for p in record.photos]
    return _replace_at(records, index, record.with_photos(photos))


def delete_photo(
    records: Sequence[Record],
    record_id: str,
    photo_id: str,
) -> tuple[Record, ...]:
    """
    Remove a photo from a record.

    Raises:
        RecordNotFoundError: If the record does not exist
        PhotoNotFoundError: If the photo does not exist
    """
    index = find_index(records, record_id)
    record = records[index]
    if record.find_photo(photo_id) is None:
        raise PhotoNotFoundError(f"Photo {photo_id!r} not found on record {record_id!r}")
    photos = [p for p in record.photos if p.id != photo_id]
    return _replace_at(records, index, record.with_photos(photos))


def toggle_page_break(
    records: Sequence[Record],
    record_id: str,
    kind: BreakKind = "before",
) -> tuple[Record, ...]:
    """
    Flip pageBreakBefore or pageBreakAfter on a record.

    Raises:
        RecordNotFoundError: If the record does not exist
        ValueError: If kind is not "before" or "after"
    """
    index = find_index(records, record_id)
    record = records[index]
    if kind == "before":
        updated = record.with_breaks(before=not record.page_break_before)
    elif kind == "after":
        updated = record.with_breaks(after=not record.page_break_after)
    else:
        raise ValueError(f"Invalid break kind: {kind!r} (expected 'before' or 'after')")
    return _replace_at(records, index, updated)


def apply_suggestion(
    records: Sequence[Record],
    suggestion: ContentSuggestion,
) -> tuple[Record, ...]:
    """
    Accept one content suggestion.

    Pure single-field replace on the matching record. A suggestion for an
    unknown record leaves the list unchanged.
    """
    return tuple(
        r.with_text(suggestion.field, suggestion.suggested_text) if r.id == suggestion.record_id else r
        for r in records
    )


def apply_suggestions(
    records: Sequence[Record],
    suggestions: Iterable[ContentSuggestion],
) -> tuple[Record, ...]:
    """Accept several content suggestions, in order."""
    updated = tuple(records)
    count = 0
    for suggestion in suggestions:
        updated = apply_suggestion(updated, suggestion)
        count += 1
    logger.debug(f"Applied {count} content suggestions")
    return updated


def apply_layout_suggestion(
    records: Sequence[Record],
    suggestion: LayoutSuggestion,
) -> tuple[Record, ...]:
    """
    Turn a suggested page grouping into manual breaks.

    1. Clear every break flag.
    2. Records with two or more photos switch to grid widths (48 %),
       alternating columns and sequential grid positions.
    3. The first record of every suggested page after the first gets
       pageBreakBefore.

    Ids in the suggestion that match no record are ignored.
    """
    updated = []
    for record in records:
        record = record.with_breaks(before=False, after=False)
        if len(record.photos) >= 2:
            record = record.with_photos(
                replace(
                    photo,
                    width=GRID_PHOTO_WIDTH_PERCENT,
                    column=1 if index % 2 == 0 else 2,
                    grid_position=index,
                )
                for index, photo in enumerate(record.photos)
            )
        updated.append(record)

    positions = {record.id: index for index, record in enumerate(updated)}
    for page_ids in suggestion.pages[1:]:
        first = next((rid for rid in page_ids if rid in positions), None)
        if first is None:
            continue
        index = positions[first]
        updated[index] = updated[index].with_breaks(before=True)

    logger.info(
        f"Applied layout suggestion with {len(suggestion.pages)} pages "
        f"(confidence {suggestion.confidence:.2f})"
    )
    return tuple(updated)


def pin_automatic_breaks(
    records: Sequence[Record],
    config: Optional[LayoutConfig] = None,
    mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
) -> tuple[Record, ...]:
    """
    Freeze the current page boundaries as manual breaks.

    Sets pageBreakBefore on the first record of every page after the
    first; all other flags are kept.
    """
    return pin_page_starts(records, paginate(records, config, mode=mode))


def pin_page_starts(records: Sequence[Record], layout: PageModel) -> tuple[Record, ...]:
    """Set pageBreakBefore on the first record of every page after the first in layout."""
    starts = {page.items[0].id for page in layout.pages[1:] if page.items}
    logger.debug(f"Pinning {len(starts)} page starts")
    return tuple(r.with_breaks(before=True) if r.id in starts else r for r in records)
