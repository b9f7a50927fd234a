"""
Module: records

Purpose:
    Provides the Record dataclass - a single inspection finding with its
    free text, photos and manual page break flags. Records are value
    objects: every edit produces a new instance.

Key Classes:
    - Record: Immutable finding record

Dependencies:
    - dataclasses (std)
    - .photos.Photo

Used By:
    - layout.estimator, layout.paginator
    - editing.edits, editing.reorder
    - output renderers
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Literal, Optional

from .photos import Photo


TextField = Literal["location", "finding", "recommendation"]
TEXT_FIELDS: tuple[str, ...] = ("location", "finding", "recommendation")


@dataclass(frozen=True)
class Record:
    """
    Inspection finding (immutable).

    Attributes:
        id: Stable record identifier
        section_title: Audit section label (display only)
        item_title: Checklist item label (display only)
        location: Where the finding was observed
        finding: What was found
        recommendation: What should be done about it
        photos: Ordered photo entries
        page_break_before: Force this record to start a new page
        page_break_after: Force the next record to start a new page

    Example:
        >>> record = Record(id="r1", item_title="Floor drains", finding="Blocked")
        >>> record.with_text("finding", "Blocked and dirty").finding
        'Blocked and dirty'
    """

    id: str
    section_title: str = ""
    item_title: str = ""
    location: str = ""
    finding: str = ""
    recommendation: str = ""
    photos: tuple[Photo, ...] = ()
    page_break_before: bool = False
    page_break_after: bool = False

    def __post_init__(self) -> None:
        # Accept any iterable of photos but store a tuple
        if not isinstance(self.photos, tuple):
            object.__setattr__(self, "photos", tuple(self.photos))

    @property
    def has_manual_break(self) -> bool:
        """True if either manual break flag is set."""
        return self.page_break_before or self.page_break_after

    def text_for(self, field: str) -> str:
        """Return the text of one of the three free-text fields ("" if unset)."""
        _check_field(field)
        return getattr(self, field) or ""

    def with_text(self, field: str, value: str) -> Record:
        """Return a copy with one free-text field replaced."""
        _check_field(field)
        return replace(self, **{field: value})

    def with_photos(self, photos: Iterable[Photo]) -> Record:
        """Return a copy with a new photo list."""
        return replace(self, photos=tuple(photos))

    def with_breaks(
        self,
        *,
        before: Optional[bool] = None,
        after: Optional[bool] = None,
    ) -> Record:
        """Return a copy with the given break flags changed (None = keep)."""
        return replace(
            self,
            page_break_before=self.page_break_before if before is None else before,
            page_break_after=self.page_break_after if after is None else after,
        )

    def find_photo(self, photo_id: str) -> Optional[Photo]:
        """Return the photo with the given id, or None."""
        return next((p for p in self.photos if p.id == photo_id), None)


def _check_field(field: str) -> None:
    if field not in TEXT_FIELDS:
        raise ValueError(f"Unknown text field: {field!r} (expected one of {TEXT_FIELDS})")
