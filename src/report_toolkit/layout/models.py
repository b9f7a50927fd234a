"""
Module: layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for photo placements, height breakdowns, pages
    and the final page model handed to every renderer.

Key Classes:
    - PhotoPlacement: One photo's size and grid position
    - PhotoPlan: All placements of one record plus block height
    - FieldSlot: Height slot of one text field
    - HeightBreakdown: Per-slot height estimate of one record
    - Page: Single page of records
    - PageModel: Final layout output with diagnostics

Dependencies:
    - dataclasses (std)
    - core.models: Record

Used By:
    - layout.photos, layout.estimator, layout.paginator
    - editing.reorder: Page-local index resolution
    - output: Renderers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from report_toolkit.core.models import Record

from .config import LayoutConfig, PhotoLayoutMode


@dataclass(frozen=True)
class PhotoPlacement:
    """
    Size and position of one photo inside its record's photo block.

    Attributes:
        photo_id: Photo identifier
        width_ratio: Effective width as a fraction of content width
        width: Rendered width in px
        height: Implied height in px (via aspect ratio)
        row: 0-indexed row in the photo block
        column: 1 (left) or 2 (right); always 1 in stack mode
        alignment: Horizontal alignment hint (stack mode)
    """

    photo_id: str
    width_ratio: float
    width: float
    height: float
    row: int
    column: int
    alignment: str = "left"


@dataclass(frozen=True)
class PhotoPlan:
    """
    Photo arrangement of one record.

    Attributes:
        mode: Arrangement used
        placements: One placement per laid-out photo
        row_heights: Height of each row including the controls strip
        skipped: Ids of photos left out (no source)
        spacing: Spacing between rows
    """

    mode: PhotoLayoutMode
    placements: tuple[PhotoPlacement, ...]
    row_heights: tuple[float, ...]
    skipped: tuple[str, ...] = ()
    spacing: float = 0

    @property
    def row_count(self) -> int:
        """Number of rows in the photo block."""
        return len(self.row_heights)

    @property
    def is_empty(self) -> bool:
        """True if no photo was laid out."""
        return not self.placements

    @property
    def height(self) -> float:
        """Total block height (rows plus spacing)."""
        if not self.row_heights:
            return 0
        if self.mode is PhotoLayoutMode.GRID:
            return sum(self.row_heights) + (len(self.row_heights) - 1) * self.spacing
        return sum(self.row_heights) + len(self.row_heights) * self.spacing

    def row_top(self, row: int) -> float:
        """Offset of a row from the top of the photo block."""
        return sum(self.row_heights[:row]) + row * self.spacing

    def placement_for(self, photo_id: str) -> Optional[PhotoPlacement]:
        """Return the placement for a photo id, or None if skipped."""
        return next((p for p in self.placements if p.photo_id == photo_id), None)


@dataclass(frozen=True)
class FieldSlot:
    """Height slot reserved for one text field."""

    field: str
    lines: int
    height: float


@dataclass(frozen=True)
class HeightBreakdown:
    """
    Estimated height of one record, slot by slot.

    Renderers draw into these slots so that what is drawn matches what
    the paginator budgeted for.

    Attributes:
        title: Title and metadata slot
        fields: Text field slots in display order
        photos_label: Photo label slot (0 without photos)
        photos: Photo plan for the record
        trailing: Spacing after the record
    """

    title: float
    fields: tuple[FieldSlot, ...]
    photos_label: float
    photos: PhotoPlan
    trailing: float

    @property
    def total(self) -> float:
        """Total estimated height in px."""
        return (
            self.title
            + sum(f.height for f in self.fields)
            + self.photos_label
            + self.photos.height
            + self.trailing
        )


@dataclass(frozen=True)
class Page:
    """
    Complete layout of a single page.

    Attributes:
        page_number: Page number (1-indexed)
        items: Records on this page, in document order
        estimated_height: Sum of the records' estimated heights
        overflowing: Estimated height exceeds the available height
        opened_by_manual_break: Page was started by a manual break

    Example:
        >>> page = Page(page_number=1, items=(r1, r2), estimated_height=600)
        >>> page.index
        0
    """

    page_number: int
    items: tuple[Record, ...]
    estimated_height: float
    overflowing: bool = False
    opened_by_manual_break: bool = False

    @property
    def index(self) -> int:
        """0-indexed page position."""
        return self.page_number - 1

    @property
    def is_empty(self) -> bool:
        """Check if page has no records."""
        return len(self.items) == 0

    @property
    def item_ids(self) -> tuple[str, ...]:
        """Ids of the records on this page."""
        return tuple(r.id for r in self.items)


@dataclass(frozen=True)
class PageModel:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Pages in order
        config: Geometry the layout was computed with
        mode: Photo layout mode the layout was computed with
        available_height: Page budget used for pagination
        warnings: Human readable warnings (overflowing pages)

    Example:
        >>> model = paginate(records, LayoutConfig())
        >>> model.page_count
        2
    """

    pages: tuple[Page, ...]
    config: LayoutConfig
    mode: PhotoLayoutMode
    available_height: float
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def records(self) -> tuple[Record, ...]:
        """All records, concatenated in page order."""
        return tuple(r for page in self.pages for r in page.items)

    @property
    def overflowing_pages(self) -> tuple[Page, ...]:
        """Pages whose estimated height exceeds the budget."""
        return tuple(p for p in self.pages if p.overflowing)

    def locate(self, record_id: str) -> Optional[tuple[int, int]]:
        """Return (page_index, item_index) of a record, or None."""
        for page in self.pages:
            for item_index, record in enumerate(page.items):
                if record.id == record_id:
                    return page.index, item_index
        return None

    def page_of(self, record_id: str) -> Optional[Page]:
        """Return the page holding a record, or None."""
        position = self.locate(record_id)
        return self.pages[position[0]] if position is not None else None
