"""
Module: photos

Purpose:
    Provides the Photo dataclass - one picture attached to a finding
    record. Carries the pixel content (or a reference to it) plus the
    user's sizing choices. Layout decisions are NOT stored here; they are
    derived by layout.photos.plan_photos().

Key Classes:
    - Photo: Immutable photo entry

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.records.Record
    - layout.photos: Photo layout planning
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, Optional


PhotoAlignment = Literal["left", "center", "right"]
VALID_ALIGNMENTS = ("left", "center", "right")
DEFAULT_WIDTH_PERCENT = 100


@dataclass(frozen=True)
class Photo:
    """
    Photo attached to a finding (immutable).

    The width is kept exactly as supplied by upstream so that it can be
    passed through to the document collaborator unchanged. Consumers that
    need a usable number go through layout.photos.effective_width_percent().

    Attributes:
        id: Stable photo identifier
        content: Base64 encoded pixel data (None if only referenced)
        url: External reference to the pixels (None if embedded)
        caption: Optional caption text
        width: Width in percent of the content width (0-100)
        alignment: Horizontal alignment hint for stacked photos
        column: Grid column hint (1 = left, 2 = right)
        aspect_ratio: Width / height of the picture, if known
        grid_position: Position in the grid, if assigned

    Example:
        >>> photo = Photo(id="p1", content="iVBORw0...", width=60)
        >>> photo.has_source
        True
    """

    id: str
    content: Optional[str] = None
    url: Optional[str] = None
    caption: str = ""
    width: Any = DEFAULT_WIDTH_PERCENT
    alignment: Optional[PhotoAlignment] = None
    column: Optional[int] = None
    aspect_ratio: Optional[float] = None
    grid_position: Optional[int] = None

    @property
    def has_source(self) -> bool:
        """True if the photo has pixel content or a reference to it."""
        return bool(self.content) or bool(self.url)

    def with_width(self, width: Any) -> Photo:
        """Return a copy with a new width percentage."""
        return replace(self, width=width)
