"""
Module: layout.estimator

Purpose:
    Estimate the rendered height of one finding record.
    Pure and deterministic: the same record, mode and config always give
    the same number, and growing any text field or adding a photo never
    lowers it.

Key Functions:
    - estimate_breakdown(): Slot-by-slot height estimate
    - estimate_height(): Total estimated height in px
    - line_count(): Lines needed for one text field
    - split_paragraphs(): Field text split on explicit line breaks

Dependencies:
    - layout.config: LayoutConfig
    - layout.photos: plan_photos()

Used By:
    - layout.paginator: Page budgeting
    - output: Slot offsets for drawing
"""

from __future__ import annotations

import math
from typing import Optional

from report_toolkit.core.models import Record, TEXT_FIELDS

from .config import LayoutConfig, PhotoLayoutMode
from .models import FieldSlot, HeightBreakdown
from .photos import plan_photos


def split_paragraphs(text: Optional[str]) -> list[str]:
    """Split field text on explicit line breaks (empty text is one empty paragraph)."""
    return (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")


def line_count(text: Optional[str], field_name: str, config: LayoutConfig) -> int:
    """
    Lines reserved for a text field.

    Each paragraph takes at least one line:
    lines = max(min_lines, sum(max(1, ceil(len(p) / chars_per_line))))

    Example:
        >>> line_count("x" * 250, "finding", LayoutConfig())
        4
    """
    lines = sum(
        max(1, math.ceil(len(paragraph) / config.chars_per_line))
        for paragraph in split_paragraphs(text)
    )
    return max(config.min_lines_for(field_name), lines)


def estimate_breakdown(
    record: Record,
    mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
    config: Optional[LayoutConfig] = None,
) -> HeightBreakdown:
    """
    Estimate a record's height slot by slot.

    Args:
        record: Record to measure
        mode: Photo layout mode
        config: Layout configuration (defaults to LayoutConfig())

    Returns:
        HeightBreakdown whose total is the estimated height
    """
    config = config or LayoutConfig()

    slots = []
    for field_name in TEXT_FIELDS:
        lines = line_count(record.text_for(field_name), field_name, config)
        slots.append(FieldSlot(
            field=field_name,
            lines=lines,
            height=lines * config.line_height + config.field_label_overhead,
        ))

    plan = plan_photos(record.photos, mode, config)
    photos_label = 0 if plan.is_empty else config.photos_label_overhead

    return HeightBreakdown(
        title=config.title_overhead,
        fields=tuple(slots),
        photos_label=photos_label,
        photos=plan,
        trailing=config.trailing_spacing,
    )


def estimate_height(
    record: Record,
    mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
    config: Optional[LayoutConfig] = None,
) -> float:
    """
    Estimated rendered height of a record in px.

    Example:
        >>> estimate_height(Record(id="r1"))
        289.0
    """
    return float(estimate_breakdown(record, mode, config).total)
