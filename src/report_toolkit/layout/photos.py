"""
Module: layout.photos

Purpose:
    Decide how a record's photos are arranged and how big each one is.
    The resulting PhotoPlan feeds both the height estimator and the
    renderers, so the displayed photo size and the estimated height are
    derived from the same numbers.

Key Functions:
    - plan_photos(): Arrange a photo list in stack or grid mode
    - effective_width_percent(): Usable width for any raw width value
    - implied_height(): Photo height for a given rendered width

Algorithm:
    Grid: two cells per row at a fixed share of the content width.
          Even index -> column 1, odd index -> column 2.
    Stack: one photo per row, at the photo's own width percentage.
    Photos without pixel content or reference are skipped.

Dependencies:
    - layout.config: LayoutConfig, PhotoLayoutMode
    - layout.models: PhotoPlan, PhotoPlacement

Used By:
    - layout.estimator: Photo block height
    - output: Photo drawing
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, List, Sequence

from report_toolkit.core.models import Photo
from report_toolkit.core.models.photos import DEFAULT_WIDTH_PERCENT, VALID_ALIGNMENTS

from .config import LayoutConfig, PhotoLayoutMode
from .models import PhotoPlacement, PhotoPlan

logger = logging.getLogger(__name__)


def effective_width_percent(width: Any) -> float:
    """
    Normalize a raw photo width to a percentage in [0, 100].

    Missing, non-numeric, boolean and NaN values fall back to 100.

    Example:
        >>> effective_width_percent("wide")
        100.0
        >>> effective_width_percent(140)
        100.0
    """
    if isinstance(width, bool) or not isinstance(width, Real):
        return float(DEFAULT_WIDTH_PERCENT)
    value = float(width)
    if math.isnan(value):
        return float(DEFAULT_WIDTH_PERCENT)
    return min(100.0, max(0.0, value))


def implied_height(photo: Photo, width_px: float, config: LayoutConfig) -> float:
    """
    Height of a photo rendered at width_px.

    Uses the photo's own aspect ratio when it declares a positive one,
    otherwise the configured default (4:3).
    """
    ratio = photo.aspect_ratio
    if isinstance(ratio, Real) and not isinstance(ratio, bool) and ratio > 0:
        return width_px / float(ratio)
    return width_px * config.inverse_aspect_ratio


def plan_photos(
    photos: Sequence[Photo],
    mode: PhotoLayoutMode,
    config: LayoutConfig,
) -> PhotoPlan:
    """
    Arrange a record's photos.

    Args:
        photos: Photos in record order
        mode: Stack or grid arrangement
        config: Layout configuration

    Returns:
        PhotoPlan with one placement per photo that has a source

    Example:
        >>> plan = plan_photos(record.photos, PhotoLayoutMode.GRID, config)
        >>> [p.column for p in plan.placements]
        [1, 2, 1]
    """
    mode = PhotoLayoutMode(mode)
    usable = [p for p in photos if p.has_source]
    skipped = tuple(p.id for p in photos if not p.has_source)
    if skipped:
        logger.debug(f"Skipping {len(skipped)} photo(s) without source: {list(skipped)}")

    # A lone photo also takes a grid cell, so adding a photo never lowers the estimate
    if mode is PhotoLayoutMode.GRID:
        placements, row_heights = _plan_grid(usable, config)
    else:
        placements, row_heights = _plan_stack(usable, config)

    return PhotoPlan(
        mode=mode,
        placements=tuple(placements),
        row_heights=tuple(row_heights),
        skipped=skipped,
        spacing=config.photo_spacing,
    )


def _plan_grid(photos: List[Photo], config: LayoutConfig):
    """Two cells per row; the row is as tall as its tallest cell."""
    cell_width = config.grid_cell_width
    placements: List[PhotoPlacement] = []
    cell_heights: List[float] = []

    for index, photo in enumerate(photos):
        height = implied_height(photo, cell_width, config)
        placements.append(PhotoPlacement(
            photo_id=photo.id,
            width_ratio=config.grid_width_share,
            width=cell_width,
            height=height,
            row=index // 2,
            column=1 if index % 2 == 0 else 2,
            alignment=_alignment(photo),
        ))
        cell_heights.append(height)

    row_heights = [
        max(cell_heights[start:start + 2]) + config.photo_controls_overhead
        for start in range(0, len(cell_heights), 2)
    ]
    return placements, row_heights


def _plan_stack(photos: List[Photo], config: LayoutConfig):
    """One photo per row at the photo's own width."""
    placements: List[PhotoPlacement] = []
    row_heights: List[float] = []

    for index, photo in enumerate(photos):
        ratio = effective_width_percent(photo.width) / 100
        width = ratio * config.available_width
        height = implied_height(photo, width, config)
        placements.append(PhotoPlacement(
            photo_id=photo.id,
            width_ratio=ratio,
            width=width,
            height=height,
            row=index,
            column=1,
            alignment=_alignment(photo),
        ))
        row_heights.append(height + config.photo_controls_overhead)

    return placements, row_heights


def _alignment(photo: Photo) -> str:
    return photo.alignment if photo.alignment in VALID_ALIGNMENTS else "left"
