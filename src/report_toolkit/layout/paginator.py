"""
Module: layout.paginator

Purpose:
    Partition the ordered record list into pages under a fixed height
    budget. Records are never split; manual breaks always win over
    automatic overflow breaks.

Key Functions:
    - paginate(): Main pagination function
    - has_effective_manual_break(): Whether any manual break takes effect

Algorithm:
    Single left-to-right scan, no backtracking:
    1. Estimate the record's height
    2. If a manual break applies and the page has items, start a new page
    3. Else if the record would overflow a non-empty page and automatic
       breaking is not suppressed, start a new page
    4. Otherwise append to the current page
    A record taller than the budget still gets placed; the page is
    flagged as overflowing.

Dependencies:
    - layout.config: LayoutConfig, OverflowScope
    - layout.estimator: estimate_height()
    - layout.models: Page, PageModel

Used By:
    - editing.reorder: Re-pagination after drops
    - editing.session: Re-pagination after every edit
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, List, Optional, Sequence

from report_toolkit.core.models import Record

from .config import LayoutConfig, OverflowScope, PhotoLayoutMode
from .estimator import estimate_height
from .models import Page, PageModel

logger = logging.getLogger(__name__)


HeightEstimator = Callable[[Record], float]


def paginate(
    records: Sequence[Record],
    config: Optional[LayoutConfig] = None,
    *,
    mode: PhotoLayoutMode = PhotoLayoutMode.STACK,
    available_height: Optional[float] = None,
    estimator: Optional[HeightEstimator] = None,
) -> PageModel:
    """
    Arrange records onto pages.

    Rules:
    1. pageBreakBefore on a record (other than the first) opens a new page.
    2. pageBreakAfter on a record (other than the last) makes the next
       record open a new page.
    3. A record that would push a non-empty page past the budget opens a
       new page, unless automatic breaking is suppressed by a manual break
       (see OverflowScope).

    Args:
        records: Records in document order
        config: Layout configuration (defaults to LayoutConfig())
        mode: Photo layout mode used for height estimation
        available_height: Page budget (defaults to config.available_height)
        estimator: Height function overriding the default estimator

    Returns:
        PageModel with at least one page
    """
    config = config or LayoutConfig()
    mode = PhotoLayoutMode(mode)
    budget = config.available_height if available_height is None else available_height
    if estimator is None:
        estimator = partial(estimate_height, mode=mode, config=config)

    suppress_everywhere = (
        config.overflow_scope is OverflowScope.DOCUMENT
        and has_effective_manual_break(records)
    )

    pages: List[Page] = []
    items: List[Record] = []
    height = 0.0
    opened_by_manual = False
    break_pending = False

    for record in records:
        record_height = estimator(record)
        manual_break = (record.page_break_before or break_pending) and bool(items)

        if manual_break:
            pages.append(_close_page(len(pages) + 1, items, height, budget, opened_by_manual))
            items, height, opened_by_manual = [], 0.0, True
        elif items and height + record_height > budget:
            suppressed = suppress_everywhere or (
                config.overflow_scope is OverflowScope.PAGE and opened_by_manual
            )
            if not suppressed:
                pages.append(_close_page(len(pages) + 1, items, height, budget, opened_by_manual))
                items, height, opened_by_manual = [], 0.0, False

        items.append(record)
        height += record_height
        break_pending = record.page_break_after

    if items or not pages:
        pages.append(_close_page(len(pages) + 1, items, height, budget, opened_by_manual))

    warnings = tuple(
        f"Page {page.page_number} overflows: {page.estimated_height:.0f}px needed, "
        f"{budget:.0f}px available"
        for page in pages if page.overflowing
    )
    for warning in warnings:
        logger.warning(warning)

    logger.info(f"Paginated {len(records)} records onto {len(pages)} pages")

    return PageModel(
        pages=tuple(pages),
        config=config,
        mode=mode,
        available_height=budget,
        warnings=warnings,
    )


def has_effective_manual_break(records: Sequence[Record]) -> bool:
    """
    True if any manual break actually takes effect.

    pageBreakBefore on the first record and pageBreakAfter on the last
    record are no-ops and do not count.
    """
    last = len(records) - 1
    return any(
        (record.page_break_before and index > 0) or (record.page_break_after and index < last)
        for index, record in enumerate(records)
    )


def _close_page(
    page_number: int,
    items: List[Record],
    height: float,
    budget: float,
    opened_by_manual: bool,
) -> Page:
    return Page(
        page_number=page_number,
        items=tuple(items),
        estimated_height=height,
        overflowing=height > budget,
        opened_by_manual_break=opened_by_manual,
    )
