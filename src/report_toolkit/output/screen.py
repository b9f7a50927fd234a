"""
Module: output.screen

Purpose:
    Per-page fill summary for on-screen display.
    Reads page heights straight from the PageModel; nothing here
    re-estimates or re-paginates.

Key Functions:
    - summarize_pages(): One PageSummary per page
    - format_summary(): Plain text table of the summaries

Used By:
    - cli: Console output
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from report_toolkit.layout import PageModel


@dataclass(frozen=True)
class PageSummary:
    """
    Display summary of one page.

    Attributes:
        page_number: Page number (1-indexed)
        item_count: Records on the page
        estimated_height: Estimated content height in px
        available_height: Page budget in px
        fill_ratio: estimated_height / available_height
        free_height: Remaining budget in px (never negative)
        overflowing: Content exceeds the budget
        record_ids: Ids of the records on the page
    """

    page_number: int
    item_count: int
    estimated_height: float
    available_height: float
    fill_ratio: float
    free_height: float
    overflowing: bool
    record_ids: tuple[str, ...]

    @property
    def label(self) -> str:
        """Height label, e.g. "640px / 997px"."""
        return f"{self.estimated_height:.0f}px / {self.available_height:.0f}px"


def summarize_pages(model: PageModel) -> tuple[PageSummary, ...]:
    """Summarize every page of a layout."""
    budget = model.available_height
    return tuple(
        PageSummary(
            page_number=page.page_number,
            item_count=len(page.items),
            estimated_height=page.estimated_height,
            available_height=budget,
            fill_ratio=page.estimated_height / budget if budget > 0 else 0.0,
            free_height=max(0.0, budget - page.estimated_height),
            overflowing=page.overflowing,
            record_ids=page.item_ids,
        )
        for page in model.pages
    )


def format_summary(summaries: Iterable[PageSummary]) -> str:
    """Render summaries as one line per page."""
    lines = []
    for summary in summaries:
        flag = "  OVERFLOW" if summary.overflowing else ""
        lines.append(
            f"Page {summary.page_number}: {summary.item_count} records, "
            f"{summary.label} ({summary.fill_ratio:.0%}){flag}"
        )
    return "\n".join(lines)
