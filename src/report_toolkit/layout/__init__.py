"""
Module: layout

Purpose:
    Page layout engine for finding reports.
    Estimates record heights, plans photo arrangements and partitions the
    record list into pages. Every renderer consumes the resulting
    PageModel; none of them re-derives page boundaries.

Key Functions:
    - paginate(): Arrange records onto pages
    - estimate_height(): Estimated height of one record
    - plan_photos(): Photo arrangement of one record

Key Classes:
    - LayoutConfig: Geometry configuration
    - Page / PageModel: Pagination output
    - PhotoPlan / HeightBreakdown: Per-record layout detail

Dependencies:
    - report_toolkit.core.models: Record, Photo

Used By:
    - report_toolkit.editing: Re-pagination after edits
    - report_toolkit.output: Renderers
"""

from .config import LayoutConfig, OverflowScope, PhotoLayoutMode
from .models import (
    FieldSlot,
    HeightBreakdown,
    Page,
    PageModel,
    PhotoPlacement,
    PhotoPlan,
)
from .photos import effective_width_percent, plan_photos
from .estimator import estimate_breakdown, estimate_height
from .paginator import paginate

__all__ = [
    # Config
    "LayoutConfig",
    "OverflowScope",
    "PhotoLayoutMode",
    # Models
    "FieldSlot",
    "HeightBreakdown",
    "Page",
    "PageModel",
    "PhotoPlacement",
    "PhotoPlan",
    # Functions
    "effective_width_percent",
    "plan_photos",
    "estimate_breakdown",
    "estimate_height",
    "paginate",
]
