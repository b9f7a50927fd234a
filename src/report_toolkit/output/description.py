"""
Module: output.description

Purpose:
    JSON-ready description of a layout for external document generators.
    Break flags and raw photo widths are passed through untouched so the
    receiving side can apply its own rules; the effective width ratio and
    planned size are added next to them.

Key Functions:
    - describe_layout(): PageModel -> JSON-ready dict
    - write_description(): Write the description to a JSON file

Dependencies:
    - layout: estimate_breakdown(), PageModel

Used By:
    - cli: --describe output
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from report_toolkit.core.models import Photo, Record
from report_toolkit.layout import PageModel, PhotoPlan, estimate_breakdown

from .renderer import RenderError

logger = logging.getLogger(__name__)


def describe_layout(model: PageModel) -> dict[str, Any]:
    """
    Describe every page, record and photo of a layout.

    Example:
        >>> payload = describe_layout(paginate(records))
        >>> payload["pages"][0]["items"][0]["photos"][0]["widthRatio"]
        1.0
    """
    return {
        "mode": model.mode.value,
        "pageCount": model.page_count,
        "availableHeight": model.available_height,
        "warnings": list(model.warnings),
        "pages": [
            {
                "pageNumber": page.page_number,
                "estimatedHeight": page.estimated_height,
                "overflowing": page.overflowing,
                "items": [_describe_record(record, model) for record in page.items],
            }
            for page in model.pages
        ],
    }


def _describe_record(record: Record, model: PageModel) -> dict[str, Any]:
    breakdown = estimate_breakdown(record, model.mode, model.config)
    return {
        "id": record.id,
        "sectionTitle": record.section_title,
        "itemTitle": record.item_title,
        "location": record.location,
        "finding": record.finding,
        "recommendation": record.recommendation,
        "pageBreakBefore": record.page_break_before,
        "pageBreakAfter": record.page_break_after,
        "estimatedHeight": breakdown.total,
        "photos": [
            _describe_photo(photo, breakdown.photos)
            for photo in record.photos
            if breakdown.photos.placement_for(photo.id) is not None
        ],
    }


def _describe_photo(photo: Photo, plan: PhotoPlan) -> dict[str, Any]:
    placement = plan.placement_for(photo.id)
    return {
        "id": photo.id,
        "caption": photo.caption,
        "width": photo.width,
        "widthRatio": placement.width_ratio,
        "renderedWidth": placement.width,
        "renderedHeight": placement.height,
        "row": placement.row,
        "column": placement.column,
        "alignment": placement.alignment,
    }


def write_description(model: PageModel, output_path: Path) -> None:
    """
    Write describe_layout() output as JSON.

    Raises:
        RenderError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(describe_layout(model), f, indent=2, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        raise RenderError(f"Failed to write layout description {output_path}: {e}") from e
    logger.info(f"Wrote layout description to {output_path}")
