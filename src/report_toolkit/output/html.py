"""
Module: output.html

Purpose:
    Printable HTML rendering of a PageModel.
    One <section class="page"> per Page with CSS page breaks between
    sections, so the browser's print dialog reproduces the editor's
    pagination. Rendering is deterministic (Jinja2 + StrictUndefined).

Key Functions:
    - render_print_html(): PageModel -> HTML string
    - write_print_html(): Render and write to a file

Dependencies:
    - jinja2: Templating
    - layout: estimate_breakdown() for photo sizes

Used By:
    - cli: --html output
"""

from __future__ import annotations

import logging
from datetime import date as date_type
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from report_toolkit.core.models import Record
from report_toolkit.layout import PageModel, estimate_breakdown

from .renderer import FIELD_LABELS, RenderError

logger = logging.getLogger(__name__)

TEMPLATE_ROOT = Path(__file__).parent / "templates"
PRINT_TEMPLATE = "print_report.html.j2"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATE_ROOT),
        autoescape=select_autoescape(["html", "j2"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_print_html(
    model: PageModel,
    title: str = "Inspection Report",
    date: Optional[Union[str, date_type]] = None,
    auditor: str = "",
) -> str:
    """
    Render a layout as printable HTML.

    Args:
        model: Layout from paginate()
        title: Report title shown on every page
        date: Report date (ISO string or date); omitted when None
        auditor: Auditor name; omitted when empty

    Returns:
        Complete HTML document

    Raises:
        RenderError: If the template fails to render
    """
    if isinstance(date, date_type):
        date = date.isoformat()

    context = {
        "title": title,
        "date": date or "",
        "auditor": auditor,
        "page_count": model.page_count,
        "pages": [
            {
                "number": page.page_number,
                "overflowing": page.overflowing,
                "records": [_record_context(record, model) for record in page.items],
            }
            for page in model.pages
        ],
    }

    try:
        html = _environment().get_template(PRINT_TEMPLATE).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed to render print template: {e}") from e

    logger.debug(f"Rendered print HTML for {model.page_count} pages")
    return html


def _record_context(record: Record, model: PageModel) -> dict[str, Any]:
    breakdown = estimate_breakdown(record, model.mode, model.config)
    plan = breakdown.photos
    photos = []
    for placement in plan.placements:
        photo = record.find_photo(placement.photo_id)
        src = photo.content or photo.url
        if photo.content and not photo.content.startswith("data:"):
            src = f"data:image/jpeg;base64,{photo.content}"
        photos.append({
            "id": photo.id,
            "src": src,
            "caption": photo.caption,
            "width_percent": round(placement.width_ratio * 100, 2),
            "alignment": placement.alignment,
            "column": placement.column,
        })
    return {
        "id": record.id,
        "heading": " / ".join(t for t in (record.section_title, record.item_title) if t) or record.id,
        "fields": [
            {"label": FIELD_LABELS[slot.field], "text": record.text_for(slot.field)}
            for slot in breakdown.fields
        ],
        "photos": photos,
        "grid": plan.mode.value == "grid",
    }


def write_print_html(
    model: PageModel,
    output_path: Path,
    **kwargs: Any,
) -> Path:
    """
    Render printable HTML and write it to output_path.

    Raises:
        RenderError: If rendering or writing fails
    """
    output_path = Path(output_path)
    html = render_print_html(model, **kwargs)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise RenderError(f"Failed to write HTML {output_path}: {e}") from e
    logger.info(f"Wrote print HTML ({model.page_count} pages) to {output_path}")
    return output_path
