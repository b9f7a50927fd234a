"""
Module: output.renderer

Purpose:
    Render a PageModel to PDF using ReportLab.
    Each Page becomes one PDF page. Records are drawn into the height
    slots the estimator reserved for them, so the document matches the
    pagination the editor showed.

Key Functions:
    - render_to_pdf(): Main rendering function

Key Classes:
    - RenderError: Output could not be produced

Dependencies:
    - reportlab: PDF generation
    - PIL: Photo decoding
    - layout: PageModel, estimate_breakdown()

Used By:
    - cli: --pdf output
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from report_toolkit.core.models import Photo, Record
from report_toolkit.layout import (
    LayoutConfig,
    Page,
    PageModel,
    PhotoLayoutMode,
    PhotoPlacement,
    PhotoPlan,
    estimate_breakdown,
)
from report_toolkit.layout.estimator import split_paragraphs

logger = logging.getLogger(__name__)

# Fonts
BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
TITLE_FONT_SIZE = 11
LABEL_FONT_SIZE = 8
BODY_FONT_SIZE = 9
HEADER_FONT_SIZE = 14
FOOTER_FONT_SIZE = 7

FIELD_LABELS = {
    "location": "Location",
    "finding": "Finding",
    "recommendation": "Recommendation",
}


class RenderError(Exception):
    """Error writing a rendered report."""
    pass


def render_to_pdf(
    model: PageModel,
    output_path: Path,
    *,
    title: str = "Inspection Report",
    show_footer: bool = True,
) -> Path:
    """
    Render a layout to a PDF file.

    Page size and margins come from the layout's config, converted from
    px at config.dpi to PDF points.

    Args:
        model: Layout from paginate()
        output_path: Path to write PDF
        title: Header text drawn at the top of every page
        show_footer: Draw "Page N of M" at the bottom of every page

    Returns:
        Path of the written PDF

    Raises:
        RenderError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(paginate(records), Path("output/report.pdf"))
    """
    output_path = Path(output_path)
    config = model.config
    if not model.records:
        logger.warning("Empty layout, creating PDF with a blank page")

    page_width_pt = _px_to_pt(config.page_width, config.dpi)
    page_height_pt = _px_to_pt(config.page_height, config.dpi)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        c = canvas.Canvas(str(output_path), pagesize=(page_width_pt, page_height_pt))
        c.setTitle(title)

        for page in model.pages:
            _render_page(c, page, model, title, page_height_pt)
            if show_footer:
                _draw_footer(c, page, model.page_count, page_width_pt)
            c.showPage()

        c.save()
    except OSError as e:
        raise RenderError(f"Failed to write PDF {output_path}: {e}") from e

    logger.info(f"Rendered {model.page_count} pages to {output_path}")
    return output_path


def _render_page(
    c: canvas.Canvas,
    page: Page,
    model: PageModel,
    title: str,
    page_height_pt: float,
) -> None:
    """Draw the page header and every record on the page."""
    config = model.config

    c.setFont(BOLD_FONT, HEADER_FONT_SIZE)
    c.drawString(
        _px_to_pt(config.margin_horizontal, config.dpi),
        _transform_y(page_height_pt, config.margin_vertical, config.header_reserve / 2, config.dpi),
        title,
    )

    top = config.margin_vertical + config.header_reserve
    for record in page.items:
        top += _draw_record(c, record, top, model.mode, config, page_height_pt)


def _draw_record(
    c: canvas.Canvas,
    record: Record,
    top: float,
    mode: PhotoLayoutMode,
    config: LayoutConfig,
    page_height_pt: float,
) -> float:
    """
    Draw one record starting at top (px from page top).

    Returns:
        Height consumed in px (the record's estimated height)
    """
    breakdown = estimate_breakdown(record, mode, config)
    left_pt = _px_to_pt(config.margin_horizontal, config.dpi)
    width_pt = _px_to_pt(config.available_width, config.dpi)
    cursor = top

    heading = " / ".join(t for t in (record.section_title, record.item_title) if t) or record.id
    c.setFont(BOLD_FONT, TITLE_FONT_SIZE)
    c.drawString(left_pt, _transform_y(page_height_pt, cursor, breakdown.title / 2, config.dpi), heading)
    cursor += breakdown.title

    for slot in breakdown.fields:
        c.setFont(BOLD_FONT, LABEL_FONT_SIZE)
        c.drawString(
            left_pt,
            _transform_y(page_height_pt, cursor, config.field_label_overhead * 0.6, config.dpi),
            FIELD_LABELS[slot.field],
        )
        line_top = cursor + config.field_label_overhead
        c.setFont(BODY_FONT, BODY_FONT_SIZE)
        for index, line in enumerate(_wrap_field(record.text_for(slot.field), width_pt, slot.lines, config)):
            c.drawString(
                left_pt,
                _transform_y(
                    page_height_pt,
                    line_top + index * config.line_height,
                    config.line_height * 0.75,
                    config.dpi,
                ),
                line,
            )
        cursor += slot.height

    if not breakdown.photos.is_empty:
        c.setFont(BOLD_FONT, LABEL_FONT_SIZE)
        c.drawString(
            left_pt,
            _transform_y(page_height_pt, cursor, breakdown.photos_label * 0.6, config.dpi),
            f"Photos ({len(breakdown.photos.placements)})",
        )
        cursor += breakdown.photos_label
        _draw_photos(c, record, breakdown.photos, cursor, config, page_height_pt)

    return breakdown.total


def _wrap_field(text: str, width_pt: float, max_lines: int, config: LayoutConfig) -> list[str]:
    """
    Break field text into drawable lines, never more than max_lines.

    Lines are wrapped by measured width. If that needs more lines than the
    estimator reserved, paragraphs are cut every chars_per_line characters
    instead, which always fits the reserved count.
    """
    paragraphs = split_paragraphs(text)
    lines = []
    for paragraph in paragraphs:
        lines.extend(simpleSplit(paragraph, BODY_FONT, BODY_FONT_SIZE, width_pt) or [""])
    if len(lines) <= max_lines:
        return lines

    step = config.chars_per_line
    lines = []
    for paragraph in paragraphs:
        lines.extend([paragraph[i:i + step] for i in range(0, len(paragraph), step)] or [""])
    return lines


def _draw_photos(
    c: canvas.Canvas,
    record: Record,
    plan: PhotoPlan,
    block_top: float,
    config: LayoutConfig,
    page_height_pt: float,
) -> None:
    for placement in plan.placements:
        photo = record.find_photo(placement.photo_id)
        x_px = _photo_left(placement, plan.mode, config)
        y_top = block_top + plan.row_top(placement.row)
        x_pt = _px_to_pt(x_px, config.dpi)
        y_pt = _transform_y(page_height_pt, y_top, placement.height, config.dpi)
        width_pt = _px_to_pt(placement.width, config.dpi)
        height_pt = _px_to_pt(placement.height, config.dpi)

        if photo.content:
            image = _decode_photo(photo)
            if image is None:
                continue
            c.drawImage(
                _pil_to_reader(image),
                x_pt,
                y_pt,
                width=width_pt,
                height=height_pt,
                preserveAspectRatio=True,
            )
        else:
            _draw_placeholder(c, photo, x_pt, y_pt, width_pt, height_pt)

        if photo.caption:
            c.setFont(BODY_FONT, LABEL_FONT_SIZE)
            c.drawString(x_pt, y_pt - LABEL_FONT_SIZE - 2, photo.caption)


def _photo_left(placement: PhotoPlacement, mode: PhotoLayoutMode, config: LayoutConfig) -> float:
    """Left edge of a photo in px."""
    left = config.margin_horizontal
    if mode is PhotoLayoutMode.GRID:
        if placement.column == 2:
            return left + config.available_width - placement.width
        return left
    free = config.available_width - placement.width
    if placement.alignment == "center":
        return left + free / 2
    if placement.alignment == "right":
        return left + free
    return left


def _decode_photo(photo: Photo) -> Optional[Image.Image]:
    """Decode embedded base64 pixels; None (with a warning) if they are unreadable."""
    data = photo.content
    # Accept data URLs as produced by browsers
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        image = Image.open(io.BytesIO(base64.b64decode(data, validate=True)))
        image.load()
    except (binascii.Error, ValueError, OSError) as e:
        logger.warning(f"Skipping undecodable photo {photo.id!r}: {e}")
        return None
    if image.mode not in ("RGB", "RGBA", "L"):
        image = image.convert("RGB")
    return image


def _draw_placeholder(
    c: canvas.Canvas,
    photo: Photo,
    x_pt: float,
    y_pt: float,
    width_pt: float,
    height_pt: float,
) -> None:
    """Outlined box standing in for a photo that is only referenced by url."""
    c.saveState()
    c.setStrokeColorRGB(0.6, 0.6, 0.6)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    c.rect(x_pt, y_pt, width_pt, height_pt, stroke=1, fill=0)
    c.setFont(BODY_FONT, LABEL_FONT_SIZE)
    lines = simpleSplit(f"Photo: {photo.url}", BODY_FONT, LABEL_FONT_SIZE, max(width_pt - 8, 20))
    for index, line in enumerate(lines[:3]):
        c.drawString(x_pt + 4, y_pt + height_pt - 12 - index * (LABEL_FONT_SIZE + 2), line)
    c.restoreState()


def _draw_footer(c: canvas.Canvas, page: Page, page_count: int, page_width_pt: float) -> None:
    """Centered page number, 15pt from the page bottom."""
    text = f"Page {page.page_number} of {page_count}"
    c.saveState()
    c.setFont(BODY_FONT, FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    text_width = c.stringWidth(text, BODY_FONT, FOOTER_FONT_SIZE)
    c.drawString((page_width_pt - text_width) / 2, 15, text)
    c.restoreState()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """Convert PIL image to ReportLab ImageReader."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _px_to_pt(px: float, dpi: int) -> float:
    """
    Convert pixels to PDF points.

    PDF points are 1/72 inch.
    """
    return px * 72.0 / dpi


def _transform_y(page_height_pt: float, y_px_top: float, height_px: float, dpi: int) -> float:
    """
    Convert a top-down px position to ReportLab's bottom-up points.

    Returns the y of the element's bottom edge.
    """
    return page_height_pt - _px_to_pt(y_px_top + height_px, dpi)
