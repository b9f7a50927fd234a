"""
Output Package

Renderers for a finished PageModel: screen summary, printable HTML,
PDF document and a JSON layout description. Every renderer draws the
pages it is given and never re-paginates.
"""

from .renderer import RenderError, render_to_pdf
from .html import render_print_html, write_print_html
from .screen import PageSummary, format_summary, summarize_pages
from .description import describe_layout, write_description

__all__ = [
    "RenderError",
    "render_to_pdf",
    "render_print_html",
    "write_print_html",
    "PageSummary",
    "format_summary",
    "summarize_pages",
    "describe_layout",
    "write_description",
]
