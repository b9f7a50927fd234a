"""
Module: cli

Purpose:
    Command line entry point. Loads a record snapshot, paginates it,
    prints a per-page summary and writes the requested outputs.

Usage:
    report-toolkit report.json --mode grid --pdf out/report.pdf
    report-toolkit report.json --pin-breaks --save report.pinned.json

Dependencies:
    - argparse (std)
    - editing.session: EditorSession
    - output: Renderers
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from report_toolkit import __version__
from report_toolkit.core.schemas import ValidationError
from report_toolkit.core.utils.serialization import load_records_json, save_records_json
from report_toolkit.editing import EditorSession
from report_toolkit.layout import LayoutConfig, OverflowScope, PhotoLayoutMode
from report_toolkit.output import (
    RenderError,
    format_summary,
    render_to_pdf,
    summarize_pages,
    write_description,
    write_print_html,
)

logger = logging.getLogger("report_toolkit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-toolkit",
        description="Paginate inspection finding records and render them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report.json
  %(prog)s report.json --mode grid --pdf out/report.pdf --html out/report.html
  %(prog)s report.json --pin-breaks --save report.pinned.json
        """,
    )
    parser.add_argument("snapshot", type=Path, help="Record snapshot (JSON)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in PhotoLayoutMode],
        default=PhotoLayoutMode.STACK.value,
        help="Photo layout mode (default: stack)",
    )
    parser.add_argument(
        "--overflow-scope",
        choices=[s.value for s in OverflowScope],
        default=None,
        help="Where manual breaks suppress automatic breaks (default: from config, else document)",
    )
    parser.add_argument("--config", type=Path, help="Layout config overrides (JSON)")
    parser.add_argument("--pdf", type=Path, help="Write PDF document")
    parser.add_argument("--html", type=Path, help="Write printable HTML")
    parser.add_argument("--describe", type=Path, help="Write JSON layout description")
    parser.add_argument(
        "--pin-breaks",
        action="store_true",
        help="Turn automatic page boundaries into manual breaks",
    )
    parser.add_argument("--save", type=Path, help="Write the (possibly pinned) snapshot")
    parser.add_argument("--title", default="Inspection Report", help="Report title")
    parser.add_argument("--date", default=None, help="Report date shown in HTML output")
    parser.add_argument("--auditor", default="", help="Auditor shown in HTML output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(path: Optional[Path], overflow_scope: Optional[str]) -> LayoutConfig:
    """
    Build the layout config from an optional JSON file and CLI overrides.

    Raises:
        ValueError: If the file holds unknown keys or invalid values
    """
    config = LayoutConfig()
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Layout config must be a JSON object: {path}")
        config = LayoutConfig.from_dict(data)
    if overflow_scope is not None:
        config = replace(config, overflow_scope=OverflowScope(overflow_scope))
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = load_config(args.config, args.overflow_scope)
        records = load_records_json(args.snapshot)
    except ValidationError as e:
        logger.error(f"Invalid snapshot: {e}")
        for error in e.errors:
            logger.error(f"  {error}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load input: {e}")
        return 1

    session = EditorSession(records, config, PhotoLayoutMode(args.mode))
    if args.pin_breaks:
        session.pin_automatic_breaks()

    layout = session.layout
    print(format_summary(summarize_pages(layout)))

    try:
        if args.save:
            save_records_json(args.save, session.records)
            logger.info(f"Saved snapshot to {args.save}")
        if args.pdf:
            render_to_pdf(layout, args.pdf, title=args.title)
        if args.html:
            write_print_html(layout, args.html, title=args.title, date=args.date, auditor=args.auditor)
        if args.describe:
            write_description(layout, args.describe)
    except (RenderError, OSError) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
