"""
Serialization Utilities

Provides to/from JSON utilities for records and photos.

The persistence collaborator treats the record list as an opaque
snapshot, so the wire format simply mirrors the editor payload
(camelCase keys, base64 photo content). Photo widths and break flags are
written back exactly as they were read.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..models.photos import DEFAULT_WIDTH_PERCENT, Photo
from ..models.records import Record
from ..schemas.validator import SNAPSHOT_SCHEMA_VERSION, validate_record, validate_snapshot

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Photo Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_photo(photo: Photo) -> dict[str, Any]:
    """
    Serialize a Photo to a dictionary.

    Optional hints are only written when set.
    """
    data: dict[str, Any] = {"id": photo.id, "width": photo.width}
    if photo.content:
        data["base64"] = photo.content
    if photo.url:
        data["url"] = photo.url
    if photo.caption:
        data["caption"] = photo.caption
    if photo.alignment is not None:
        data["alignment"] = photo.alignment
    if photo.column is not None:
        data["column"] = photo.column
    if photo.aspect_ratio is not None:
        data["aspectRatio"] = photo.aspect_ratio
    if photo.grid_position is not None:
        data["gridPosition"] = photo.grid_position
    return data


def deserialize_photo(data: dict[str, Any]) -> Photo:
    """Deserialize a Photo from a dictionary (accepts legacy "position")."""
    return Photo(
        id=str(data["id"]),
        content=data.get("base64") or None,
        url=data.get("url") or None,
        caption=data.get("caption") or "",
        width=data.get("width", DEFAULT_WIDTH_PERCENT),
        alignment=data.get("alignment", data.get("position")),
        column=data.get("column"),
        aspect_ratio=data.get("aspectRatio"),
        grid_position=data.get("gridPosition"),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Record Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_record(record: Record) -> dict[str, Any]:
    """
    Serialize a Record to a dictionary.

    The output can be written to JSON and will pass validation.
    """
    return {
        "id": record.id,
        "sectionTitle": record.section_title,
        "itemTitle": record.item_title,
        "location": record.location,
        "finding": record.finding,
        "recommendation": record.recommendation,
        "photos": [serialize_photo(p) for p in record.photos],
        "pageBreakBefore": record.page_break_before,
        "pageBreakAfter": record.page_break_after,
    }


def deserialize_record(data: dict[str, Any], *, validate: bool = True) -> Record:
    """
    Deserialize a Record from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate the payload shape first

    Returns:
        Record instance

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_record(data)

    return Record(
        id=str(data["id"]),
        section_title=data.get("sectionTitle") or "",
        item_title=data.get("itemTitle") or "",
        location=data.get("location") or "",
        finding=data.get("finding") or "",
        recommendation=data.get("recommendation") or "",
        photos=tuple(deserialize_photo(p) for p in data.get("photos", [])),
        page_break_before=bool(data.get("pageBreakBefore", False)),
        page_break_after=bool(data.get("pageBreakAfter", False)),
    )


def serialize_records(records: Iterable[Record]) -> dict[str, Any]:
    """Serialize a record list to a versioned snapshot."""
    return {
        "schema_version": SNAPSHOT_SCHEMA_VERSION,
        "records": [serialize_record(r) for r in records],
    }


def deserialize_records(data: Any, *, validate: bool = True) -> tuple[Record, ...]:
    """
    Deserialize a snapshot (versioned dict or bare list) into records.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_snapshot(data)
    items = data["records"] if isinstance(data, dict) else data
    return tuple(deserialize_record(item, validate=False) for item in items)


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def load_records_json(path: Path, *, validate: bool = True) -> tuple[Record, ...]:
    """
    Load records from a JSON snapshot file.

    Args:
        path: Path to the snapshot
        validate: Whether to validate the payload

    Returns:
        Tuple of records in document order

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If validate=True and the snapshot is invalid
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    records = deserialize_records(data, validate=validate)
    logger.debug(f"Loaded {len(records)} records from {path}")
    return records


def save_records_json(path: Path, records: Iterable[Record]) -> None:
    """Save records to a JSON snapshot file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    snapshot = serialize_records(records)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot, f, indent=2, ensure_ascii=False)
    logger.debug(f"Saved {len(snapshot['records'])} records to {path}")
