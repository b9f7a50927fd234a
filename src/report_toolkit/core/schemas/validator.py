"""
Schema Validation Utilities

Validates record snapshot payloads before deserialization.

The persistence collaborator hands back whatever it stored, so payloads
are checked for shape (required keys, types, unique ids) and rejected
early with a precise path. Values the layout engine tolerates by design,
such as a non-numeric photo width, are NOT rejected here.
"""

from __future__ import annotations

from typing import Any


# Schema version constants
SNAPSHOT_SCHEMA_VERSION = 1


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


_REQUIRED_RECORD_FIELDS = ("id",)
_STRING_RECORD_FIELDS = ("sectionTitle", "itemTitle", "location", "finding", "recommendation")
_BOOL_RECORD_FIELDS = ("pageBreakBefore", "pageBreakAfter")


def _check_id(value: Any, path: str) -> None:
    # Ids are compared as strings once deserialized
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"id must be a string or integer: {value!r}", path=f"{path}.id")


def validate_photo(data: dict[str, Any], *, path: str = "") -> None:
    """
    Validate a single photo payload.

    Args:
        data: Photo dictionary
        path: Location of the photo in the enclosing payload (for errors)

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Photo must be an object, got {type(data).__name__}", path=path)

    if "id" not in data:
        raise ValidationError("Missing required fields: ['id']", path=path, errors=["Missing field: id"])
    _check_id(data["id"], path)

    for key in ("base64", "url", "caption"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Photo {key} must be a string", path=f"{path}.{key}")

    alignment = data.get("alignment", data.get("position"))
    if alignment is not None and alignment not in ("left", "center", "right"):
        raise ValidationError(f"Invalid photo alignment: {alignment!r}", path=f"{path}.alignment")

    column = data.get("column")
    if column is not None and column not in (1, 2):
        raise ValidationError(f"Invalid photo column: {column!r} (must be 1 or 2)", path=f"{path}.column")

    aspect = data.get("aspectRatio")
    if aspect is not None and (isinstance(aspect, bool) or not isinstance(aspect, (int, float))):
        raise ValidationError(f"Photo aspectRatio must be a number: {aspect!r}", path=f"{path}.aspectRatio")


def validate_record(data: dict[str, Any], *, path: str = "") -> None:
    """
    Validate a single record payload.

    Args:
        data: Record dictionary (collaborator camelCase keys)
        path: Location of the record in the enclosing payload (for errors)

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Record must be an object, got {type(data).__name__}", path=path)

    missing = [f for f in _REQUIRED_RECORD_FIELDS if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )
    _check_id(data["id"], path)

    errors = []
    for key in _STRING_RECORD_FIELDS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"{key} must be a string")
    for key in _BOOL_RECORD_FIELDS:
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            errors.append(f"{key} must be a boolean")
    if errors:
        raise ValidationError(f"Invalid record {data.get('id')!r}: {errors}", path=path, errors=errors)

    photos = data.get("photos", [])
    if not isinstance(photos, list):
        raise ValidationError("photos must be a list", path=f"{path}.photos")

    seen: set[str] = set()
    for index, photo in enumerate(photos):
        photo_path = f"{path}.photos[{index}]"
        validate_photo(photo, path=photo_path)
        if str(photo["id"]) in seen:
            raise ValidationError(f"Duplicate photo id: {photo['id']!r}", path=photo_path)
        seen.add(str(photo["id"]))


def validate_snapshot(data: Any) -> None:
    """
    Validate a persisted snapshot.

    Supports two formats:
    1. Versioned snapshot: {"schema_version": 1, "records": [...]}
    2. Bare list of records

    Raises:
        ValidationError: If data is invalid
    """
    if isinstance(data, dict):
        version = data.get("schema_version")
        if version != SNAPSHOT_SCHEMA_VERSION:
            raise ValidationError(
                f"Unsupported snapshot schema version: {version} (expected {SNAPSHOT_SCHEMA_VERSION})",
                path="schema_version",
            )
        records = data.get("records")
    else:
        records = data

    if not isinstance(records, list):
        raise ValidationError("Snapshot records must be a list", path="records")

    seen: set[str] = set()
    for index, record in enumerate(records):
        record_path = f"records[{index}]"
        validate_record(record, path=record_path)
        if str(record["id"]) in seen:
            raise ValidationError(f"Duplicate record id: {record['id']!r}", path=record_path)
        seen.add(str(record["id"]))
