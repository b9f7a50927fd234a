"""
Schemas Package

Payload validation for persisted record snapshots.
"""

from .validator import (
    SNAPSHOT_SCHEMA_VERSION,
    ValidationError,
    validate_photo,
    validate_record,
    validate_snapshot,
)

__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "ValidationError",
    "validate_photo",
    "validate_record",
    "validate_snapshot",
]
