"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_photo,
    deserialize_photo,
    serialize_record,
    deserialize_record,
    serialize_records,
    deserialize_records,
    load_records_json,
    save_records_json,
)

__all__ = [
    "serialize_photo",
    "deserialize_photo",
    "serialize_record",
    "deserialize_record",
    "serialize_records",
    "deserialize_records",
    "load_records_json",
    "save_records_json",
]
