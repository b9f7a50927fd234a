"""
Core Models Package

Immutable data models that serve as the single source of truth for the
layout engine and every renderer.

All models in this package are frozen dataclasses. Edits never mutate a
record in place; they return a new instance (see editing.edits).
"""

from .photos import Photo, VALID_ALIGNMENTS
from .records import Record, TEXT_FIELDS
from .suggestions import ContentSuggestion, LayoutSuggestion, SUGGESTION_CATEGORIES

__all__ = [
    "Photo",
    "Record",
    "ContentSuggestion",
    "LayoutSuggestion",
    "TEXT_FIELDS",
    "VALID_ALIGNMENTS",
    "SUGGESTION_CATEGORIES",
]
