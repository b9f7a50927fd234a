"""
Report Toolkit Core Package

Shared data models, validation and serialization used by the layout
engine, the editing layer and every renderer.

Records and photos are frozen dataclasses: the layout engine treats them
as value objects and all mutation happens through explicit operations in
report_toolkit.editing.
"""

from .models import Photo, Record, ContentSuggestion, LayoutSuggestion

__all__ = [
    "Photo",
    "Record",
    "ContentSuggestion",
    "LayoutSuggestion",
]
