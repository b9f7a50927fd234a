"""
Module: suggestions

Purpose:
    Data contracts for the two suggestion collaborators: content
    suggestions (single-field text replacements) and layout suggestions
    (a proposed grouping of record ids into pages). The collaborators
    themselves live outside this package; only their payloads are
    modelled here.

Key Classes:
    - ContentSuggestion: Proposed replacement text for one record field
    - LayoutSuggestion: Proposed page grouping of record ids

Dependencies:
    - dataclasses (std)

Used By:
    - editing.edits: apply_suggestion(), apply_layout_suggestion()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from .records import TEXT_FIELDS


SuggestionCategory = Literal["grammar", "clarity", "professionalism", "structure", "specificity"]
SUGGESTION_CATEGORIES = ("grammar", "clarity", "professionalism", "structure", "specificity")


@dataclass(frozen=True)
class ContentSuggestion:
    """
    Suggested replacement for one free-text field of one record.

    Attributes:
        record_id: Target record
        field: One of "location", "finding", "recommendation"
        original_text: Text the suggestion was made against
        suggested_text: Replacement text
        confidence: 0-1 confidence reported by the collaborator
        category: Kind of improvement
        reason: Short human readable explanation

    Invariants:
        - field is a known text field
        - 0 <= confidence <= 1
        - category is one of SUGGESTION_CATEGORIES
    """

    record_id: str
    field: str
    original_text: str
    suggested_text: str
    confidence: float
    category: SuggestionCategory
    reason: str = ""

    def __post_init__(self) -> None:
        """Validate suggestion on construction."""
        if self.field not in TEXT_FIELDS:
            raise ValueError(f"Invalid suggestion field: {self.field!r}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1]: {self.confidence}")
        if self.category not in SUGGESTION_CATEGORIES:
            raise ValueError(f"Invalid suggestion category: {self.category!r}")

    @property
    def key(self) -> tuple[str, str]:
        """(record_id, field) pair identifying the suggestion target."""
        return (self.record_id, self.field)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentSuggestion:
        """
        Build a suggestion from a collaborator payload.

        Accepts both "recordId" and the legacy "nonComplianceId" key.

        Raises:
            ValueError: If required keys are missing or values are invalid
        """
        record_id = data.get("recordId", data.get("nonComplianceId"))
        if record_id is None:
            raise ValueError("Suggestion payload has no recordId")
        try:
            return cls(
                record_id=str(record_id),
                field=data["field"],
                original_text=data.get("originalText", ""),
                suggested_text=data["suggestedText"],
                confidence=float(data.get("confidence", 0.0)),
                category=data.get("category", "clarity"),
                reason=data.get("reason", ""),
            )
        except KeyError as e:
            raise ValueError(f"Suggestion payload missing key: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the collaborator's payload shape."""
        return {
            "recordId": self.record_id,
            "field": self.field,
            "originalText": self.original_text,
            "suggestedText": self.suggested_text,
            "confidence": self.confidence,
            "category": self.category,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class LayoutSuggestion:
    """
    Suggested grouping of records into pages.

    Attributes:
        pages: Record ids per page, in page order
        confidence: 0-1 confidence reported by the collaborator
        reason: Overall explanation
    """

    pages: tuple[tuple[str, ...], ...]
    confidence: float = 0.8
    reason: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LayoutSuggestion:
        """
        Build from {"pages": [{"pageNumber": 1, "itemIds": [...]}], ...}.

        Pages are ordered by pageNumber when present, else by position.
        """
        raw_pages = data.get("pages")
        if not isinstance(raw_pages, list):
            raise ValueError("Layout suggestion payload has no pages list")
        keyed = []
        for index, page in enumerate(raw_pages):
            if not isinstance(page, dict):
                raise ValueError(f"Layout suggestion page {index} must be an object")
            number = page.get("pageNumber", index + 1)
            if isinstance(number, bool) or not isinstance(number, int):
                raise ValueError(f"Layout suggestion page {index} has invalid pageNumber: {number!r}")
            item_ids = page.get("itemIds", [])
            if not isinstance(item_ids, list):
                raise ValueError(f"Layout suggestion page {index} itemIds must be a list")
            keyed.append(((number, index), tuple(str(i) for i in item_ids)))
        pages = tuple(ids for _, ids in sorted(keyed, key=lambda pair: pair[0]))
        confidence = data.get("confidence", 0.8)
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise ValueError(f"Layout suggestion confidence must be a number: {confidence!r}")
        return cls(
            pages=pages,
            confidence=float(confidence),
            reason=data.get("overallReason", data.get("reason", "")),
        )
