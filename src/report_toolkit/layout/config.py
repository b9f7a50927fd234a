"""
Module: layout.config

Purpose:
    Configuration for the page layout engine.
    Centralizes every page and photo geometry constant so that the height
    estimator, the photo planner and all three renderers share one set of
    numbers.

Key Classes:
    - LayoutConfig: Immutable layout configuration
    - PhotoLayoutMode: Stack or grid photo arrangement
    - OverflowScope: How far a manual break suppresses automatic breaks

Dependencies:
    - dataclasses (std)
    - enum (std)
    - numbers (std)

Used By:
    - layout.photos: Photo layout planning
    - layout.estimator: Record height estimation
    - layout.paginator: Page arrangement
    - output: Renderers
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from numbers import Real
from types import MappingProxyType
from typing import Any, Mapping


# A4 page dimensions at 96 DPI (1 mm = 3.7795 px)
PX_PER_MM = 3.7795
DEFAULT_PAGE_WIDTH_PX = 210 * PX_PER_MM
DEFAULT_PAGE_HEIGHT_PX = 297 * PX_PER_MM
DEFAULT_DPI = 96

DEFAULT_MIN_LINES = MappingProxyType({"location": 2, "finding": 3, "recommendation": 3})


class PhotoLayoutMode(str, Enum):
    """Photo arrangement inside a record."""

    STACK = "stack"
    GRID = "grid"


class OverflowScope(str, Enum):
    """
    Scope of automatic overflow suppression once a manual break exists.

    DOCUMENT: any manual break anywhere disables automatic overflow
        breaking for the whole document.
    PAGE: automatic overflow breaking is disabled only on pages that
        were opened by a manual break.
    """

    DOCUMENT = "document"
    PAGE = "page"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    All values are in CSS pixels at `dpi` unless noted otherwise.

    Attributes:
        page_width: Page width
        page_height: Page height
        dpi: Pixel density, used to convert to PDF points
        margin_horizontal: Left and right margin
        margin_vertical: Top and bottom margin
        header_reserve: Band reserved for the page header
        title_overhead: Record title and metadata line
        chars_per_line: Characters that fit on one text line
        line_height: Height of one text line
        field_label_overhead: Label above each text field
        min_lines: Minimum line count per text field
        photos_label_overhead: "Photos (n)" label above the photo block
        grid_width_share: Fraction of content width per grid cell
        inverse_aspect_ratio: Default photo height / width (4:3 -> 0.75)
        photo_controls_overhead: Controls strip below each photo row
        photo_spacing: Spacing between photos / grid rows
        trailing_spacing: Spacing after each record
        overflow_scope: Scope of automatic break suppression

    Example:
        >>> config = LayoutConfig()
        >>> round(config.available_height)
        997
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_PX
    page_height: float = DEFAULT_PAGE_HEIGHT_PX
    dpi: int = DEFAULT_DPI

    # Margins
    margin_horizontal: float = 23
    margin_vertical: float = 38
    header_reserve: float = 50

    # Text
    title_overhead: float = 40
    chars_per_line: int = 80
    line_height: float = 18
    field_label_overhead: float = 25
    min_lines: Mapping[str, int] = field(default_factory=lambda: DEFAULT_MIN_LINES, hash=False)

    # Photos
    photos_label_overhead: float = 30
    grid_width_share: float = 0.48
    inverse_aspect_ratio: float = 0.75
    photo_controls_overhead: float = 80
    photo_spacing: float = 12

    # Spacing
    trailing_spacing: float = 30

    # Behavior
    overflow_scope: OverflowScope = OverflowScope.DOCUMENT

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.chars_per_line <= 0:
            raise ValueError(f"chars_per_line must be positive: {self.chars_per_line}")
        if not 0 < self.grid_width_share <= 0.5:
            raise ValueError(f"grid_width_share must be within (0, 0.5]: {self.grid_width_share}")
        if self.inverse_aspect_ratio <= 0:
            raise ValueError(f"inverse_aspect_ratio must be positive: {self.inverse_aspect_ratio}")
        # Freeze overrides and coerce enum values given as strings
        object.__setattr__(self, "min_lines", MappingProxyType({**DEFAULT_MIN_LINES, **self.min_lines}))
        object.__setattr__(self, "overflow_scope", OverflowScope(self.overflow_scope))

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - 2 * self.margin_horizontal

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins and header)."""
        return self.page_height - 2 * self.margin_vertical - self.header_reserve

    @property
    def grid_cell_width(self) -> float:
        """Width of one grid cell."""
        return self.available_width * self.grid_width_share

    def min_lines_for(self, field_name: str) -> int:
        """Minimum line count for a text field (1 for unknown fields)."""
        return self.min_lines.get(field_name, 1)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["min_lines"] = dict(self.min_lines)
        data["overflow_scope"] = self.overflow_scope.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LayoutConfig:
        """
        Build a config from overrides; missing keys keep their defaults.

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown layout config keys: {unknown}")
        for name, value in data.items():
            if name == "min_lines":
                if not isinstance(value, Mapping) or not all(
                    isinstance(v, int) and not isinstance(v, bool) for v in value.values()
                ):
                    raise ValueError(f"min_lines must map field names to integers: {value!r}")
            elif name != "overflow_scope" and (isinstance(value, bool) or not isinstance(value, Real)):
                raise ValueError(f"{name} must be a number: {value!r}")
        return cls(**dict(data))
