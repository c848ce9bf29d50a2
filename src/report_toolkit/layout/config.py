"""
Module: layout.config

Purpose:
    Page geometry for the pagination engine.
    Defines page dimensions and margins in PDF points (1/72 inch).

Key Classes:
    - PageGeometry: Immutable page size and margins

Dependencies:
    - dataclasses (std)

Used By:
    - layout.models: CursorState origins
    - layout.paginator: Page-break threshold
    - output.renderer: Column layout
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Standard A4 portrait page at 72 units per inch
DEFAULT_PAGE_WIDTH_PT = 595.0
DEFAULT_PAGE_HEIGHT_PT = 842.0

# Base printable margins
DEFAULT_MARGIN_TOP_BOTTOM_PT = 36.0
DEFAULT_MARGIN_LEFT_RIGHT_PT = 20.0


@dataclass(frozen=True)
class PageGeometry:
    """
    Page size and margins (immutable).

    All values are in canvas units (PDF points). The vertical axis runs
    top-down: a position of ``margin_top`` is the first writable line.

    Attributes:
        width: Page width
        height: Page height
        margin_top: Top margin
        margin_right: Right margin
        margin_bottom: Bottom margin
        margin_left: Left margin

    Example:
        >>> geometry = PageGeometry()
        >>> geometry.available_height
        770.0
        >>> geometry.content_bottom
        806.0
    """

    # Page dimensions
    width: float = DEFAULT_PAGE_WIDTH_PT
    height: float = DEFAULT_PAGE_HEIGHT_PT

    # Margins
    margin_top: float = DEFAULT_MARGIN_TOP_BOTTOM_PT
    margin_right: float = DEFAULT_MARGIN_LEFT_RIGHT_PT
    margin_bottom: float = DEFAULT_MARGIN_TOP_BOTTOM_PT
    margin_left: float = DEFAULT_MARGIN_LEFT_RIGHT_PT

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        for name in ("margin_top", "margin_right", "margin_bottom", "margin_left"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.height - self.margin_top - self.margin_bottom

    @property
    def content_bottom(self) -> float:
        """Lowest vertical position content may reach."""
        return self.height - self.margin_bottom

    @property
    def size(self) -> Tuple[float, float]:
        """(width, height) tuple, as ReportLab expects a pagesize."""
        return (self.width, self.height)


A4_PORTRAIT = PageGeometry()
