"""
Module: layout.models

Purpose:
    State models for the pagination engine.
    The mutable cursor owned by the paginator, the frozen snapshot
    handed out to render sinks, and the per-report table settings.

Key Classes:
    - CursorState: Mutable pagination cursor
    - CursorPosition: Read-only cursor snapshot
    - ReportConfiguration: Header titles and repeat-header flag

Dependencies:
    - dataclasses (std)
    - layout.config: PageGeometry

Used By:
    - layout.paginator: Owns one CursorState and one ReportConfiguration
    - output.renderer: Reads CursorPosition to place content
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .config import PageGeometry


@dataclass(frozen=True)
class CursorPosition:
    """
    Snapshot of the cursor at a point in time.

    Attributes:
        page_index: Current page (0-indexed)
        position: Vertical write position from the page top
        row_start: Horizontal start of the current row
    """

    page_index: int
    position: float
    row_start: float


@dataclass
class CursorState:
    """
    Mutable pagination cursor.

    Only the paginator mutates this. ``page_origin`` and ``row_origin``
    are fixed at construction and used to reset the cursor on every
    page transition.

    Attributes:
        page_index: Current page (0-indexed)
        position: Vertical write position from the page top
        row_start: Horizontal start of the current row
        page_origin: Vertical reset value (top margin)
        row_origin: Horizontal reset value (left margin)

    Example:
        >>> cursor = CursorState.from_geometry(PageGeometry())
        >>> cursor.position
        36.0
        >>> cursor.advance(70)
        >>> cursor.position
        106.0
    """

    page_index: int = 0
    position: float = 0.0
    row_start: float = 0.0
    page_origin: float = 0.0
    row_origin: float = 0.0

    @classmethod
    def from_geometry(cls, geometry: PageGeometry) -> "CursorState":
        """Create a cursor at the top-left of the printable area of page 0."""
        return cls(
            page_index=0,
            position=geometry.margin_top,
            row_start=geometry.margin_left,
            page_origin=geometry.margin_top,
            row_origin=geometry.margin_left,
        )

    def advance(self, amount: float) -> None:
        """Move the vertical position down by ``amount``."""
        self.position += amount

    def reset_row(self) -> None:
        """Carriage return: row start back to the left margin."""
        self.row_start = self.row_origin

    def reset_page(self) -> None:
        """Move to the top-left of the printable area (same page)."""
        self.position = self.page_origin
        self.reset_row()

    def next_page(self) -> None:
        """Increment the page index and reset to the page origin."""
        self.page_index += 1
        self.reset_page()

    def snapshot(self) -> CursorPosition:
        return CursorPosition(
            page_index=self.page_index,
            position=self.position,
            row_start=self.row_start,
        )


@dataclass
class ReportConfiguration:
    """
    Table settings for one report sequence.

    Attributes:
        header_titles: Ordered column titles, or None when not configured.
            Without titles, header and row drawing skip the render sink.
        repeat_header: Redraw the table header on every page the table spans
    """

    header_titles: Optional[Tuple[str, ...]] = None
    repeat_header: bool = False

    def set_header_titles(self, titles: Optional[Sequence[str]]) -> None:
        self.header_titles = tuple(titles) if titles is not None else None
