"""
Module: layout

Purpose:
    Pagination core for table reports.
    Tracks the cursor across pages and decides page breaks; drawing
    is delegated to render sinks.

Key Classes:
    - PageGeometry: Page size and margins
    - ReportPaginator: Pagination engine
    - LayoutPolicy: Override-or-default layout magnitudes
    - StaticLayoutOverrides: Fixed layout overrides

Dependencies:
    - None outside the standard library

Used By:
    - output.renderer: Reads cursor snapshots
    - order_report: Drives a full report
"""

from .config import A4_PORTRAIT, PageGeometry
from .models import CursorPosition, CursorState, ReportConfiguration
from .policy import (
    DEFAULT_CELL_HEIGHT,
    DEFAULT_COLUMN_SPACING,
    DEFAULT_HEADER_HEIGHT,
    DEFAULT_ITEM_SPACING,
    LayoutPolicy,
    StaticLayoutOverrides,
)
from .paginator import MissingRenderSinkError, PaginationError, ReportPaginator
from .sinks import LayoutOverrides, OutputSink, PageSink, RenderSink

__all__ = [
    # Config
    "A4_PORTRAIT",
    "PageGeometry",
    # Models
    "CursorPosition",
    "CursorState",
    "ReportConfiguration",
    # Policy
    "DEFAULT_CELL_HEIGHT",
    "DEFAULT_COLUMN_SPACING",
    "DEFAULT_HEADER_HEIGHT",
    "DEFAULT_ITEM_SPACING",
    "LayoutPolicy",
    "StaticLayoutOverrides",
    # Engine
    "ReportPaginator",
    "MissingRenderSinkError",
    "PaginationError",
    # Contracts
    "LayoutOverrides",
    "OutputSink",
    "PageSink",
    "RenderSink",
]
