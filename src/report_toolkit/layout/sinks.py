"""
Module: layout.sinks

Purpose:
    Collaborator contracts consumed by the paginator.
    The paginator decides where and when content goes; these
    interfaces decide what gets drawn and where the pages end up.

Key Classes:
    - RenderSink: Mandatory table drawing callbacks
    - PageSink: Optional front/summary page callbacks
    - OutputSink: Physical output target lifecycle
    - LayoutOverrides: Optional layout magnitude hooks

Dependencies:
    - typing (std)

Used By:
    - layout.paginator: Invokes the callbacks
    - output.pdf_output: Implements OutputSink
    - output.renderer: Implements RenderSink and PageSink
"""

from __future__ import annotations

from os import PathLike
from typing import TYPE_CHECKING, Mapping, Optional, Protocol, Sequence, Union

from .config import PageGeometry

if TYPE_CHECKING:
    from .paginator import ReportPaginator


class RenderSink(Protocol):
    """
    Protocol for the table drawing callbacks.

    Both methods are mandatory. A sink may also implement the
    PageSink methods; the paginator skips them when absent.
    """

    def draw_table_header(
        self,
        paginator: "ReportPaginator",
        header_height: float,
        titles: Sequence[str],
        geometry: PageGeometry,
        column_spacing: float,
    ) -> None:
        """Draw the table header at the paginator's cursor"""
        ...

    def draw_table_row(
        self,
        paginator: "ReportPaginator",
        row_height: float,
        row_data: Mapping[str, str],
        titles: Sequence[str],
        geometry: PageGeometry,
        column_spacing: float,
    ) -> None:
        """Draw a single table row at the paginator's cursor"""
        ...


class PageSink(Protocol):
    """Optional front matter / summary callbacks (default: no-op)"""

    def draw_front_page(self, paginator: "ReportPaginator", geometry: PageGeometry) -> None:
        ...

    def draw_summary_page(self, paginator: "ReportPaginator", geometry: PageGeometry) -> None:
        ...


class OutputSink(Protocol):
    """
    Protocol for the physical output target.

    ``open`` raises OutputTargetInvalidError for an empty target.
    ``close`` must be idempotent and safe when never opened.
    """

    @property
    def is_open(self) -> bool:
        ...

    def open(self, target: Union[str, PathLike, None]) -> bool:
        ...

    def begin_page(self, width: float, height: float) -> None:
        ...

    def close(self) -> None:
        ...


class LayoutOverrides(Protocol):
    """
    Optional layout hooks.

    Any subset may be implemented. A missing hook, or one returning
    None, falls back to the built-in default. Hooks are queried on
    every use, so values may change between calls.
    """

    def table_header_height(self, paginator: "ReportPaginator") -> Optional[float]:
        ...

    def table_cell_height(self, paginator: "ReportPaginator") -> Optional[float]:
        ...

    def table_item_spacing(self, paginator: "ReportPaginator") -> Optional[float]:
        ...

    def table_column_spacing(self, paginator: "ReportPaginator") -> Optional[float]:
        ...
