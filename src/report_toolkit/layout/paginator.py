"""
Module: layout.paginator

Purpose:
    Pagination engine for multi-page table reports.
    Tracks the writing cursor across pages, decides when a row must
    move to a new page, and fires render callbacks at the right time.

Key Classes:
    - ReportPaginator: The pagination state machine
    - MissingRenderSinkError: Drawing requested with no render sink
    - PaginationError: Generic drawing/header failure

Algorithm:
    Space-based, one row of lookahead:
    1. Before drawing a row, check that position + row + spacing
       still fits above the bottom margin
    2. If not, begin a new page (and re-emit the header if requested)
    3. Draw the row, then advance the cursor by row + spacing

Dependencies:
    - layout.config: PageGeometry
    - layout.models: CursorState, ReportConfiguration
    - layout.policy: LayoutPolicy
    - layout.sinks: RenderSink, OutputSink contracts

Used By:
    - order_report: Order summary driver
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from .config import A4_PORTRAIT, PageGeometry
from .models import CursorPosition, CursorState, ReportConfiguration
from .policy import LayoutPolicy
from .sinks import LayoutOverrides, OutputSink, RenderSink

logger = logging.getLogger(__name__)


class MissingRenderSinkError(Exception):
    """Drawing operation called with no render sink attached."""
    pass


class PaginationError(Exception):
    """A drawing or header emission step failed."""
    pass


class ReportPaginator:
    """
    Sequences page and row drawing for a table report.

    The paginator owns its cursor; callers and render sinks only ever
    see ``CursorPosition`` snapshots. ``render_sink``, ``output_sink``
    and ``layout_overrides`` are plain attributes and may be swapped
    between calls.

    Attributes:
        render_sink: Draws headers and rows (see layout.sinks.RenderSink)
        output_sink: Begins physical pages (see layout.sinks.OutputSink)

    Example:
        >>> paginator = ReportPaginator(render_sink=sink, output_sink=output)
        >>> paginator.set_header_titles(["Name", "Qty"])
        >>> paginator.set_repeat_header_on_every_page(True)
        >>> paginator.begin_table_report()
        >>> for row in rows:
        ...     paginator.draw_row(row)
    """

    def __init__(
        self,
        geometry: Optional[PageGeometry] = None,
        layout_overrides: Optional[LayoutOverrides] = None,
        *,
        render_sink: Optional[RenderSink] = None,
        output_sink: Optional[OutputSink] = None,
    ):
        self.render_sink: Optional[RenderSink] = render_sink
        self.output_sink: Optional[OutputSink] = output_sink
        self._config = ReportConfiguration()
        self.configure(geometry or A4_PORTRAIT, layout_overrides)

    def configure(self, geometry: PageGeometry, layout_overrides: Optional[LayoutOverrides] = None) -> None:
        """
        Reset the paginator for a new geometry.

        Builds a fresh cursor at the top-left of page 0. Header titles
        and the repeat-header flag are kept.

        Args:
            geometry: Page size and margins
            layout_overrides: Optional source of layout hooks
        """
        self._geometry = geometry
        self._policy = LayoutPolicy(layout_overrides)
        self._cursor = CursorState.from_geometry(geometry)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def geometry(self) -> PageGeometry:
        return self._geometry

    @property
    def cursor(self) -> CursorPosition:
        """Snapshot of the current cursor."""
        return self._cursor.snapshot()

    @property
    def page_index(self) -> int:
        return self._cursor.page_index

    @property
    def header_titles(self) -> Optional[Tuple[str, ...]]:
        return self._config.header_titles

    @property
    def repeat_header(self) -> bool:
        return self._config.repeat_header

    @property
    def layout_overrides(self) -> Optional[LayoutOverrides]:
        return self._policy.overrides

    @layout_overrides.setter
    def layout_overrides(self, overrides: Optional[LayoutOverrides]) -> None:
        self._policy.overrides = overrides

    def table_cell_height(self) -> float:
        """Currently resolved row height."""
        return self._policy.cell_height(self)

    def table_header_height(self) -> float:
        """Currently resolved header height."""
        return self._policy.header_height(self)

    # ------------------------------------------------------------------
    # Report configuration
    # ------------------------------------------------------------------

    def set_header_titles(self, titles: Optional[Sequence[str]]) -> None:
        """Set the table column titles (None disables header/row drawing)."""
        self._config.set_header_titles(titles)

    def set_repeat_header_on_every_page(self, flag: bool) -> None:
        """Set whether the header is redrawn after every page break."""
        self._config.repeat_header = bool(flag)

    # ------------------------------------------------------------------
    # Accessory pages
    # ------------------------------------------------------------------

    def draw_front_page(self, compact: bool = False) -> None:
        """
        Draw the front page on a new physical page.

        In compact mode the page index is not advanced, so the table
        that follows shares the front page.

        Args:
            compact: Share the page with the content that follows

        Raises:
            MissingRenderSinkError: If no render sink is attached
            PaginationError: If the sink or output target fails
        """
        sink = self._require_render_sink("draw_front_page")

        self._cursor.reset_page()
        self._begin_physical_page()
        self._invoke(sink, "draw_front_page", self._geometry, required=False)

        if not compact:
            self._cursor.next_page()

        self._cursor.reset_row()

    def draw_summary_page(self, compact: bool = False) -> None:
        """
        Draw the summary page.

        Non-compact: on a dedicated new page. Compact: on the current
        page, one row height plus spacing below the cursor.

        Args:
            compact: Reserve space on the current page instead of a new one

        Raises:
            MissingRenderSinkError: If no render sink is attached
            PaginationError: If the sink or output target fails
        """
        sink = self._require_render_sink("draw_summary_page")

        if not compact:
            self._cursor.reset_page()
            self._begin_physical_page()
            self._invoke(sink, "draw_summary_page", self._geometry, required=False)
            self._cursor.next_page()
            return

        cell_height = self._policy.cell_height(self)
        spacing = self._policy.item_spacing(self)

        self._cursor.advance(cell_height + spacing)
        self._invoke(sink, "draw_summary_page", self._geometry, required=False)

    def add_page(self) -> None:
        """Unconditional page break, outside the table flow."""
        self._begin_physical_page()
        self._cursor.next_page()
        logger.debug(f"Added page {self._cursor.page_index}")

    def reserve_space(self, height: float) -> None:
        """
        Move the cursor down by ``height`` on the current page.

        Lets a render sink claim the space its front matter used, so a
        compact front page is not overdrawn by the table header.

        Raises:
            ValueError: If height is negative
        """
        if height < 0:
            raise ValueError(f"height must be non-negative: {height}")
        self._cursor.advance(height)
        self._cursor.reset_row()

    # ------------------------------------------------------------------
    # Table report
    # ------------------------------------------------------------------

    def begin_table_report(self, compact: bool = False) -> None:
        """
        Start the table: begin a new page (unless compact) and draw the header.

        Args:
            compact: Draw the header on the current page

        Raises:
            MissingRenderSinkError: If no render sink is attached
            PaginationError: If header emission fails for any other reason
        """
        self._require_render_sink("begin_table_report")

        if not compact:
            self._begin_physical_page()

        self._emit_header_or_fail()

    def draw_row(self, row_data: Optional[Mapping[str, str]]) -> None:
        """
        Draw one table row, breaking the page first if it would not fit.

        The break test looks one row ahead: the row is moved to a new
        page when ``position + cell_height + item_spacing`` would pass
        the bottom margin, so rows are never clipped.

        Without header titles the row callback is skipped but the
        cursor still advances.

        Args:
            row_data: Mapping of column title to cell text; None is a no-op

        Raises:
            MissingRenderSinkError: If no render sink is attached
            PaginationError: If the sink, header re-emission or output fails
        """
        sink = self._require_render_sink("draw_row")

        if row_data is None:
            return

        cell_height = self._policy.cell_height(self)
        spacing = self._policy.item_spacing(self)
        column_spacing = self._policy.column_spacing(self)

        if self._cursor.position + cell_height + spacing > self._geometry.content_bottom:
            self._break_page()

        titles = self._config.header_titles
        if titles is not None:
            self._invoke(
                sink,
                "draw_table_row",
                cell_height,
                row_data,
                titles,
                self._geometry,
                column_spacing,
            )

        # CR/LF
        self._cursor.advance(cell_height + spacing)
        self._cursor.reset_row()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _break_page(self) -> None:
        """Move to a new page mid-table."""
        self._begin_physical_page()
        self._cursor.next_page()

        logger.debug(
            f"Page break: continuing table on page {self._cursor.page_index}"
            f"{' with repeated header' if self._config.repeat_header else ''}"
        )

        if self._config.repeat_header:
            self._emit_header_or_fail()

    def _emit_header_or_fail(self) -> None:
        try:
            self._emit_table_header()
        except (MissingRenderSinkError, PaginationError):
            raise
        except Exception as e:
            logger.error(f"Table header emission failed: {e}")
            raise PaginationError(f"Table header emission failed: {e}") from e

    def _emit_table_header(self) -> None:
        """Draw the table header at the cursor and move below it."""
        sink = self._require_render_sink("table header")

        header_height = self._policy.header_height(self)
        spacing = self._policy.item_spacing(self)
        column_spacing = self._policy.column_spacing(self)

        titles = self._config.header_titles
        if titles is not None:
            self._invoke(
                sink,
                "draw_table_header",
                header_height,
                titles,
                self._geometry,
                column_spacing,
            )

        self._cursor.advance(header_height + spacing)
        self._cursor.reset_row()

    def _require_render_sink(self, operation: str) -> RenderSink:
        if self.render_sink is None:
            raise MissingRenderSinkError(f"{operation} requires a render sink")
        return self.render_sink

    def _begin_physical_page(self) -> None:
        """Ask the output sink (if any) for a new page."""
        if self.output_sink is None:
            return
        try:
            self.output_sink.begin_page(self._geometry.width, self._geometry.height)
        except Exception as e:
            logger.error(f"Output sink failed to begin a page: {e}")
            raise PaginationError(f"Failed to begin page: {e}") from e

    def _invoke(self, sink: Any, hook_name: str, *args: Any, required: bool = True) -> None:
        """
        Call a render sink hook with this paginator as first argument.

        Optional hooks missing on the sink are skipped. Any failure
        other than the toolkit's own errors becomes PaginationError.
        """
        hook = getattr(sink, hook_name, None)
        if hook is None:
            if required:
                raise PaginationError(
                    f"Render sink {type(sink).__name__} does not implement {hook_name}()"
                )
            return

        try:
            hook(self, *args)
        except (MissingRenderSinkError, PaginationError):
            raise
        except Exception as e:
            logger.error(f"Render sink {hook_name}() failed: {e}")
            raise PaginationError(f"{hook_name}() failed: {e}") from e
