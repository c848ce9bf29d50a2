"""
Module: output.pdf_output

Purpose:
    PDF output target backed by a ReportLab canvas.
    Opens the document, begins physical pages on request, draws a
    page footer as each page is finished, and saves on close.

Key Classes:
    - PdfOutputSink: OutputSink implementation
    - OutputTargetInvalidError: Empty or missing output target

Dependencies:
    - reportlab: PDF generation

Used By:
    - layout.paginator: begin_page() on every page transition
    - output.renderer: Draws onto PdfOutputSink.canvas
    - order_report: Opens/closes the report file
"""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

# Footer configuration
FOOTER_FONT_NAME = "Helvetica"
FOOTER_FONT_SIZE = 7
FOOTER_OFFSET_PT = 15  # From page bottom


class OutputTargetInvalidError(Exception):
    """Output target identifier is empty or missing."""
    pass


class PdfOutputSink:
    """
    ReportLab-backed output target.

    Use as a context manager so the document is closed on every exit
    path:

        >>> with PdfOutputSink(title="Order") as output:
        ...     output.open("order.pdf")
        ...     paginator.output_sink = output

    Attributes:
        title: Document title metadata
        author: Document author metadata
        footer_text: Text drawn left of the page number in the footer
        show_footer: Draw "Page N" (and footer_text) on every page
        page_count: Pages written by the last close(), 0 before
    """

    def __init__(
        self,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        footer_text: Optional[str] = None,
        show_footer: bool = True,
    ):
        self.title = title
        self.author = author
        self.footer_text = footer_text
        self.show_footer = show_footer
        self.page_count = 0

        self._canvas: Optional[canvas.Canvas] = None
        self._target: Optional[Path] = None
        self._page_started = False
        self._page_width = A4[0]

    def __enter__(self) -> "PdfOutputSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._canvas is not None

    @property
    def target(self) -> Optional[Path]:
        return self._target

    @property
    def canvas(self) -> canvas.Canvas:
        """The live canvas. Raises RuntimeError when closed."""
        if self._canvas is None:
            raise RuntimeError("PDF output is not open")
        return self._canvas

    def open(self, target: Union[str, PathLike, None]) -> bool:
        """
        Open a PDF document at ``target``.

        Args:
            target: Output file path

        Returns:
            True if the document was opened, False if the target cannot
            be written (missing directory, no permission) or the canvas
            could not be created

        Raises:
            OutputTargetInvalidError: If target is None or empty
        """
        if target is None or not str(target).strip():
            raise OutputTargetInvalidError("PDF output target is empty")

        if self.is_open:
            logger.warning(f"Closing {self._target} before opening {target}")
            self.close()

        path = Path(target)
        try:
            # Canvas only touches the file system on save()
            with open(path, "ab"):
                pass
            self._canvas = canvas.Canvas(str(path), pagesize=A4)
        except OSError as e:
            logger.error(f"Failed to open PDF output {path}: {e}")
            self._canvas = None
            return False

        if self.title:
            self._canvas.setTitle(self.title)
        if self.author:
            self._canvas.setAuthor(self.author)

        self._target = path
        self._page_started = False
        self._page_width = A4[0]
        self.page_count = 0
        logger.debug(f"Opened PDF output {path}")
        return True

    def begin_page(self, width: float, height: float) -> None:
        """
        Start a new physical page of the given size.

        The previous page, if any, is finished first.

        Raises:
            RuntimeError: If the output is not open
        """
        c = self.canvas

        if self._page_started:
            self._finish_page()
            c.showPage()

        c.setPageSize((width, height))
        self._page_width = width
        self._page_started = True

    def close(self) -> None:
        """Save and close the document. Safe to call more than once."""
        if self._canvas is None:
            return

        c = self._canvas
        self._canvas = None
        self._page_started = False

        self._finish_page(c)
        self.page_count = c.getPageNumber()
        c.save()

        logger.info(f"Wrote {self.page_count} pages to {self._target}")

    def _finish_page(self, c: Optional[canvas.Canvas] = None) -> None:
        """Draw the footer on the page about to be emitted."""
        if not self.show_footer:
            return
        c = c or self.canvas
        _draw_footer(c, self.footer_text, self._page_width)


def _draw_footer(c: canvas.Canvas, footer_text: Optional[str], page_width_pt: float) -> None:
    """
    Draw footer text (left) and page number (right) in the bottom margin.

    Args:
        c: ReportLab canvas
        footer_text: Optional text drawn at the left edge
        page_width_pt: Page width in points
    """
    page_label = f"Page {c.getPageNumber()}"

    c.saveState()
    c.setFont(FOOTER_FONT_NAME, FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)

    if footer_text:
        c.drawString(FOOTER_OFFSET_PT, FOOTER_OFFSET_PT, footer_text)
    c.drawRightString(page_width_pt - FOOTER_OFFSET_PT, FOOTER_OFFSET_PT, page_label)

    c.restoreState()
