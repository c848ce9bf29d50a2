"""
Module: output.renderer

Purpose:
    Draw report content onto a ReportLab canvas at the paginator's cursor.
    Implements the render sink callbacks: front page, table header,
    table rows and summary page.

Key Classes:
    - TableRenderSink: RenderSink + PageSink implementation

Dependencies:
    - reportlab: Canvas drawing
    - PIL: Optional front page logo
    - layout: Cursor snapshots and page geometry

Used By:
    - order_report: Order summary driver
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import List, Mapping, Optional, Sequence

from PIL import Image
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth

from report_toolkit.layout.config import PageGeometry
from report_toolkit.layout.paginator import ReportPaginator

from .pdf_output import PdfOutputSink

logger = logging.getLogger(__name__)

# Fonts
FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
TITLE_FONT_SIZE = 18
SUBTITLE_FONT_SIZE = 11
HEADER_FONT_SIZE = 9
CELL_FONT_SIZE = 9
SUMMARY_FONT_SIZE = 10
SUMMARY_LINE_HEIGHT = 16

# Colours
HEADER_BACKGROUND = colors.HexColor("#4a5568")
HEADER_TEXT = colors.white
CELL_TEXT = colors.HexColor("#1a1a1a")
MUTED_TEXT = colors.HexColor("#666666")
RULE_COLOUR = colors.HexColor("#cccccc")

ELLIPSIS = "..."
LOGO_MAX_HEIGHT_PT = 60


class TableRenderSink:
    """
    Renders a table report onto a PdfOutputSink canvas.

    Every callback receives the paginator and reads its cursor, so
    content lands wherever the paginator has decided it goes. Cell
    values are looked up in each row mapping by column title.

    Attributes:
        output: Open PdfOutputSink providing the canvas
        title: Front page title
        subtitle: Optional front page subtitle
        summary_lines: Lines drawn by draw_summary_page()
        logo: Optional PIL image drawn on the front page
    """

    def __init__(
        self,
        output: PdfOutputSink,
        *,
        title: str = "",
        subtitle: Optional[str] = None,
        summary_lines: Sequence[str] = (),
        logo: Optional[Image.Image] = None,
    ):
        self.output = output
        self.title = title
        self.subtitle = subtitle
        self.summary_lines = list(summary_lines)
        self.logo = logo

    # ------------------------------------------------------------------
    # Accessory pages
    # ------------------------------------------------------------------

    def draw_front_page(self, paginator: ReportPaginator, geometry: PageGeometry) -> None:
        """Title block: optional logo, title, subtitle, generation date."""
        c = self.output.canvas
        start = paginator.cursor.position
        top = start

        if self.logo is not None:
            width_pt, height_pt = _fit_logo(self.logo, geometry.available_width)
            c.drawImage(
                _pil_to_reader(self.logo),
                geometry.margin_left,
                _transform_y(geometry.height, top, height_pt),
                width=width_pt,
                height=height_pt,
                preserveAspectRatio=True,
            )
            top += height_pt + SUBTITLE_FONT_SIZE

        c.saveState()
        c.setFillColor(CELL_TEXT)
        c.setFont(FONT_BOLD, TITLE_FONT_SIZE)
        c.drawString(
            geometry.margin_left,
            _transform_y(geometry.height, top, TITLE_FONT_SIZE),
            self.title,
        )
        top += TITLE_FONT_SIZE * 1.5

        c.setFillColor(MUTED_TEXT)
        if self.subtitle:
            c.setFont(FONT_REGULAR, SUBTITLE_FONT_SIZE)
            c.drawString(
                geometry.margin_left,
                _transform_y(geometry.height, top, SUBTITLE_FONT_SIZE),
                self.subtitle,
            )
            top += SUBTITLE_FONT_SIZE * 1.5

        c.setFont(FONT_REGULAR, SUBTITLE_FONT_SIZE)
        c.drawString(
            geometry.margin_left,
            _transform_y(geometry.height, top, SUBTITLE_FONT_SIZE),
            f"Generated {datetime.now():%Y-%m-%d %H:%M}",
        )
        top += SUBTITLE_FONT_SIZE * 1.5
        c.restoreState()

        # Claim the title block so a compact table starts below it
        paginator.reserve_space(top - start)

    def draw_summary_page(self, paginator: ReportPaginator, geometry: PageGeometry) -> None:
        """
        Summary lines, one per line, starting at the cursor.

        A compact summary that would run past the bottom margin moves to
        a new page via paginator.add_page().
        """
        c = self.output.canvas
        top = paginator.cursor.position

        needed = len(self.summary_lines) * SUMMARY_LINE_HEIGHT
        if top + needed > geometry.content_bottom:
            logger.debug(f"Summary needs {needed}pt at {top}, moving to a new page")
            paginator.add_page()
            top = paginator.cursor.position

        c.saveState()
        c.setFillColor(CELL_TEXT)
        c.setFont(FONT_REGULAR, SUMMARY_FONT_SIZE)
        for line in self.summary_lines:
            c.drawString(
                geometry.margin_left,
                _transform_y(geometry.height, top, SUMMARY_FONT_SIZE),
                line,
            )
            top += SUMMARY_LINE_HEIGHT
        c.restoreState()

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------

    def draw_table_header(
        self,
        paginator: ReportPaginator,
        header_height: float,
        titles: Sequence[str],
        geometry: PageGeometry,
        column_spacing: float,
    ) -> None:
        """Filled band with one bold title per column."""
        c = self.output.canvas
        cursor = paginator.cursor
        y_pt = _transform_y(geometry.height, cursor.position, header_height)

        c.saveState()
        c.setFillColor(HEADER_BACKGROUND)
        c.rect(cursor.row_start, y_pt, geometry.available_width, header_height, stroke=0, fill=1)

        c.setFillColor(HEADER_TEXT)
        c.setFont(FONT_BOLD, HEADER_FONT_SIZE)
        text_y = _centre_baseline(y_pt, header_height, HEADER_FONT_SIZE)
        for x_pt, width_pt, title in _columns(cursor.row_start, geometry, column_spacing, titles):
            c.drawString(x_pt, text_y, _fit_text(title, width_pt, FONT_BOLD, HEADER_FONT_SIZE))
        c.restoreState()

    def draw_table_row(
        self,
        paginator: ReportPaginator,
        row_height: float,
        row_data: Mapping[str, str],
        titles: Sequence[str],
        geometry: PageGeometry,
        column_spacing: float,
    ) -> None:
        """One cell per title, with a thin rule under the row."""
        c = self.output.canvas
        cursor = paginator.cursor
        y_pt = _transform_y(geometry.height, cursor.position, row_height)

        c.saveState()
        c.setFillColor(CELL_TEXT)
        c.setFont(FONT_REGULAR, CELL_FONT_SIZE)
        text_y = _centre_baseline(y_pt, row_height, CELL_FONT_SIZE)
        for x_pt, width_pt, title in _columns(cursor.row_start, geometry, column_spacing, titles):
            value = row_data.get(title)
            text = "" if value is None else str(value)
            c.drawString(x_pt, text_y, _fit_text(text, width_pt, FONT_REGULAR, CELL_FONT_SIZE))

        c.setStrokeColor(RULE_COLOUR)
        c.setLineWidth(0.5)
        c.line(cursor.row_start, y_pt, cursor.row_start + geometry.available_width, y_pt)
        c.restoreState()


def _columns(
    row_start: float,
    geometry: PageGeometry,
    column_spacing: float,
    titles: Sequence[str],
) -> List[tuple]:
    """
    Split the printable width into equal columns.

    Args:
        row_start: Left edge of the row
        geometry: Page geometry
        column_spacing: Gap between adjacent columns
        titles: Column titles (one column each)

    Returns:
        List of (x_pt, width_pt, title) tuples
    """
    count = len(titles)
    if count == 0:
        return []

    usable = geometry.available_width - column_spacing * (count - 1)
    width_pt = max(usable / count, 0.0)
    if width_pt == 0.0:
        logger.warning(
            f"Column spacing {column_spacing} leaves no room for {count} columns"
        )

    return [
        (row_start + i * (width_pt + column_spacing), width_pt, title)
        for i, title in enumerate(titles)
    ]


def _fit_text(text: str, width_pt: float, font_name: str, font_size: float) -> str:
    """Truncate text with an ellipsis so it fits in width_pt."""
    if stringWidth(text, font_name, font_size) <= width_pt:
        return text

    trimmed = text
    while trimmed and stringWidth(trimmed + ELLIPSIS, font_name, font_size) > width_pt:
        trimmed = trimmed[:-1]
    return trimmed + ELLIPSIS if trimmed else ""


def _fit_logo(img: Image.Image, max_width_pt: float) -> tuple:
    """Scale a logo to LOGO_MAX_HEIGHT_PT, capped at max_width_pt."""
    width, height = img.size
    scale = LOGO_MAX_HEIGHT_PT / height
    if width * scale > max_width_pt:
        scale = max_width_pt / width
    return width * scale, height * scale


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _centre_baseline(y_pt: float, box_height: float, font_size: float) -> float:
    """Baseline that vertically centres a line of text in a box."""
    return y_pt + (box_height / 2) - (font_size / 3)


def _transform_y(page_height_pt: float, y_top: float, height: float) -> float:
    """
    Convert a top-down cursor position to ReportLab's bottom-up Y.

    Args:
        page_height_pt: Page height in points
        y_top: Top edge, measured from the page top
        height: Height of the element

    Returns:
        Y of the element's bottom edge, measured from the page bottom
    """
    return page_height_pt - y_top - height
