"""
Module: order_report

Purpose:
    Build an order summary PDF from order rows.
    Front page → table (header repeated on every page) → summary page.

Key Functions:
    - build_order_report(): Main entry point

Key Classes:
    - OrderReportConfig: Report settings
    - OrderReportResult: Generated report details
    - OrderReportError: Exception for report failures

Dependencies:
    - layout: ReportPaginator, PageGeometry, StaticLayoutOverrides
    - output: PdfOutputSink, TableRenderSink
    - PIL: Optional logo image

Used By:
    - scripts/generate_sample_order_report.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from PIL import Image

from .layout import (
    A4_PORTRAIT,
    MissingRenderSinkError,
    PageGeometry,
    PaginationError,
    ReportPaginator,
    StaticLayoutOverrides,
)
from .output import OutputTargetInvalidError, PdfOutputSink, TableRenderSink

logger = logging.getLogger(__name__)

DEFAULT_ORDER_HEADER_TITLES: Tuple[str, ...] = (
    "Product name",
    "Vendor name",
    "Discount",
    "Discounted price",
    "Quantity",
    "Amount",
)
AMOUNT_COLUMN = "Amount"


class OrderReportError(Exception):
    """Error while generating an order report."""
    pass


@dataclass(frozen=True)
class OrderReportConfig:
    """
    Configuration for one order report (immutable).

    Attributes:
        output_dir: Directory the PDF is written to (created if missing)
        file_name: PDF file name; ".pdf" is appended when missing
        header_titles: Table column titles, also the row mapping keys
        repeat_header: Redraw the table header on every page
        geometry: Page size and margins
        column_spacing: Gap between table columns
        include_front_page: Draw a front page before the table
        compact_front_page: Put the table on the front page
        include_summary_page: Draw a summary after the table
        compact_summary_page: Put the summary below the last row
        title: Front page title and PDF title metadata
        subtitle: Optional front page subtitle
        show_footer: Draw a "Page N" footer
        reuse_existing: Return an existing PDF instead of regenerating

    Example:
        >>> config = OrderReportConfig(
        ...     output_dir=Path("GeneratedPDF"),
        ...     file_name="order-1042",
        ... )
        >>> config.output_path
        PosixPath('GeneratedPDF/order-1042.pdf')
    """

    # Required
    output_dir: Path
    file_name: str

    # Table
    header_titles: Tuple[str, ...] = DEFAULT_ORDER_HEADER_TITLES
    repeat_header: bool = True

    # Layout
    geometry: PageGeometry = A4_PORTRAIT
    column_spacing: float = 5.0

    # Accessory pages
    include_front_page: bool = True
    compact_front_page: bool = False
    include_summary_page: bool = True
    compact_summary_page: bool = False

    # Presentation
    title: str = "Order summary"
    subtitle: Optional[str] = None
    show_footer: bool = True

    # Behaviour
    reuse_existing: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.file_name or not self.file_name.strip():
            raise ValueError("file_name must not be empty")
        if not self.header_titles:
            raise ValueError("header_titles must not be empty")
        if self.column_spacing < 0:
            raise ValueError(f"column_spacing must be non-negative: {self.column_spacing}")

    @property
    def output_path(self) -> Path:
        name = self.file_name.strip()
        if not name.lower().endswith(".pdf"):
            name = f"{name}.pdf"
        return Path(self.output_dir) / name


@dataclass(frozen=True)
class OrderReportResult:
    """
    Generated order report.

    Attributes:
        pdf_path: Path to the PDF
        page_count: Pages written (None when an existing file was reused)
        row_count: Order rows drawn
        reused: True if an existing PDF was returned unchanged
    """

    pdf_path: Path
    page_count: Optional[int]
    row_count: int
    reused: bool = False


def build_order_report(
    rows: Optional[Sequence[Optional[Mapping[str, str]]]],
    config: OrderReportConfig,
    *,
    logo: Optional[Image.Image] = None,
) -> OrderReportResult:
    """
    Build an order summary PDF.

    Pipeline:
    1. Check rows and prepare the output directory
    2. Open the PDF output
    3. Front page, table header, rows, summary page
    4. Close the PDF (always), delete it if generation failed

    Args:
        rows: Order rows, each a mapping of column title to text.
            None entries are skipped.
        config: Report configuration
        logo: Optional image for the front page

    Returns:
        OrderReportResult with the PDF path and page count

    Raises:
        OrderReportError: If rows are missing or any step fails

    Example:
        >>> rows = [{"Product name": "Widget", "Quantity": "2", "Amount": "9.90"}]
        >>> result = build_order_report(rows, config)
        >>> print(f"Generated {result.page_count} pages")
    """
    # Order rows are required content
    if rows is None:
        raise OrderReportError("No order rows to print")

    try:
        Path(config.output_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OrderReportError(f"Failed to create output directory {config.output_dir}: {e}") from e

    pdf_path = config.output_path
    if config.reuse_existing and pdf_path.exists():
        logger.info(f"Reusing existing order report {pdf_path}")
        return OrderReportResult(pdf_path=pdf_path, page_count=None, row_count=0, reused=True)

    logger.info(f"Generating order report {pdf_path} ({len(rows)} rows)")

    output = PdfOutputSink(title=config.title, show_footer=config.show_footer)
    row_count = 0
    try:
        with output:
            if not output.open(pdf_path):
                raise OrderReportError(f"Failed to open PDF output {pdf_path}")

            sink = TableRenderSink(
                output,
                title=config.title,
                subtitle=config.subtitle,
                summary_lines=summarise_rows(rows),
                logo=logo,
            )
            paginator = ReportPaginator(
                config.geometry,
                StaticLayoutOverrides(column_spacing=config.column_spacing),
                render_sink=sink,
                output_sink=output,
            )
            paginator.set_header_titles(config.header_titles)
            paginator.set_repeat_header_on_every_page(config.repeat_header)

            table_compact = False
            if config.include_front_page:
                paginator.draw_front_page(compact=config.compact_front_page)
                table_compact = config.compact_front_page

            paginator.begin_table_report(compact=table_compact)

            for row in rows:
                if row is None:
                    continue
                paginator.draw_row(row)
                row_count += 1

            if config.include_summary_page:
                paginator.draw_summary_page(compact=config.compact_summary_page)

    except OrderReportError:
        _discard_partial_output(pdf_path)
        raise
    except (MissingRenderSinkError, PaginationError, OutputTargetInvalidError, OSError) as e:
        logger.error(f"Order report generation failed: {e}")
        _discard_partial_output(pdf_path)
        raise OrderReportError(f"Failed to generate order report: {e}") from e

    logger.info(f"Order report complete: {output.page_count} pages, {row_count} rows")

    return OrderReportResult(
        pdf_path=pdf_path,
        page_count=output.page_count,
        row_count=row_count,
    )


def summarise_rows(rows: Sequence[Optional[Mapping[str, str]]]) -> List[str]:
    """
    Build summary page lines for a set of order rows.

    Includes the number of rows, and the total of the "Amount" column
    when every present amount parses as a number.

    Args:
        rows: Order rows

    Returns:
        Summary lines
    """
    present = [row for row in rows if row is not None]
    lines = [f"Order rows: {len(present)}"]

    amounts = [row.get(AMOUNT_COLUMN) for row in present if row.get(AMOUNT_COLUMN)]
    if not amounts:
        return lines

    try:
        total = sum(float(str(amount).replace(",", "")) for amount in amounts)
    except ValueError:
        logger.debug(f"Skipping order total: non-numeric {AMOUNT_COLUMN} values")
        return lines

    lines.append(f"Total amount: {total:,.2f}")
    return lines


def _discard_partial_output(pdf_path: Path) -> None:
    """Delete a partially written report."""
    try:
        pdf_path.unlink()
        logger.debug(f"Removed partial output {pdf_path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove partial output {pdf_path}: {e}")
