"""
Module: output

Purpose:
    ReportLab output for the pagination engine.
    A PDF output target and a table render sink drawing at the
    paginator's cursor.

Key Classes:
    - PdfOutputSink: Opens/closes the PDF and begins pages
    - TableRenderSink: Draws front page, header, rows, summary

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - order_report: Order summary driver
"""

from .pdf_output import OutputTargetInvalidError, PdfOutputSink
from .renderer import TableRenderSink

__all__ = [
    "OutputTargetInvalidError",
    "PdfOutputSink",
    "TableRenderSink",
]
