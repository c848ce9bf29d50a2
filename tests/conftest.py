import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add src to sys.path so we can import report_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from report_toolkit.layout import PageGeometry, ReportPaginator  # noqa: E402


RENDER_SINK_METHODS = [
    "draw_front_page",
    "draw_summary_page",
    "draw_table_header",
    "draw_table_row",
]


# Common test fixtures
@pytest.fixture
def geometry():
    """Default A4 geometry at 72 units/inch."""
    return PageGeometry()


@pytest.fixture
def render_sink():
    """Mock render sink implementing every callback."""
    return MagicMock(spec=RENDER_SINK_METHODS)


@pytest.fixture
def output_sink():
    """Mock output sink."""
    return MagicMock(spec=["open", "begin_page", "close", "is_open"])


@pytest.fixture
def paginator(geometry, render_sink, output_sink):
    """Paginator wired to mock sinks."""
    return ReportPaginator(geometry, render_sink=render_sink, output_sink=output_sink)


@pytest.fixture
def order_rows():
    """Factory for order rows keyed by the default order columns."""
    def _create(count: int):
        return [
            {
                "Product name": f"Product {i}",
                "Vendor name": "ACME",
                "Discount": "10%",
                "Discounted price": "9.00",
                "Quantity": "2",
                "Amount": "18.00",
            }
            for i in range(count)
        ]
    return _create
