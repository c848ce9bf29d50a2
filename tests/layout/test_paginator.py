"""
Unit tests for the pagination engine.

Covers the page-break threshold, header repetition, compact front and
summary pages, and the no-render-sink guard.
"""

import pytest
from unittest.mock import MagicMock

from report_toolkit.layout import (
    MissingRenderSinkError,
    PageGeometry,
    PaginationError,
    ReportPaginator,
    StaticLayoutOverrides,
)

ROW = {"Name": "Widget", "Qty": "2"}


def _record_positions(paginator, sink_method):
    """Make a mock callback record the cursor at call time."""
    positions = []
    sink_method.side_effect = lambda *args: positions.append(paginator.cursor)
    return positions


class TestMissingRenderSink:
    """Every drawing operation needs a render sink."""

    @pytest.mark.parametrize(
        "operation",
        [
            lambda p: p.draw_front_page(compact=False),
            lambda p: p.draw_front_page(compact=True),
            lambda p: p.draw_summary_page(compact=False),
            lambda p: p.draw_summary_page(compact=True),
            lambda p: p.begin_table_report(compact=False),
            lambda p: p.begin_table_report(compact=True),
            lambda p: p.draw_row(ROW),
            lambda p: p.draw_row(None),
        ],
        ids=[
            "front",
            "front-compact",
            "summary",
            "summary-compact",
            "table",
            "table-compact",
            "row",
            "row-none",
        ],
    )
    def test_when_no_render_sink_then_raises_and_cursor_unchanged(self, geometry, output_sink, operation):
        # Arrange
        paginator = ReportPaginator(geometry, output_sink=output_sink)
        paginator.set_header_titles(["Name", "Qty"])
        before = paginator.cursor

        # Act & Assert
        with pytest.raises(MissingRenderSinkError):
            operation(paginator)

        assert paginator.cursor == before
        output_sink.begin_page.assert_not_called()

    def test_add_page_when_no_render_sink_then_allowed(self, geometry, output_sink):
        """add_page() has no render sink interaction."""
        paginator = ReportPaginator(geometry, output_sink=output_sink)

        paginator.add_page()

        assert paginator.page_index == 1
        output_sink.begin_page.assert_called_once_with(595, 842)


class TestPageBreak:
    """Row page-break threshold (one row lookahead)."""

    def test_draw_row_when_row_overflows_bottom_margin_then_breaks_page(self, paginator, render_sink, output_sink):
        """
        Position 800 + cell 50 + spacing 20 = 870 > 842 - 36 = 806.
        The row must be drawn at the top margin of the next page.
        """
        # Arrange: a compact 744pt header leaves the cursor at 36 + 744 + 20 = 800
        paginator.layout_overrides = StaticLayoutOverrides(header_height=744)
        paginator.set_header_titles(["Name", "Qty"])
        paginator.begin_table_report(compact=True)
        assert paginator.cursor.position == 800
        positions = _record_positions(paginator, render_sink.draw_table_row)

        # Act
        paginator.draw_row(ROW)

        # Assert
        assert paginator.page_index == 1
        assert positions[0].position == 36
        assert positions[0].page_index == 1
        assert paginator.cursor.position == 36 + 70
        output_sink.begin_page.assert_called_once_with(595, 842)

    def test_draw_row_when_row_fits_exactly_then_no_break(self, paginator, render_sink, output_sink):
        """Position 736 + 70 = 806 is not past the bottom margin."""
        # Arrange
        paginator.layout_overrides = StaticLayoutOverrides(header_height=680)
        paginator.set_header_titles(["Name"])
        paginator.begin_table_report(compact=True)
        assert paginator.cursor.position == 736

        # Act
        paginator.draw_row(ROW)

        # Assert
        assert paginator.page_index == 0
        assert paginator.cursor.position == 806
        output_sink.begin_page.assert_not_called()

    def test_draw_row_when_break_without_repeat_header_then_no_header(self, paginator, render_sink):
        # Arrange
        paginator.set_header_titles(["Name", "Qty"])
        paginator.begin_table_report()

        # Act: 11th row breaks the first page
        for _ in range(11):
            paginator.draw_row(ROW)

        # Assert
        assert paginator.page_index == 1
        assert render_sink.draw_table_header.call_count == 1
        assert paginator.cursor.position == 36 + 70

    def test_draw_row_when_overrides_change_then_threshold_uses_current_values(self, paginator, render_sink):
        """Layout values are read fresh for every row."""
        # Arrange
        overrides = MagicMock(spec=["table_cell_height"])
        overrides.table_cell_height.return_value = 50
        paginator.layout_overrides = overrides
        paginator.set_header_titles(["Name"])
        paginator.begin_table_report()

        # Act
        paginator.draw_row(ROW)
        overrides.table_cell_height.return_value = 10
        paginator.draw_row(ROW)

        # Assert
        assert paginator.cursor.position == 76 + 70 + 30
        row_heights = [c.args[1] for c in render_sink.draw_table_row.call_args_list]
        assert row_heights == [50.0, 10.0]


class TestRowStart:
    """Row start always returns to the left margin."""

    def test_draw_row_when_drawn_then_row_start_is_left_margin(self, render_sink):
        # Arrange
        geometry = PageGeometry(margin_left=42)
        paginator = ReportPaginator(geometry, render_sink=render_sink)
        paginator.set_header_titles(["Name"])
        paginator.set_repeat_header_on_every_page(True)

        # Act & Assert
        paginator.begin_table_report()
        assert paginator.cursor.row_start == 42

        for _ in range(25):
            paginator.draw_row(ROW)
            assert paginator.cursor.row_start == 42


class TestRepeatHeader:
    """Header repetition across page breaks."""

    @pytest.mark.parametrize("rows,breaks", [(10, 0), (11, 1), (25, 2), (30, 2), (31, 3)])
    def test_when_repeat_enabled_then_header_once_per_page(self, paginator, render_sink, rows, breaks):
        # Arrange
        paginator.set_header_titles(["Name", "Qty"])
        paginator.set_repeat_header_on_every_page(True)

        # Act
        paginator.begin_table_report()
        for _ in range(rows):
            paginator.draw_row(ROW)

        # Assert
        assert paginator.page_index == breaks
        assert render_sink.draw_table_header.call_count == 1 + breaks

    @pytest.mark.parametrize("rows", [1, 11, 30, 60])
    def test_when_repeat_disabled_then_header_once(self, paginator, render_sink, rows):
        paginator.set_header_titles(["Name", "Qty"])

        paginator.begin_table_report()
        for _ in range(rows):
            paginator.draw_row(ROW)

        assert render_sink.draw_table_header.call_count == 1

    def test_when_header_repeated_then_row_drawn_below_header(self, paginator, render_sink):
        # Arrange
        paginator.set_header_titles(["Name", "Qty"])
        paginator.set_repeat_header_on_every_page(True)
        paginator.begin_table_report()
        for _ in range(10):
            paginator.draw_row(ROW)
        positions = _record_positions(paginator, render_sink.draw_table_row)

        # Act
        paginator.draw_row(ROW)

        # Assert
        assert positions[0].position == 36 + 20 + 20
        assert positions[0].page_index == 1


class TestFrontPage:
    """Compact vs. non-compact front page."""

    def test_draw_front_page_when_not_compact_then_page_index_advances(self, paginator, render_sink, output_sink, geometry):
        # Act
        paginator.draw_front_page(compact=False)

        # Assert
        assert paginator.page_index == 1
        assert paginator.cursor.position == 36
        render_sink.draw_front_page.assert_called_once_with(paginator, geometry)
        output_sink.begin_page.assert_called_once_with(595, 842)

    def test_draw_front_page_when_compact_then_page_index_unchanged(self, paginator, render_sink, output_sink):
        paginator.draw_front_page(compact=True)

        assert paginator.page_index == 0
        render_sink.draw_front_page.assert_called_once()
        output_sink.begin_page.assert_called_once()

    def test_draw_front_page_when_cursor_moved_then_drawn_at_page_origin(self, paginator, render_sink):
        # Arrange
        paginator.set_header_titles(["Name"])
        paginator.begin_table_report()
        paginator.draw_row(ROW)
        positions = _record_positions(paginator, render_sink.draw_front_page)

        # Act
        paginator.draw_front_page(compact=True)

        # Assert
        assert positions[0].position == 36

    def test_draw_front_page_when_sink_reserves_space_then_compact_table_starts_below(self, paginator, render_sink):
        # Arrange
        render_sink.draw_front_page.side_effect = lambda p, g: p.reserve_space(100)
        paginator.set_header_titles(["Name"])
        header_positions = _record_positions(paginator, render_sink.draw_table_header)

        # Act
        paginator.draw_front_page(compact=True)
        paginator.begin_table_report(compact=True)

        # Assert
        assert header_positions[0].position == 136
        assert paginator.page_index == 0

    def test_draw_front_page_when_sink_has_no_front_page_hook_then_skipped(self, geometry, output_sink):
        sink = MagicMock(spec=["draw_table_header", "draw_table_row"])
        paginator = ReportPaginator(geometry, render_sink=sink, output_sink=output_sink)

        paginator.draw_front_page()

        assert paginator.page_index == 1


class TestSummaryPage:
    """Compact vs. non-compact summary page."""

    def test_draw_summary_page_when_not_compact_then_new_page(self, paginator, render_sink, output_sink):
        # Arrange
        paginator.set_header_titles(["Name"])
        paginator.begin_table_report(compact=True)
        paginator.draw_row(ROW)
        positions = _record_positions(paginator, render_sink.draw_summary_page)

        # Act
        paginator.draw_summary_page(compact=False)

        # Assert
        assert positions[0].position == 36
        assert positions[0].page_index == 0
        assert paginator.page_index == 1
        assert paginator.cursor.position == 36
        output_sink.begin_page.assert_called_once()

    def test_draw_summary_page_when_compact_then_reserves_row_on_current_page(self, paginator, render_sink, output_sink):
        # Arrange
        paginator.set_header_titles(["Name"])
        paginator.begin_table_report(compact=True)
        start = paginator.cursor.position
        positions = _record_positions(paginator, render_sink.draw_summary_page)

        # Act
        paginator.draw_summary_page(compact=True)

        # Assert
        assert positions[0].position == start + 70
        assert paginator.page_index == 0
        output_sink.begin_page.assert_not_called()

    def test_draw_summary_page_when_sink_has_no_summary_hook_then_skipped(self, geometry):
        sink = MagicMock(spec=["draw_table_header", "draw_table_row"])
        paginator = ReportPaginator(geometry, render_sink=sink)

        paginator.draw_summary_page(compact=True)

        assert paginator.cursor.position == 36 + 70


class TestAbsentInputs:
    """Absent row data and header titles are not errors."""

    def test_draw_row_when_none_then_no_op(self, paginator, render_sink, output_sink):
        # Arrange
        paginator.set_header_titles(["Name"])
        before = paginator.cursor

        # Act
        paginator.draw_row(None)

        # Assert
        assert paginator.cursor == before
        render_sink.draw_table_row.assert_not_called()
        render_sink.draw_table_header.assert_not_called()
        output_sink.begin_page.assert_not_called()

    def test_draw_row_when_no_titles_then_skips_callback_but_advances(self, paginator, render_sink):
        """Pagination math runs even though nothing is drawn."""
        before = paginator.cursor.position

        paginator.draw_row(ROW)

        render_sink.draw_table_row.assert_not_called()
        assert paginator.cursor.position == before + 50 + 20

    def test_begin_table_report_when_no_titles_then_skips_callback_but_advances(self, paginator, render_sink):
        paginator.begin_table_report(compact=True)

        render_sink.draw_table_header.assert_not_called()
        assert paginator.cursor.position == 36 + 20 + 20


class TestFailureNormalization:
    """Sink failures other than a missing sink become PaginationError."""

    def test_begin_table_report_when_header_fails_then_pagination_error(self, paginator, render_sink):
        # Arrange
        paginator.set_header_titles(["Name"])
        render_sink.draw_table_header.side_effect = RuntimeError("font missing")

        # Act & Assert
        with pytest.raises(PaginationError) as exc_info:
            paginator.begin_table_report()

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_draw_row_when_repeated_header_fails_then_pagination_error(self, paginator, render_sink):
        # Arrange
        paginator.set_header_titles(["Name"])
        paginator.set_repeat_header_on_every_page(True)
        paginator.begin_table_report()
        for _ in range(10):
            paginator.draw_row(ROW)
        render_sink.draw_table_header.side_effect = KeyError("Name")

        # Act & Assert
        with pytest.raises(PaginationError):
            paginator.draw_row(ROW)

    def test_begin_table_report_when_sink_raises_missing_sink_then_propagates(self, paginator, render_sink):
        paginator.set_header_titles(["Name"])
        render_sink.draw_table_header.side_effect = MissingRenderSinkError("nested")

        with pytest.raises(MissingRenderSinkError):
            paginator.begin_table_report()

    def test_draw_row_when_sink_detached_during_break_then_missing_sink(self, paginator, output_sink):
        """Header re-emission checks the sink independently."""
        # Arrange
        paginator.set_header_titles(["Name"])
        paginator.set_repeat_header_on_every_page(True)
        paginator.begin_table_report()
        for _ in range(10):
            paginator.draw_row(ROW)

        def detach(*args):
            paginator.render_sink = None

        output_sink.begin_page.side_effect = detach

        # Act & Assert
        with pytest.raises(MissingRenderSinkError):
            paginator.draw_row(ROW)

    def test_draw_row_when_row_callback_missing_then_pagination_error(self, geometry):
        sink = MagicMock(spec=["draw_table_header"])
        paginator = ReportPaginator(geometry, render_sink=sink)
        paginator.set_header_titles(["Name"])

        with pytest.raises(PaginationError, match="draw_table_row"):
            paginator.draw_row(ROW)

    def test_add_page_when_output_fails_then_pagination_error(self, paginator, output_sink):
        output_sink.begin_page.side_effect = RuntimeError("PDF output is not open")

        with pytest.raises(PaginationError):
            paginator.add_page()


class TestConfigure:
    """configure() resets the cursor for a new geometry."""

    def test_configure_when_called_then_cursor_reset_and_titles_kept(self, paginator):
        # Arrange
        paginator.set_header_titles(["Name"])
        paginator.add_page()
        geometry = PageGeometry(width=612, height=792, margin_top=50, margin_left=40)

        # Act
        paginator.configure(geometry, StaticLayoutOverrides(cell_height=30))

        # Assert
        assert paginator.geometry is geometry
        assert paginator.page_index == 0
        assert paginator.cursor.position == 50
        assert paginator.cursor.row_start == 40
        assert paginator.header_titles == ("Name",)
        assert paginator.table_cell_height() == 30
        assert paginator.table_header_height() == 20

    def test_init_when_no_geometry_then_a4(self):
        paginator = ReportPaginator()
        assert paginator.geometry.size == (595, 842)
        assert paginator.render_sink is None

    def test_reserve_space_when_negative_then_raises_error(self, paginator):
        with pytest.raises(ValueError):
            paginator.reserve_space(-1)


class TestEndToEnd:
    """Full table on default A4 geometry."""

    def test_when_thirty_rows_with_repeat_header_then_three_pages(self, paginator, render_sink, output_sink, geometry):
        """
        Printable height 770, header 20 + 20 leaves 730: 10 rows of 70 per page.
        30 rows -> 3 pages, header 3 times, rows 30 times.
        """
        # Arrange
        paginator.set_header_titles(["Name", "Qty"])
        paginator.set_repeat_header_on_every_page(True)

        # Act
        paginator.begin_table_report()
        for i in range(30):
            paginator.draw_row({"Name": f"Item {i}", "Qty": str(i)})

        # Assert
        assert paginator.page_index + 1 == 3
        assert render_sink.draw_table_header.call_count == 3
        assert render_sink.draw_table_row.call_count == 30
        assert output_sink.begin_page.call_count == 3

        header_call = render_sink.draw_table_header.call_args_list[0]
        assert header_call.args == (paginator, 20.0, ("Name", "Qty"), geometry, 20.0)

        row_call = render_sink.draw_table_row.call_args_list[-1]
        assert row_call.args == (
            paginator,
            50.0,
            {"Name": "Item 29", "Qty": "29"},
            ("Name", "Qty"),
            geometry,
            20.0,
        )
