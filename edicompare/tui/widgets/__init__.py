"""TUI widgets for the EDI comparison viewer."""

from edicompare.tui.widgets.segment_detail_modal import SegmentDetailModal, element_rows
from edicompare.tui.widgets.segment_text import (
    display_separator,
    render_segment,
    row_cells,
    status_marker,
)
from edicompare.tui.widgets.summary_bar import SummaryBar, format_summary

__all__ = [
    # Segment rendering
    "render_segment",
    "row_cells",
    "status_marker",
    "display_separator",
    # Summary bar
    "SummaryBar",
    "format_summary",
    # Segment detail modal
    "SegmentDetailModal",
    "element_rows",
]
