"""
Comparison Screen for side-by-side segment comparison.

Displays the aligned rows of two interchange documents in one table, with
the left segment, a status marker and the right segment on each line.
Filtering, pinning and diffs-only mode re-derive the displayed rows from
the immutable comparison result without re-running the alignment.
"""

from __future__ import annotations

import os

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header

from edicompare.diff import (
    DEFAULT_CONTEXT_SIZE,
    PresentOptions,
    StructuralResult,
    present,
    segment_ids,
    summarize,
)
from edicompare.diff.models import Collapsed
from edicompare.diff.presentation import row_ids
from edicompare.segments import ParsedDocument
from edicompare.tui.mixins import ChangeNavigationMixin, ExportMixin
from edicompare.tui.widgets import (
    SegmentDetailModal,
    SummaryBar,
    display_separator,
    row_cells,
)


class ComparisonScreen(ChangeNavigationMixin, ExportMixin, Screen):
    """Side-by-side view of one structural comparison."""

    CSS = """
    ComparisonScreen {
        layout: vertical;
    }

    #row-table {
        height: 1fr;
    }
    """

    BINDINGS = ChangeNavigationMixin.NAVIGATION_BINDINGS + [
        Binding("d", "toggle_diffs_only", "Diffs Only"),
        Binding("f", "cycle_type_filter", "Filter Type"),
        Binding("F", "clear_type_filter", "Clear Filter", show=False),
        Binding("p", "toggle_pin", "Pin"),
        Binding("x", "export_report", "Export"),
        Binding("r", "rerun_comparison", "Re-run"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        left: ParsedDocument,
        right: ParsedDocument,
        result: StructuralResult,
        pinned_ids: frozenset[str] = frozenset(),
        context_size: int = DEFAULT_CONTEXT_SIZE,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the ComparisonScreen.

        Args:
            left: The left document.
            right: The right document.
            result: The alignment of the two documents.
            pinned_ids: Segment ids always kept visible in diffs-only mode.
            context_size: Rows of context around each change.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._left = left
        self._right = right
        self._result = result
        self._options = PresentOptions(
            pinned_ids=frozenset(pinned_ids), context_size=context_size
        )
        self.displayed_rows = []

    def compose(self) -> ComposeResult:
        """Compose the summary bar above the row table."""
        yield Header()
        yield SummaryBar(id="summary-bar")
        yield DataTable(id="row-table", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        """Set up columns and show the rows."""
        table = self._get_row_table()
        table.add_column("L#", key="left_line")
        table.add_column("Left", key="left")
        table.add_column(" ", key="marker")
        table.add_column("R#", key="right_line")
        table.add_column("Right", key="right")
        self.title = (
            f"{os.path.basename(self._left.source)} ↔ "
            f"{os.path.basename(self._right.source)}"
        )
        self._refresh_rows()
        table.focus()

    def _get_row_table(self) -> DataTable:
        return self.query_one("#row-table", DataTable)

    @property
    def result(self) -> StructuralResult:
        """The comparison currently shown."""
        return self._result

    @property
    def options(self) -> PresentOptions:
        """The current view state."""
        return self._options

    def set_result(
        self, left: ParsedDocument, right: ParsedDocument, result: StructuralResult
    ) -> None:
        """Replace the comparison shown, keeping the view state."""
        self._left = left
        self._right = right
        self._result = result
        if self._options.type_filter not in segment_ids(result):
            self._set_options(type_filter=None)
        else:
            self._refresh_rows()

    def _set_options(self, **changes) -> None:
        values = {
            "type_filter": self._options.type_filter,
            "diffs_only": self._options.diffs_only,
            "pinned_ids": self._options.pinned_ids,
            "context_size": self._options.context_size,
        }
        values.update(changes)
        self._options = PresentOptions(**values)
        self._refresh_rows()

    def _refresh_rows(self) -> None:
        """Re-derive the displayed rows and redraw the table."""
        table = self._get_row_table()
        cursor = table.cursor_row
        separator = display_separator(self._left)

        self.displayed_rows = present(self._result, self._options)
        table.clear()
        for row in self.displayed_rows:
            table.add_row(*row_cells(row, separator))

        if table.row_count:
            table.move_cursor(row=min(max(cursor, 0), table.row_count - 1))

        self.query_one("#summary-bar", SummaryBar).show_summary(
            summarize(self._result),
            self._options,
            len(self.displayed_rows),
            len(self._result),
        )

    def _current_row(self):
        table = self._get_row_table()
        if not self.displayed_rows or table.cursor_row >= len(self.displayed_rows):
            return None
        return self.displayed_rows[table.cursor_row]

    def action_toggle_diffs_only(self) -> None:
        """Toggle collapsing of unchanged rows."""
        self._set_options(diffs_only=not self._options.diffs_only)
        status = "on" if self._options.diffs_only else "off"
        self.notify(f"Diffs only {status}")

    def action_cycle_type_filter(self) -> None:
        """Step the type filter through every segment id, then back to all."""
        ids = segment_ids(self._result)
        if not ids:
            return
        current = self._options.type_filter
        if current is None:
            type_filter = ids[0]
        else:
            position = ids.index(current) + 1 if current in ids else len(ids)
            type_filter = ids[position] if position < len(ids) else None
        self._set_options(type_filter=type_filter)
        self.notify(f"Showing {type_filter} segments" if type_filter else "Showing all segments")

    def action_clear_type_filter(self) -> None:
        """Show rows of every segment id."""
        if self._options.type_filter is not None:
            self._set_options(type_filter=None)
            self.notify("Showing all segments")

    def action_toggle_pin(self) -> None:
        """Pin or unpin the segment id of the highlighted row."""
        row = self._current_row()
        if row is None or isinstance(row, Collapsed):
            self.notify("Nothing to pin on this row", severity="warning")
            return
        segment_id = row_ids(row)[0]
        pinned = set(self._options.pinned_ids)
        if segment_id in pinned:
            pinned.discard(segment_id)
            self.notify(f"Unpinned {segment_id}")
        else:
            pinned.add(segment_id)
            self.notify(f"Pinned {segment_id}")
        self._set_options(pinned_ids=frozenset(pinned))

    def action_export_report(self) -> None:
        """Write the text report of this comparison to the output directory."""
        from edicompare.tui.screens import ExportingScreen

        exporting_screen = ExportingScreen(title="Exporting Report...")
        self.app.push_screen(exporting_screen)
        self._run_report_export(
            exporting_screen,
            self._result,
            os.path.basename(self._left.source),
            os.path.basename(self._right.source),
            display_separator(self._left),
        )

    def action_rerun_comparison(self) -> None:
        """Reload both files and align them again."""
        self.app.run_comparison(reload=True)

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Show the element detail of the selected row."""
        if event.cursor_row >= len(self.displayed_rows):
            return
        row = self.displayed_rows[event.cursor_row]
        if isinstance(row, Collapsed):
            self._set_options(diffs_only=False)
            return
        self.app.push_screen(SegmentDetailModal(row))
