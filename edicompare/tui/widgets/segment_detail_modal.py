"""Modal screen listing a row's elements side by side."""

from __future__ import annotations

from itertools import zip_longest

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import DataTable, Label

from edicompare.diff.models import AlignedRow, LeftOnly, Match, Modified, RightOnly
from edicompare.tui.widgets.segment_text import HIGHLIGHT_STYLE


def element_rows(row: AlignedRow) -> list[tuple[int, str, str, bool]]:
    """Pair up a row's elements by position.

    Returns:
        (position, left value, right value, differs) for every position
        present on either side. The missing side of a one-sided row is "".
    """
    left = row.left.elements if isinstance(row, (Match, Modified, LeftOnly)) else ()
    right = row.right.elements if isinstance(row, (Match, Modified, RightOnly)) else ()
    changed = row.diff_positions if isinstance(row, Modified) else frozenset()
    one_sided = isinstance(row, (LeftOnly, RightOnly))
    return [
        (position, lval, rval, one_sided or position in changed)
        for position, (lval, rval) in enumerate(zip_longest(left, right, fillvalue=""))
    ]


class SegmentDetailModal(ModalScreen[None]):
    """A modal screen that shows every element of an aligned row."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close"),
        Binding("q", "quit", "Quit App"),
    ]

    CSS = """
    SegmentDetailModal {
        align: center middle;
    }

    SegmentDetailModal > Vertical {
        width: 80%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    SegmentDetailModal .modal-header {
        dock: top;
        height: auto;
        padding: 1 2;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    SegmentDetailModal DataTable {
        height: 1fr;
    }

    SegmentDetailModal .close-hint {
        dock: bottom;
        height: auto;
        padding: 1 2;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        row: AlignedRow,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the segment detail modal.

        Args:
            row: The aligned row to inspect (not a Collapsed row).
            name: Optional name for the widget.
            id: Optional ID for the widget.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.row = row

    def compose(self) -> ComposeResult:
        """Compose the modal content."""
        status = self.row.status.replace("_", " ")
        with Vertical():
            yield Label(f"{self.row.segment_id} ({status})", classes="modal-header")
            yield DataTable(id="element-table", cursor_type="row", zebra_stripes=True)
            yield Label("Press [ESC] or [ENTER] to close", classes="close-hint")

    def on_mount(self) -> None:
        """Fill the element table."""
        table = self.query_one("#element-table", DataTable)
        table.add_columns("#", "Left", "Right")
        for position, lval, rval, differs in element_rows(self.row):
            style = HIGHLIGHT_STYLE if differs else ""
            table.add_row(str(position), Text(lval, style=style), Text(rval, style=style))
        table.focus()

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
