"""
Change Navigation Mixin for vim-style movement over comparison rows.

Provides j/k/g/G cursor movement on the focused DataTable plus n/N jumps
to the next/previous changed row. Jumping is a pure index lookup over the
rows currently displayed.
"""

from __future__ import annotations

from typing import Sequence

from textual.binding import Binding
from textual.widgets import DataTable

from edicompare.diff.models import Collapsed, DisplayRow, Match


def is_change_row(row: DisplayRow) -> bool:
    """Whether a displayed row is a difference (not Match, not Collapsed)."""
    return not isinstance(row, (Match, Collapsed))


def find_next_change(rows: Sequence[DisplayRow], start: int) -> int | None:
    """Index of the first change strictly after start, or None."""
    for index in range(max(start + 1, 0), len(rows)):
        if is_change_row(rows[index]):
            return index
    return None


def find_previous_change(rows: Sequence[DisplayRow], start: int) -> int | None:
    """Index of the last change strictly before start, or None."""
    for index in range(min(start, len(rows)) - 1, -1, -1):
        if is_change_row(rows[index]):
            return index
    return None


class ChangeNavigationMixin:
    """Mixin providing vim-style navigation over a rows DataTable.

    Subclasses must provide ``_get_row_table()`` returning the DataTable and
    ``displayed_rows`` holding the DisplayRows shown in it, in order.

    Usage:
        class MyScreen(ChangeNavigationMixin, Screen):
            BINDINGS = ChangeNavigationMixin.NAVIGATION_BINDINGS + [...]
    """

    NAVIGATION_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
        Binding("n", "next_change", "Next Change"),
        Binding("N", "previous_change", "Prev Change"),
    ]

    displayed_rows: Sequence[DisplayRow] = ()

    def _get_row_table(self) -> DataTable:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _get_row_table()"
        )

    def action_vim_down(self) -> None:
        """Move cursor down (vim j key)."""
        self._get_row_table().action_cursor_down()

    def action_vim_up(self) -> None:
        """Move cursor up (vim k key)."""
        self._get_row_table().action_cursor_up()

    def action_vim_top(self) -> None:
        """Jump to first row (vim g)."""
        table = self._get_row_table()
        if table.row_count > 0:
            table.move_cursor(row=0)

    def action_vim_bottom(self) -> None:
        """Jump to last row (vim G)."""
        table = self._get_row_table()
        if table.row_count > 0:
            table.move_cursor(row=table.row_count - 1)

    def action_next_change(self) -> None:
        """Move the cursor to the next changed row."""
        table = self._get_row_table()
        target = find_next_change(self.displayed_rows, table.cursor_row)
        if target is None:
            self.notify("No more changes below")
            return
        table.move_cursor(row=target)

    def action_previous_change(self) -> None:
        """Move the cursor to the previous changed row."""
        table = self._get_row_table()
        target = find_previous_change(self.displayed_rows, table.cursor_row)
        if target is None:
            self.notify("No more changes above")
            return
        table.move_cursor(row=target)
