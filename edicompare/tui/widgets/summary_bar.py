"""Summary bar showing change counts and the active view state."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from edicompare.diff import DiffSummary, PresentOptions


def format_summary(
    summary: DiffSummary,
    options: PresentOptions,
    shown: int,
    total: int,
) -> Text:
    """Build the summary line for a comparison.

    Args:
        summary: Counts for the whole comparison.
        options: The view state used to derive the displayed rows.
        shown: Number of rows currently displayed.
        total: Number of aligned rows in the comparison.
    """
    text = Text()
    text.append(f"+{summary.added}", style="green")
    text.append(" ")
    text.append(f"-{summary.removed}", style="red")
    text.append(" ")
    text.append(f"~{summary.modified}", style="yellow")
    text.append(f"  ={summary.unchanged}")
    text.append(f"  score {summary.score}", style="bold")

    view = [f"{shown:,}/{total:,} rows"]
    if options.diffs_only:
        view.append(f"diffs only (context {options.context_size})")
    if options.type_filter:
        view.append(f"type {options.type_filter}")
    if options.pinned_ids:
        view.append("pinned " + ",".join(sorted(options.pinned_ids)))
    text.append("  |  " + "  ".join(view), style="dim")
    return text


class SummaryBar(Static):
    """One-line bar docked above the comparison table."""

    DEFAULT_CSS = """
    SummaryBar {
        height: 1;
        padding: 0 1;
        background: $surface-darken-1;
    }
    """

    def show_summary(
        self,
        summary: DiffSummary,
        options: PresentOptions,
        shown: int,
        total: int,
    ) -> None:
        """Refresh the bar for the current comparison and view state."""
        self.update(format_summary(summary, options, shown, total))
