"""
Main Textual application for the EDI comparison viewer.

This is the entry point for the TUI that aligns two interchange documents
and shows them side by side with their differences highlighted.

Supported Dialects:
    - X12 (.x12, or content starting with ISA)
    - EDIFACT (.edifact, .edf, or content starting with UNA/UNB)
"""

import argparse
import logging
import os
import sys

from textual.app import App
from textual.binding import Binding

from edicompare.diff import DEFAULT_CONTEXT_SIZE, StructuralResult, align, default_pinned_ids
from edicompare.main import DIALECT_CHOICES
from edicompare.segments import (
    DEFAULT_MAX_COMPARISON_CELLS,
    ParsedDocument,
    check_comparison_size,
    comparison_cost,
)
from edicompare.tui.data_loader import DocumentCache, load_document_pair
from edicompare.tui.mixins import BackgroundTaskMixin
from edicompare.tui.mixins.export import DEFAULT_OUTPUT_DIR
from edicompare.tui.views.comparison_screen import ComparisonScreen

logger = logging.getLogger(__name__)


class EdiCompareApp(BackgroundTaskMixin, App):
    """A Textual app for comparing two EDI interchange documents."""

    TITLE = "EDI Compare"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        height: 3;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    DataTable {
        height: 100%;
        background: $surface;
    }

    DataTable > .datatable--header {
        background: $primary-darken-1;
        color: $text;
        text-style: bold;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
        color: $text;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        left_path: str,
        right_path: str,
        input_dialect: str = "auto",
        output_dir: str | None = None,
        context_size: int = DEFAULT_CONTEXT_SIZE,
        cache: DocumentCache | None = None,
        max_cells: int = DEFAULT_MAX_COMPARISON_CELLS,
    ):
        """Initialize the app with two interchange files.

        Args:
            left_path: Path to the left (original) document.
            right_path: Path to the right (changed) document.
            input_dialect: Dialect hint ('auto', 'x12', 'edifact').
            output_dir: Output directory for report export.
            context_size: Rows of context around each change in diffs-only mode.
            cache: Parsed document cache. A new one is created if None.
            max_cells: Largest alignment table the viewer will build.
        """
        super().__init__()
        self._left_path = left_path
        self._right_path = right_path
        self._input_dialect = input_dialect
        self._output_dir = output_dir
        self._context_size = context_size
        self.cache = cache if cache is not None else DocumentCache()
        self._max_cells = max_cells
        self.result: StructuralResult | None = None
        self._documents: tuple[ParsedDocument, ParsedDocument] | None = None

    def on_mount(self) -> None:
        """Run the first comparison."""
        self.run_comparison()

    def run_comparison(self, reload: bool = False) -> None:
        """Load both documents and align them.

        Small comparisons run inline; large ones run in a worker thread
        behind a progress screen.

        Args:
            reload: Drop the cached documents first so both files are re-read.
        """
        if reload:
            self.cache.clear(self._left_path)
            self.cache.clear(self._right_path)

        try:
            left, right = load_document_pair(
                self._left_path, self._right_path, self.cache, self._input_dialect
            )
            check_comparison_size(left, right, self._max_cells)
        except (FileNotFoundError, ValueError) as e:
            self.notify(f"Error loading documents: {e}", severity="error")
            return

        self._documents = (left, right)
        self.result = None

        cost = comparison_cost(left, right)
        if self.should_compare_async(cost):
            label = f"{os.path.basename(self._left_path)} ↔ {os.path.basename(self._right_path)}"
            self._run_comparison_task(
                label=label,
                compare_fn=lambda: align(left.segments, right.segments),
                on_complete=self._on_compared,
                on_error=self._on_comparison_error,
            )
        else:
            self._on_compared(align(left.segments, right.segments))

    def _on_compared(self, result: StructuralResult) -> None:
        """Called when a comparison completes successfully."""
        if self._documents is None:
            return
        left, right = self._documents
        self.result = result

        if isinstance(self.screen, ComparisonScreen):
            self.screen.set_result(left, right, result)
            self.notify(f"Compared {len(left):,} and {len(right):,} segments")
            return

        self.push_screen(
            ComparisonScreen(
                left,
                right,
                result,
                pinned_ids=default_pinned_ids(left.dialect),
                context_size=self._context_size,
            )
        )

    def _on_comparison_error(self, error: str) -> None:
        """Called when a background comparison fails."""
        self.result = None
        self.notify(f"Comparison failed: {error}", severity="error")


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        description="Compare two EDI interchanges side by side in a terminal UI. "
        "Supports X12 and EDIFACT."
    )
    parser.add_argument("left", help="Path to the left (original) interchange file")
    parser.add_argument("right", help="Path to the right (changed) interchange file")
    parser.add_argument(
        "--input-dialect",
        choices=DIALECT_CHOICES,
        default="auto",
        help="Dialect of both files (default: auto)",
    )
    parser.add_argument(
        "-O",
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory for report export (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "-C",
        "--context",
        type=int,
        default=DEFAULT_CONTEXT_SIZE,
        help=f"Rows of context around changes (default: {DEFAULT_CONTEXT_SIZE})",
    )
    parser.add_argument(
        "--max-cells",
        type=int,
        default=DEFAULT_MAX_COMPARISON_CELLS,
        help="Refuse pairs whose alignment table exceeds this many cells "
        f"(default: {DEFAULT_MAX_COMPARISON_CELLS:,})",
    )
    args = parser.parse_args()

    for path in (args.left, args.right):
        if not os.path.isfile(path):
            print(f"Error: File not found: {path}", file=sys.stderr)
            sys.exit(1)

        if not os.access(path, os.R_OK):
            print(f"Error: Permission denied: {path}", file=sys.stderr)
            sys.exit(1)

    app = EdiCompareApp(
        left_path=args.left,
        right_path=args.right,
        input_dialect=args.input_dialect,
        output_dir=args.output_dir,
        context_size=args.context,
        max_cells=args.max_cells,
    )
    app.run()


if __name__ == "__main__":
    main()
