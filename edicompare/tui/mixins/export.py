"""
Export Mixin for background report export with progress updates.

Provides lightweight helpers for writing the text report of the current
comparison:
- _get_output_dir(): Get output directory from app or default
- _run_report_export(): Write the report in a worker thread
- _dismiss_export_screen(): Dismiss progress screen after delay

Usage:
    class MyScreen(ExportMixin, Screen):
        def action_export_report(self):
            from edicompare.tui.screens import ExportingScreen
            screen = ExportingScreen(title="Exporting report...")
            self.app.push_screen(screen)
            self._run_report_export(screen, result, "a.x12", "b.x12")
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from textual import work

from edicompare.diff import StructuralResult, write_report

if TYPE_CHECKING:
    from edicompare.tui.screens import ExportingScreen

DEFAULT_OUTPUT_DIR = "reports"


class ExportMixin:
    """Mixin providing report export helpers."""

    # Default delay before dismissing export completion screen
    EXPORT_COMPLETION_DELAY: float = 1.5

    def _get_output_dir(self) -> str:
        """Get the output directory from app or use default.

        Returns:
            The output directory path.
        """
        output_dir = getattr(self.app, "_output_dir", None)
        if not output_dir:
            output_dir = DEFAULT_OUTPUT_DIR
        return output_dir

    def _dismiss_export_screen(self) -> None:
        """Dismiss the export screen after a brief delay."""
        time.sleep(self.EXPORT_COMPLETION_DELAY)
        self.app.call_from_thread(self.app.pop_screen)

    @work(thread=True)
    def _run_report_export(
        self,
        exporting_screen: "ExportingScreen",
        result: StructuralResult,
        left_name: str,
        right_name: str,
        separator: str = "*",
    ) -> None:
        """Write the comparison report in a background thread.

        Args:
            exporting_screen: The ExportingScreen to update.
            result: The comparison to export.
            left_name: Name of the left document.
            right_name: Name of the right document.
            separator: Element separator for segments without raw text.
        """
        self.app.call_from_thread(
            exporting_screen.update_progress, 0, 1, "Rendering report"
        )

        try:
            output_path = write_report(
                result,
                self._get_output_dir(),
                left_name,
                right_name,
                separator=separator,
            )
            self.app.call_from_thread(
                exporting_screen.set_complete, f"Exported to {output_path}"
            )
        except OSError as e:
            self.app.call_from_thread(
                exporting_screen.set_error, f"Export failed: {e}"
            )

        self._dismiss_export_screen()
