"""
Background Task Mixin for running comparisons with progress feedback.

Provides a reusable pattern for:
- Pushing a progress screen
- Running the alignment in a background thread
- Handling completion and errors
- Dismissing the progress screen
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

from textual import work

if TYPE_CHECKING:
    from edicompare.tui.screens.progress import ProgressScreen

logger = logging.getLogger(__name__)


class BackgroundTaskMixin:
    """Mixin providing background task execution with progress UI.

    The LCS table is quadratic in the document sizes, so large comparisons
    run in a worker thread while a progress screen is shown. Small ones
    run inline.

    Usage:
        class MyApp(BackgroundTaskMixin, App):
            def compare(self):
                if self.should_compare_async(len(left) * len(right)):
                    self._run_comparison_task(
                        label="order.x12",
                        compare_fn=lambda: align(left, right),
                        on_complete=self._on_compared,
                    )
    """

    # Configurable delays
    TASK_COMPLETION_DELAY: float = 0.5
    TASK_ERROR_DELAY: float = 2.0

    # LCS table cells above which a comparison runs in a worker thread
    LARGE_COMPARISON_THRESHOLD: int = 250_000

    def _run_comparison_task(
        self,
        label: str,
        compare_fn: Callable[[], Any],
        on_complete: Callable[[Any], None],
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        """Run a comparison with a progress screen.

        Args:
            label: Description of the documents being compared (for display).
            compare_fn: Function that performs the comparison and returns its result.
            on_complete: Called with the result on success.
            on_error: Called with error message on failure.
        """
        from edicompare.tui.screens.progress import ComparingScreen

        screen = ComparingScreen(label=label)
        self.app.push_screen(screen)
        self._run_comparison_worker(screen, compare_fn, on_complete, on_error)

    @work(thread=True, exclusive=True, group="comparison")
    def _run_comparison_worker(
        self,
        screen: "ProgressScreen",
        compare_fn: Callable[[], Any],
        on_complete: Callable[[Any], None],
        on_error: Callable[[str], None] | None,
    ) -> None:
        """Background worker for comparison tasks."""
        started = time.perf_counter()

        try:
            self.app.call_from_thread(screen.update_status, "Aligning segments...")
            result = compare_fn()
            elapsed = time.perf_counter() - started
            logger.info("Comparison finished in %.2fs", elapsed)

            self.app.call_from_thread(
                screen.set_complete, f"Aligned {len(result):,} rows in {elapsed:.1f}s"
            )

            # Brief delay then complete
            time.sleep(self.TASK_COMPLETION_DELAY)
            self.app.call_from_thread(self.app.pop_screen)
            self.app.call_from_thread(on_complete, result)

        except Exception as e:
            logger.exception("Comparison failed")
            error_msg = str(e)
            self.app.call_from_thread(screen.set_error, f"Error: {error_msg}")
            time.sleep(self.TASK_ERROR_DELAY)
            self.app.call_from_thread(self.app.pop_screen)

            if on_error:
                self.app.call_from_thread(on_error, error_msg)

    @classmethod
    def should_compare_async(cls, cost: int, threshold: int | None = None) -> bool:
        """Check if a comparison should run in a worker thread.

        Args:
            cost: LCS table cells the comparison needs (len(left) * len(right)).
            threshold: Cell threshold. Uses LARGE_COMPARISON_THRESHOLD if None.

        Returns:
            True if the comparison is larger than the threshold.
        """
        if threshold is None:
            threshold = cls.LARGE_COMPARISON_THRESHOLD
        return cost > threshold
