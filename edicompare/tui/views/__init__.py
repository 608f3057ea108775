"""TUI views for the EDI comparison viewer."""

from edicompare.tui.views.comparison_screen import ComparisonScreen

__all__ = ["ComparisonScreen"]
