"""Reusable screen components for the TUI application."""

from edicompare.tui.screens.progress import (
    ComparingScreen,
    ExportingScreen,
    ProgressScreen,
)

__all__ = [
    "ProgressScreen",
    "ComparingScreen",
    "ExportingScreen",
]
