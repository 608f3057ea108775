"""Mixins for the TUI application."""

from edicompare.tui.mixins.background_task import BackgroundTaskMixin
from edicompare.tui.mixins.change_navigation import ChangeNavigationMixin
from edicompare.tui.mixins.export import ExportMixin

__all__ = [
    "BackgroundTaskMixin",
    "ChangeNavigationMixin",
    "ExportMixin",
]
