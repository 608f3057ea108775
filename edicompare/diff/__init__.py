"""
Structural diff and alignment engine for segment sequences.

Usage:
    from edicompare.diff import align, present, summarize, PresentOptions

    result = align(left_segments, right_segments)
    rows = present(result, PresentOptions(diffs_only=True, pinned_ids={"ISA"}))
    print(summarize(result).describe())
"""

from edicompare.diff.alignment import align, longest_common_subsequence
from edicompare.diff.element_differ import diff_elements
from edicompare.diff.models import (
    AlignedRow,
    Collapsed,
    DisplayRow,
    LeftOnly,
    Match,
    Modified,
    RightOnly,
    StructuralResult,
)
from edicompare.diff.presentation import (
    DEFAULT_CONTEXT_SIZE,
    DEFAULT_PINNED_IDS,
    PresentOptions,
    collapse_unchanged,
    default_pinned_ids,
    filter_by_type,
    present,
    segment_ids,
)
from edicompare.diff.report import render_report, render_row, render_rows, write_report
from edicompare.diff.summary import DiffSummary, summarize

__all__ = [
    # Models
    "Match",
    "Modified",
    "LeftOnly",
    "RightOnly",
    "Collapsed",
    "AlignedRow",
    "DisplayRow",
    "StructuralResult",
    # Alignment
    "align",
    "longest_common_subsequence",
    "diff_elements",
    # Presentation
    "PresentOptions",
    "present",
    "filter_by_type",
    "collapse_unchanged",
    "segment_ids",
    "default_pinned_ids",
    "DEFAULT_CONTEXT_SIZE",
    "DEFAULT_PINNED_IDS",
    # Summary and report
    "DiffSummary",
    "summarize",
    "render_row",
    "render_rows",
    "render_report",
    "write_report",
]
