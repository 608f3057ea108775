"""
TUI EDI Comparison Viewer.

A Textual-based terminal UI for aligning two X12 or EDIFACT interchanges
and reviewing their differences side by side.

Usage:
    python -m edicompare.tui.app before.x12 after.x12

Components:
    - EdiCompareApp: Main application class
    - ComparisonScreen: Side-by-side comparison view
    - DocumentCache: Bounded cache of parsed documents
    - SegmentDetailModal: Element-by-element view of one row
"""
