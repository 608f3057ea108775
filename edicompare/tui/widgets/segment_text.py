"""
Segment rendering utilities for the comparison table.

Turns aligned or display rows into rich Text cells, highlighting the
element positions that differ between the two sides of a Modified row.

Row Status Markers:
    - " ": Match, identical on both sides
    - "~": Modified, same id with differing elements
    - "-": LeftOnly, present only in the left document
    - "+": RightOnly, present only in the right document
    - "…": Collapsed, a run of hidden unchanged rows
"""

from __future__ import annotations

from typing import Iterable

from rich.text import Text

from edicompare.diff.models import (
    Collapsed,
    DisplayRow,
    LeftOnly,
    Match,
    Modified,
    RightOnly,
)
from edicompare.segments import ParsedDocument, Segment

STATUS_MARKERS: dict[str, str] = {
    "match": " ",
    "modified": "~",
    "left_only": "-",
    "right_only": "+",
    "collapsed": "…",
}

STATUS_STYLES: dict[str, str] = {
    "match": "",
    "modified": "yellow",
    "left_only": "red",
    "right_only": "green",
    "collapsed": "dim italic",
}

HIGHLIGHT_STYLE = "bold black on yellow"


def display_separator(document: ParsedDocument | None) -> str:
    """Return the element separator declared by a document, "*" if unknown."""
    if document is None or not document.delimiters.element:
        return "*"
    return document.delimiters.element


def render_segment(
    segment: Segment,
    diff_positions: Iterable[int] = (),
    separator: str = "*",
    style: str = "",
) -> Text:
    """
    Render a segment as Text with the differing elements highlighted.

    Elements are joined with the separator, so position 0 is the segment
    id. Positions beyond the segment's own elements are ignored.

    Args:
        segment: The segment to render.
        diff_positions: Element positions to highlight.
        separator: Separator placed between elements.
        style: Base style applied to the whole segment.

    Returns:
        A rich Text for use in a DataTable cell.

    Examples:
        >>> text = render_segment(Segment.from_text("N3*456 Oak Ave"), {1})
        >>> text.plain
        'N3*456 Oak Ave'
    """
    highlighted = set(diff_positions)
    text = Text(style=style, no_wrap=True, overflow="ellipsis")
    for position, element in enumerate(segment.elements):
        if position:
            text.append(separator)
        if position in highlighted:
            text.append(element or " ", style=HIGHLIGHT_STYLE)
        else:
            text.append(element)
    return text


def status_marker(row: DisplayRow) -> Text:
    """Return the styled one-character marker for a row."""
    return Text(STATUS_MARKERS[row.status], style=STATUS_STYLES[row.status])


def _line(segment: Segment) -> str:
    return str(segment.line_number) if segment.line_number else ""


def row_cells(row: DisplayRow, separator: str = "*") -> tuple:
    """
    Build the five table cells for a display row.

    Returns:
        A tuple of (left line, left segment, marker, right line, right segment).
    """
    style = STATUS_STYLES[row.status]
    marker = status_marker(row)

    if isinstance(row, Collapsed):
        noun = "segment" if row.count == 1 else "segments"
        label = Text(f"... {row.count} unchanged {noun} hidden ...", style=style)
        return ("", label, marker, "", Text(""))
    if isinstance(row, Match):
        return (
            _line(row.left),
            render_segment(row.left, separator=separator),
            marker,
            _line(row.right),
            render_segment(row.right, separator=separator),
        )
    if isinstance(row, Modified):
        return (
            _line(row.left),
            render_segment(row.left, row.diff_positions, separator, style),
            marker,
            _line(row.right),
            render_segment(row.right, row.diff_positions, separator, style),
        )
    if isinstance(row, LeftOnly):
        return (
            _line(row.left),
            render_segment(row.left, separator=separator, style=style),
            marker,
            "",
            Text(""),
        )
    if isinstance(row, RightOnly):
        return (
            "",
            Text(""),
            marker,
            _line(row.right),
            render_segment(row.right, separator=separator, style=style),
        )
    raise TypeError(f"Unknown row type: {type(row).__name__}")
