"""
Plain-text rendering of comparison rows.

Rows render one per line:

    Match       "  <raw>"
    Modified    "~ <left raw>  ->  <right raw>"
    LeftOnly    "- <raw>"
    RightOnly   "+ <raw>"
    Collapsed   "  ... <n> unchanged segments hidden ..."
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Iterable

from edicompare.diff.models import (
    Collapsed,
    DisplayRow,
    LeftOnly,
    Match,
    Modified,
    RightOnly,
    StructuralResult,
)
from edicompare.diff.summary import summarize


def _raw(segment, separator: str = "*") -> str:
    return segment.raw.strip() or separator.join(segment.elements)


def render_row(row: DisplayRow, separator: str = "*") -> str:
    """Render one row using the text report convention.

    Segments without raw text are rebuilt by joining their elements with
    separator, which should be the document's element separator.
    """
    if isinstance(row, Match):
        return f"  {_raw(row.left, separator)}"
    if isinstance(row, Modified):
        return f"~ {_raw(row.left, separator)}  ->  {_raw(row.right, separator)}"
    if isinstance(row, LeftOnly):
        return f"- {_raw(row.left, separator)}"
    if isinstance(row, RightOnly):
        return f"+ {_raw(row.right, separator)}"
    if isinstance(row, Collapsed):
        noun = "segment" if row.count == 1 else "segments"
        return f"  ... {row.count} unchanged {noun} hidden ..."
    raise TypeError(f"Unsupported row type: {type(row).__name__}")


def render_rows(rows: Iterable[DisplayRow], separator: str = "*") -> str:
    """Render rows, one per line."""
    return "\n".join(render_row(row, separator) for row in rows)


def render_report(
    result: StructuralResult,
    left_name: str = "Left File",
    right_name: str = "Right File",
    generated_at: datetime | None = None,
    separator: str = "*",
) -> str:
    """Render a full comparison report with header and summary.

    Args:
        result: The comparison result.
        left_name: Name shown for the left document.
        right_name: Name shown for the right document.
        generated_at: Report timestamp. Defaults to now.
        separator: Element separator for segments without raw text.

    Returns:
        The report text, ending with a newline.
    """
    if generated_at is None:
        generated_at = datetime.now()
    summary = summarize(result)

    lines = [
        "Comparison Report",
        f"Left File: {left_name}",
        f"Right File: {right_name}",
        f"Date: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        f"Summary: +{summary.added} -{summary.removed} ~{summary.modified} "
        f"(score {summary.score}) - {summary.describe()}",
        "",
    ]
    body = render_rows(result.rows, separator)
    if body:
        lines.append(body)
    return "\n".join(lines) + "\n"


def report_filename(left_name: str, right_name: str) -> str:
    """Build the default report file name for two documents."""
    left_stem = Path(left_name).stem or "left"
    right_stem = Path(right_name).stem or "right"
    return f"diff-{left_stem}-{right_stem}.txt"


def write_report(
    result: StructuralResult,
    output_dir: str,
    left_name: str = "Left File",
    right_name: str = "Right File",
    generated_at: datetime | None = None,
    separator: str = "*",
) -> str:
    """Write the comparison report to a file in output_dir.

    Args:
        result: The comparison result.
        output_dir: Directory to write into (created if missing).
        left_name: Name of the left document.
        right_name: Name of the right document.
        generated_at: Report timestamp. Defaults to now.
        separator: Element separator for segments without raw text.

    Returns:
        Path to the written report.
    """
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, report_filename(left_name, right_name))

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_report(result, left_name, right_name, generated_at, separator))

    return output_path
