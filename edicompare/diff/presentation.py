"""
Presentation filter for structural comparison results.

Derives the list of rows a view displays from a StructuralResult:

- Type filter: keep only rows for one segment id.
- Diffs only: keep changed or pinned rows plus ``context_size`` rows of
  context on each side, replacing every hidden run with one Collapsed row.

Pinned ids keep envelope and header segments visible even when unchanged,
so a reader stays oriented inside the interchange.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from edicompare.diff.models import (
    AlignedRow,
    Collapsed,
    DisplayRow,
    LeftOnly,
    Match,
    Modified,
    StructuralResult,
)

DEFAULT_CONTEXT_SIZE = 2

# Conventional envelope/header segments per dialect
DEFAULT_PINNED_IDS: dict[str, frozenset[str]] = {
    "x12": frozenset(["ISA", "GS", "ST", "BEG", "BIG"]),
    "edifact": frozenset(["UNB", "UNH", "BGM"]),
}


def default_pinned_ids(dialect: str | None = None) -> frozenset[str]:
    """Return the default pinned ids for a dialect.

    Args:
        dialect: Dialect name ('x12', 'edifact'), or None for both.

    Returns:
        The pinned ids for the dialect, or the union for unknown dialects.
    """
    if dialect in DEFAULT_PINNED_IDS:
        return DEFAULT_PINNED_IDS[dialect]
    return frozenset().union(*DEFAULT_PINNED_IDS.values())


@dataclass(frozen=True)
class PresentOptions:
    """View state for deriving display rows.

    Attributes:
        type_filter: Only show rows for this segment id (None = all).
        diffs_only: Collapse unchanged rows outside the context windows.
        pinned_ids: Segment ids that always count as significant.
        context_size: Rows of context kept around each significant row.
    """

    type_filter: str | None = None
    diffs_only: bool = False
    pinned_ids: frozenset[str] = field(default_factory=frozenset)
    context_size: int = DEFAULT_CONTEXT_SIZE


def row_ids(row: AlignedRow) -> tuple[str, ...]:
    """Return the segment id(s) a row carries, left first."""
    if isinstance(row, (Match, Modified)):
        if row.left.id == row.right.id:
            return (row.left.id,)
        return (row.left.id, row.right.id)
    if isinstance(row, LeftOnly):
        return (row.left.id,)
    return (row.right.id,)


def is_significant(row: AlignedRow, pinned_ids: Iterable[str] = ()) -> bool:
    """Whether a row must stay visible in diffs-only mode."""
    return not isinstance(row, Match) or row.segment_id in pinned_ids


def filter_by_type(rows: Sequence[AlignedRow], type_filter: str | None) -> list[AlignedRow]:
    """Keep only rows whose left or right segment id equals type_filter."""
    if type_filter is None:
        return list(rows)
    return [row for row in rows if type_filter in row_ids(row)]


def collapse_unchanged(
    rows: Sequence[AlignedRow],
    pinned_ids: Iterable[str] = (),
    context_size: int = DEFAULT_CONTEXT_SIZE,
) -> list[DisplayRow]:
    """Replace runs of rows outside every context window with placeholders.

    Each significant row opens a window of ``context_size`` rows on both
    sides; overlapping windows merge. Every maximal run of rows outside all
    windows becomes one Collapsed row, including leading and trailing runs.

    Args:
        rows: Rows to collapse.
        pinned_ids: Ids that count as significant even when unchanged.
        context_size: Rows of context per side. Negative values count as 0.

    Returns:
        Visible rows with Collapsed placeholders in place of hidden runs.

    Examples:
        >>> rows = [match] * 10 + [changed] + [match] * 10
        >>> [r.status for r in collapse_unchanged(rows, context_size=1)]
        ['collapsed', 'match', 'modified', 'match', 'collapsed']
    """
    pinned = frozenset(pinned_ids)
    context = max(0, context_size)
    total = len(rows)

    visible = [False] * total
    for index, row in enumerate(rows):
        if is_significant(row, pinned):
            start = max(0, index - context)
            end = min(total, index + context + 1)
            for window_index in range(start, end):
                visible[window_index] = True

    display: list[DisplayRow] = []
    hidden = 0
    for index, row in enumerate(rows):
        if visible[index]:
            if hidden:
                display.append(Collapsed(hidden))
                hidden = 0
            display.append(row)
        else:
            hidden += 1
    if hidden:
        display.append(Collapsed(hidden))

    return display


def present(
    result: StructuralResult | Sequence[AlignedRow],
    options: PresentOptions | None = None,
) -> list[DisplayRow]:
    """Derive display rows from a comparison result.

    The type filter applies first; diffs-only context is then measured in
    the filtered list, not in the original row positions.

    Args:
        result: The comparison result (or its rows).
        options: View options. Defaults to showing every row.

    Returns:
        The rows to display. An unmatched type filter yields an empty list.
    """
    if options is None:
        options = PresentOptions()

    rows = result.rows if isinstance(result, StructuralResult) else result
    filtered = filter_by_type(rows, options.type_filter)

    if not options.diffs_only:
        return list(filtered)

    return collapse_unchanged(filtered, options.pinned_ids, options.context_size)


def segment_ids(result: StructuralResult | Sequence[AlignedRow]) -> list[str]:
    """Sorted unique segment ids across both sides, for filter choices."""
    rows = result.rows if isinstance(result, StructuralResult) else result
    ids: set[str] = set()
    for row in rows:
        ids.update(row_ids(row))
    return sorted(ids)
