"""
Segment alignment engine.

Aligns two segment sequences the way line diffing aligns text, at segment
granularity:

1. A longest common subsequence over whole-segment identity (id and
   elements) anchors the unchanged segments as Match rows.
2. Between anchors, unmatched left and right segments sharing an id are
   paired positionally into Modified rows.
3. Whatever is left becomes LeftOnly / RightOnly rows.

The LCS table is O(n*m) in time and memory after trimming the common
prefix and suffix. Callers guard input size; this module never raises.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Sequence

from edicompare.diff.element_differ import diff_elements
from edicompare.diff.models import (
    AlignedRow,
    LeftOnly,
    Match,
    Modified,
    RightOnly,
    StructuralResult,
)
from edicompare.segments.base import Segment

logger = logging.getLogger(__name__)


def align(left: Sequence[Segment], right: Sequence[Segment]) -> StructuralResult:
    """Align two segment sequences into classified rows.

    Args:
        left: Segments of the left (original) document.
        right: Segments of the right (revised) document.

    Returns:
        A StructuralResult whose rows interleave both inputs in order.

    Examples:
        >>> left = [Segment.from_text("X*1"), Segment.from_text("Y*a")]
        >>> right = [Segment.from_text("X*2"), Segment.from_text("Y*a")]
        >>> [row.status for row in align(left, right)]
        ['modified', 'match']
    """
    logger.debug("Aligning %d left segments with %d right segments", len(left), len(right))

    rows: list[AlignedRow] = []
    left_cursor = 0
    right_cursor = 0

    for left_index, right_index in longest_common_subsequence(left, right):
        rows.extend(
            _resolve_gap(left[left_cursor:left_index], right[right_cursor:right_index])
        )
        rows.append(Match(left[left_index], right[right_index]))
        left_cursor = left_index + 1
        right_cursor = right_index + 1

    rows.extend(_resolve_gap(left[left_cursor:], right[right_cursor:]))

    result = StructuralResult(rows=tuple(rows))
    logger.info(
        "Alignment complete: %d rows (%d unchanged)",
        len(rows),
        sum(1 for row in rows if isinstance(row, Match)),
    )
    return result


def longest_common_subsequence(
    left: Sequence[Segment], right: Sequence[Segment]
) -> list[tuple[int, int]]:
    """Find a maximal common subsequence of two segment sequences.

    Segments are equal when their ids and elements are equal; raw text is
    ignored. Ties are broken deterministically by advancing the left side
    first.

    Args:
        left: Left segments.
        right: Right segments.

    Returns:
        Increasing (left_index, right_index) pairs of matched segments.
    """
    left_keys = [segment.key for segment in left]
    right_keys = [segment.key for segment in right]

    # Common prefix and suffix always belong to some maximal LCS
    prefix = 0
    limit = min(len(left_keys), len(right_keys))
    while prefix < limit and left_keys[prefix] == right_keys[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < limit - prefix
        and left_keys[-1 - suffix] == right_keys[-1 - suffix]
    ):
        suffix += 1

    pairs = [(i, i) for i in range(prefix)]

    middle_left = left_keys[prefix:len(left_keys) - suffix]
    middle_right = right_keys[prefix:len(right_keys) - suffix]
    pairs.extend(
        (prefix + i, prefix + j) for i, j in _lcs_table_walk(middle_left, middle_right)
    )

    left_tail = len(left_keys) - suffix
    right_tail = len(right_keys) - suffix
    pairs.extend((left_tail + k, right_tail + k) for k in range(suffix))
    return pairs


def _lcs_table_walk(left_keys: list, right_keys: list) -> list[tuple[int, int]]:
    """Classic dynamic-programming LCS, walked forward from the start."""
    n = len(left_keys)
    m = len(right_keys)
    if n == 0 or m == 0:
        return []

    # table[i][j] is the LCS length of left_keys[i:] and right_keys[j:]
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row = table[i]
        below = table[i + 1]
        left_key = left_keys[i]
        for j in range(m - 1, -1, -1):
            if left_key == right_keys[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]

    pairs = []
    i = j = 0
    while i < n and j < m:
        if left_keys[i] == right_keys[j]:
            pairs.append((i, j))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


def _resolve_gap(left_run: Sequence[Segment], right_run: Sequence[Segment]) -> list[AlignedRow]:
    """Classify the unmatched segments between two anchors.

    Left and right segments with the same id are paired by order of
    occurrence. Pairs never cross, so both sides keep their order. Unpaired
    segments before each pair are emitted left first, then right.
    """
    if not left_run:
        return [RightOnly(segment) for segment in right_run]
    if not right_run:
        return [LeftOnly(segment) for segment in left_run]

    positions_by_id: dict[str, deque[int]] = defaultdict(deque)
    for index, segment in enumerate(right_run):
        positions_by_id[segment.id].append(index)

    pairs: list[tuple[int, int]] = []
    next_right = 0
    for left_index, segment in enumerate(left_run):
        candidates = positions_by_id.get(segment.id)
        if not candidates:
            continue
        while candidates and candidates[0] < next_right:
            candidates.popleft()
        if candidates:
            right_index = candidates.popleft()
            pairs.append((left_index, right_index))
            next_right = right_index + 1

    rows: list[AlignedRow] = []
    left_cursor = 0
    right_cursor = 0
    for left_index, right_index in pairs:
        rows.extend(LeftOnly(segment) for segment in left_run[left_cursor:left_index])
        rows.extend(RightOnly(segment) for segment in right_run[right_cursor:right_index])
        left_segment = left_run[left_index]
        right_segment = right_run[right_index]
        rows.append(
            Modified(left_segment, right_segment, diff_elements(left_segment, right_segment))
        )
        left_cursor = left_index + 1
        right_cursor = right_index + 1

    rows.extend(LeftOnly(segment) for segment in left_run[left_cursor:])
    rows.extend(RightOnly(segment) for segment in right_run[right_cursor:])
    return rows
