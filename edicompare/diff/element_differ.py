"""
Positional element comparison for paired segments.

Field position is fixed for a given segment type, so values are compared
position by position with no re-alignment of shifted fields.
"""

from __future__ import annotations

from itertools import zip_longest

from edicompare.segments.base import Segment


def diff_elements(left: Segment, right: Segment) -> frozenset[int]:
    """Return the element positions whose values differ.

    A position missing on one side counts as an empty string, so trailing
    empty elements present on only one side are not reported.

    Args:
        left: The left segment.
        right: The right segment.

    Returns:
        Positions in ``range(max(len(left.elements), len(right.elements)))``
        whose values differ.

    Examples:
        >>> a = Segment.from_text("N3*123 Main St")
        >>> b = Segment.from_text("N3*456 Oak Ave")
        >>> sorted(diff_elements(a, b))
        [1]
    """
    return frozenset(
        index
        for index, (left_value, right_value) in enumerate(
            zip_longest(left.elements, right.elements, fillvalue="")
        )
        if left_value != right_value
    )
