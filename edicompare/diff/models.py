"""
Structural comparison models.

Each row classification is its own frozen dataclass, so a row can only
carry the segments its classification allows:

    Match(left, right)                     identical content on both sides
    Modified(left, right, diff_positions)  same id, different content
    LeftOnly(left)                         present in the left document only
    RightOnly(right)                       present in the right document only
    Collapsed(count)                       display placeholder for hidden rows
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from edicompare.segments.base import Segment


@dataclass(frozen=True)
class Match:
    """Segments with identical id and content on both sides."""

    left: Segment
    right: Segment

    status = "match"

    @property
    def segment_id(self) -> str:
        return self.left.id


@dataclass(frozen=True)
class Modified:
    """A same-id pair whose content differs.

    Attributes:
        left: The left segment.
        right: The right segment.
        diff_positions: Element positions whose values differ.
    """

    left: Segment
    right: Segment
    diff_positions: frozenset[int] = field(default_factory=frozenset)

    status = "modified"

    @property
    def segment_id(self) -> str:
        return self.left.id


@dataclass(frozen=True)
class LeftOnly:
    """A segment removed from the left document."""

    left: Segment

    status = "left_only"

    @property
    def segment_id(self) -> str:
        return self.left.id


@dataclass(frozen=True)
class RightOnly:
    """A segment added in the right document."""

    right: Segment

    status = "right_only"

    @property
    def segment_id(self) -> str:
        return self.right.id


@dataclass(frozen=True)
class Collapsed:
    """Placeholder standing in for ``count`` hidden rows."""

    count: int

    status = "collapsed"


AlignedRow = Union[Match, Modified, LeftOnly, RightOnly]
DisplayRow = Union[Match, Modified, LeftOnly, RightOnly, Collapsed]


@dataclass(frozen=True)
class StructuralResult:
    """The aligned rows of one comparison, in document order.

    Results are never mutated; running a new comparison produces a new
    result.
    """

    rows: tuple[AlignedRow, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index: int) -> AlignedRow:
        return self.rows[index]

    def left_segments(self) -> list[Segment]:
        """Left segments in row order; equals the left input sequence."""
        return [row.left for row in self.rows if isinstance(row, (Match, Modified, LeftOnly))]

    def right_segments(self) -> list[Segment]:
        """Right segments in row order; equals the right input sequence."""
        return [row.right for row in self.rows if isinstance(row, (Match, Modified, RightOnly))]

    @property
    def has_changes(self) -> bool:
        return any(not isinstance(row, Match) for row in self.rows)
