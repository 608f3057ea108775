"""
Summary counts for a structural comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from edicompare.diff.models import (
    AlignedRow,
    LeftOnly,
    Match,
    Modified,
    RightOnly,
    StructuralResult,
)

# Score penalty per changed row
CHANGE_PENALTY = 2


@dataclass(frozen=True)
class DiffSummary:
    """Row counts by classification.

    Attributes:
        added: RightOnly rows.
        removed: LeftOnly rows.
        modified: Modified rows.
        unchanged: Match rows.
    """

    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.removed + self.modified

    @property
    def score(self) -> int:
        """Similarity score from 0 to 100, two points off per change."""
        return max(0, 100 - CHANGE_PENALTY * self.total_changes)

    def describe(self) -> str:
        if not self.total_changes:
            return "Structure matches perfectly."
        return f"Found {self.total_changes} differences in structure or values."

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
            "unchanged": self.unchanged,
            "total_changes": self.total_changes,
            "score": self.score,
        }


def summarize(result: StructuralResult | Sequence[AlignedRow]) -> DiffSummary:
    """Count rows by classification over the full, unfiltered result.

    Examples:
        >>> summary = summarize(align(left, right))
        >>> summary.modified
        1
    """
    rows = result.rows if isinstance(result, StructuralResult) else result
    counts = {"added": 0, "removed": 0, "modified": 0, "unchanged": 0}

    for row in rows:
        if isinstance(row, RightOnly):
            counts["added"] += 1
        elif isinstance(row, LeftOnly):
            counts["removed"] += 1
        elif isinstance(row, Modified):
            counts["modified"] += 1
        elif isinstance(row, Match):
            counts["unchanged"] += 1

    return DiffSummary(**counts)
