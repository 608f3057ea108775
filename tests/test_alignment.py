"""Tests for the segment alignment engine in edicompare/diff/alignment.py."""

from __future__ import annotations

from functools import lru_cache

from hypothesis import given, settings
from hypothesis import strategies as st

from edicompare.diff import (
    LeftOnly,
    Match,
    Modified,
    RightOnly,
    StructuralResult,
    align,
    longest_common_subsequence,
    summarize,
)
from edicompare.segments import Segment, parse_text

# Small pools so generated documents share ids, repeat keys and hit empty ids
segment_ids = st.sampled_from(["", "N1", "N3", "PO1"])
element_values = st.sampled_from(["", "1", "2"])
segments = st.builds(lambda sid, value: Segment(sid, (sid, value)), segment_ids, element_values)
documents = st.lists(segments, max_size=8)


def statuses(result: StructuralResult) -> list[str]:
    return [row.status for row in result]


def brute_force_lcs_length(left: list[Segment], right: list[Segment]) -> int:
    """Length of the longest common subsequence of segment keys, by recursion."""
    left_keys = [segment.key for segment in left]
    right_keys = [segment.key for segment in right]

    @lru_cache(maxsize=None)
    def best(i: int, j: int) -> int:
        if i == len(left_keys) or j == len(right_keys):
            return 0
        if left_keys[i] == right_keys[j]:
            return 1 + best(i + 1, j + 1)
        return max(best(i + 1, j), best(i, j + 1))

    return best(0, 0)


class TestAlignBasics:
    """Empty, identical and disjoint inputs."""

    def test_empty_inputs(self):
        """Two empty documents align to an empty result with no changes."""
        result = align([], [])
        assert isinstance(result, StructuralResult)
        assert len(result) == 0
        assert not result.has_changes

    def test_left_empty(self, make_segments):
        """Every right segment is RightOnly when the left is empty."""
        right = make_segments("A*1~B*2")
        result = align([], right)
        assert statuses(result) == ["right_only", "right_only"]

    def test_right_empty(self, make_segments):
        """Every left segment is LeftOnly when the right is empty."""
        left = make_segments("A*1~B*2")
        assert statuses(align(left, [])) == ["left_only", "left_only"]

    def test_identity(self, make_segments):
        """A document aligned with itself is all matches, in order."""
        segments = make_segments("ISA*1~GS*A~N1*BUYER~N3*123 Main St~SE*1")
        result = align(segments, segments)
        assert all(isinstance(row, Match) for row in result)
        assert [row.left for row in result] == segments
        assert [row.right for row in result] == segments

    def test_disjoint(self, make_segments):
        """Documents with no shared ids list all left rows, then all right rows."""
        left = make_segments("A*1~B*2")
        right = make_segments("C*3~D*4")
        result = align(left, right)
        assert statuses(result) == ["left_only", "left_only", "right_only", "right_only"]
        assert result.left_segments() == left
        assert result.right_segments() == right

    def test_empty_ids_compare_literally(self):
        """Segments with empty ids match and pair like any other id."""
        left = [Segment.from_text(""), Segment.from_text("A*1")]
        right = [Segment.from_text(""), Segment.from_text("A*2")]
        assert statuses(align(left, right)) == ["match", "modified"]


class TestPairing:
    """Same-id pairing inside gaps."""

    def test_pairing_over_deletion(self, make_segments):
        """Same-id segments in a gap become one Modified row."""
        left = make_segments("X*1~Y*a")
        right = make_segments("X*2~Y*a")
        result = align(left, right)
        assert statuses(result) == ["modified", "match"]
        modified = result[0]
        assert modified.left.elements == ("X", "1")
        assert modified.right.elements == ("X", "2")

    def test_diff_position_two(self, make_segments):
        """Only the differing element position is reported."""
        left = make_segments("PO1*1*10*EA")
        right = make_segments("PO1*1*12*EA")
        row = align(left, right)[0]
        assert isinstance(row, Modified)
        assert row.diff_positions == frozenset({2})

    def test_unpaired_left_before_right(self, make_segments):
        """Unpaired gap segments list the left side first."""
        left = make_segments("A*1~B*1")
        right = make_segments("C*1~B*2")
        result = align(left, right)
        assert statuses(result) == ["left_only", "right_only", "modified"]

    def test_duplicates_pair_by_position(self, make_segments):
        """Repeated ids pair in document order, not by best content match."""
        left = make_segments("N1*A~N1*B")
        right = make_segments("N1*B2~N1*A2")
        result = align(left, right)
        assert statuses(result) == ["modified", "modified"]
        assert result[0].left.elements[1] == "A"
        assert result[0].right.elements[1] == "B2"

    def test_extra_duplicate_is_right_only(self, make_segments):
        """A surplus repeated id on one side stays one-sided."""
        left = make_segments("N1*A")
        right = make_segments("N1*B~N1*C")
        assert statuses(align(left, right)) == ["modified", "right_only"]

    def test_pairs_never_cross(self, make_segments):
        """Swapped ids yield a single pair so both sides keep their order."""
        left = make_segments("A*1~B*1")
        right = make_segments("B*2~A*2")
        result = align(left, right)
        assert result.left_segments() == left
        assert result.right_segments() == right
        assert sum(isinstance(row, Modified) for row in result) == 1

    def test_trailing_empty_element_only(self):
        """A trailing empty element changes the key but no position differs."""
        left = [Segment("REF", ("REF", "ZZ"))]
        right = [Segment("REF", ("REF", "ZZ", ""))]
        row = align(left, right)[0]
        assert isinstance(row, Modified)
        assert row.diff_positions == frozenset()


class TestLongestCommonSubsequence:
    """Tests for longest_common_subsequence()."""

    def test_raw_formatting_ignored(self):
        """Segments differing only in raw text are equal."""
        left = [Segment("N1", ("N1", "BY"), raw="N1*BY~")]
        right = [Segment("N1", ("N1", "BY"), raw="N1*BY~\r\n")]
        assert longest_common_subsequence(left, right) == [(0, 0)]

    def test_is_maximal(self, make_segments):
        """The subsequence found is a longest one and increasing."""
        left = make_segments("A~B~C~D~E")
        right = make_segments("B~X~D~E~A")
        pairs = longest_common_subsequence(left, right)
        assert len(pairs) == 3
        assert pairs == sorted(pairs)

    def test_left_advances_first_on_tie(self, make_segments):
        """On equal lengths the left side is skipped first."""
        left = make_segments("A~B")
        right = make_segments("B~A")
        assert longest_common_subsequence(left, right) == [(1, 0)]

    def test_prefix_and_suffix(self, make_segments):
        """Shared prefix and suffix are always part of the subsequence."""
        left = make_segments("A~B~C~D")
        right = make_segments("A~X~D")
        assert longest_common_subsequence(left, right) == [(0, 0), (3, 2)]


class TestAlignmentProperties:
    """Properties every alignment holds for arbitrary documents."""

    @given(left=documents, right=documents)
    @settings(max_examples=200)
    def test_match_count_is_longest_common_subsequence(self, left, right):
        """Match rows number exactly the brute-force LCS length."""
        result = align(left, right)
        matched = sum(isinstance(row, Match) for row in result)
        assert matched == brute_force_lcs_length(left, right)

    @given(left=documents, right=documents)
    @settings(max_examples=200)
    def test_both_sides_keep_their_order(self, left, right):
        """Every input segment appears exactly once, in input order."""
        result = align(left, right)
        assert result.left_segments() == left
        assert result.right_segments() == right

    @given(left=documents, right=documents)
    @settings(max_examples=200)
    def test_modified_rows_share_id_but_differ(self, left, right):
        """Modified pairs have equal ids, differing keys and in-range positions."""
        for row in align(left, right):
            if isinstance(row, Modified):
                assert row.left.id == row.right.id
                assert row.left.key != row.right.key
                longest = max(len(row.left.elements), len(row.right.elements))
                assert all(0 <= p < longest for p in row.diff_positions)

    @given(left=documents, right=documents)
    @settings(max_examples=200)
    def test_match_rows_have_equal_keys(self, left, right):
        """Match rows pair segments with identical keys."""
        for row in align(left, right):
            if isinstance(row, Match):
                assert row.left.key == row.right.key

    @given(document=documents)
    @settings(max_examples=100)
    def test_self_alignment_has_no_changes(self, document):
        """A document aligned with itself reports no changes."""
        result = align(document, document)
        assert not result.has_changes
        assert len(result) == len(document)


class TestEndToEnd:
    """Whole documents through the engine."""

    def test_address_change(self, make_segments):
        """A changed street address is one Modified N3 row."""
        left = make_segments("ISA*1~GS*A~N1*BUYER~N3*123 Main St~SE*1")
        right = make_segments("ISA*1~GS*A~N1*BUYER~N3*456 Oak Ave~SE*1")
        result = align(left, right)

        assert statuses(result) == ["match", "match", "match", "modified", "match"]
        assert result[3].diff_positions == frozenset({1})
        summary = summarize(result)
        assert (summary.added, summary.removed, summary.modified) == (0, 0, 1)

    def test_purchase_order_revision(self, x12_before_text, x12_after_text):
        """A revised purchase order aligns row by row as expected."""
        left = parse_text(x12_before_text).segments
        right = parse_text(x12_after_text).segments
        result = align(left, right)

        assert [(row.status, row.segment_id) for row in result] == [
            ("match", "ISA"),
            ("match", "GS"),
            ("match", "ST"),
            ("match", "BEG"),
            ("match", "N1"),
            ("modified", "N3"),
            ("match", "PO1"),
            ("modified", "PO1"),
            ("right_only", "PID"),
            ("match", "CTT"),
            ("modified", "SE"),
            ("match", "GE"),
            ("match", "IEA"),
        ]
        assert result[7].diff_positions == frozenset({2})

    def test_edifact_identity(self, edifact_text):
        """An EDIFACT interchange aligned with itself has no changes."""
        segments = parse_text(edifact_text).segments
        result = align(segments, segments)
        assert not result.has_changes
        assert len(result) == len(segments)

    def test_row_variants_hold_only_their_segments(self, make_segments):
        """One-sided rows carry no attribute for the missing side."""
        result = align(make_segments("A*1"), make_segments("B*1"))
        left_only, right_only = result.rows
        assert isinstance(left_only, LeftOnly) and not hasattr(left_only, "right")
        assert isinstance(right_only, RightOnly) and not hasattr(right_only, "left")
