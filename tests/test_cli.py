"""Tests for CLI functionality in edicompare/main.py."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

# Path to the module
CLI_MODULE = "edicompare.main"


def run_cli(*args: str) -> subprocess.CompletedProcess:
    """Run the edicompare CLI with given arguments."""
    return subprocess.run(
        [sys.executable, "-m", CLI_MODULE, *args],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )


class TestCLIBasic:
    """Basic CLI functionality tests."""

    def test_help_flag(self):
        """--help prints usage and exits cleanly."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()

    def test_no_command_prints_help(self):
        """Running without a command prints help and fails."""
        result = run_cli()
        assert result.returncode == 1
        assert "usage" in result.stdout.lower()

    def test_file_not_found_error(self, tmp_path):
        """Missing files are reported on stderr."""
        result = run_cli("compare", str(tmp_path / "a.x12"), str(tmp_path / "b.x12"))
        assert result.returncode == 1
        assert result.stderr.startswith("Error:")
        assert "not found" in result.stderr.lower()

    def test_undetectable_content_error(self, tmp_path):
        """Content in no known dialect is reported on stderr."""
        filepath = tmp_path / "notes.txt"
        filepath.write_text("just some notes")
        result = run_cli("segments", str(filepath))
        assert result.returncode == 1
        assert "Cannot determine dialect" in result.stderr

    def test_cross_dialect_error(self, x12_pair, edifact_file):
        """Comparing X12 with EDIFACT is refused."""
        before, _ = x12_pair
        result = run_cli("compare", str(before), str(edifact_file))
        assert result.returncode == 1
        assert "cross-dialect" in result.stderr


class TestSegmentsCommand:
    """Tests for the segments command."""

    def test_lists_segments(self, x12_pair):
        """segments lists every segment of a document."""
        before, _ = x12_pair
        result = run_cli("segments", str(before))
        assert result.returncode == 0
        assert "x12 (12 segments)" in result.stdout
        assert "Displayed 12 segments" in result.stdout

    def test_type_filter(self, x12_pair):
        """--type limits the listing to one segment id."""
        before, _ = x12_pair
        result = run_cli("segments", str(before), "--type", "PO1")
        assert result.returncode == 0
        assert "Displayed 2 segments" in result.stdout

    def test_limit(self, x12_pair):
        """-n stops the listing early."""
        before, _ = x12_pair
        result = run_cli("segments", str(before), "-n", "3")
        assert "(limited to 3 segments)" in result.stdout
        assert "Displayed 3 segments" in result.stdout

    def test_edifact(self, edifact_file):
        """EDIFACT documents are listed with their dialect."""
        result = run_cli("segments", str(edifact_file))
        assert result.returncode == 0
        assert "edifact (9 segments)" in result.stdout


class TestCompareCommand:
    """Tests for the compare command."""

    def test_full_listing(self, x12_pair):
        """compare prints every row with status markers and a summary."""
        before, after = x12_pair
        result = run_cli("compare", str(before), str(after))
        assert result.returncode == 0
        lines = result.stdout.splitlines()
        assert lines[0] == f"--- {before}"
        assert lines[1] == f"+++ {after}"
        assert "~ N3*123 Main St~  ->  N3*456 Oak Ave~" in lines
        assert "+ PID*F****BLUE GADGET~" in lines
        assert "  CTT*2~" in lines
        assert lines[-1] == "+1 -0 ~3  Found 4 differences in structure or values."

    def test_diffs_only_collapses(self, x12_pair):
        """-d collapses unchanged runs into placeholders."""
        before, after = x12_pair
        result = run_cli(
            "compare", str(before), str(after), "-d", "--no-default-pins", "-C", "0"
        )
        assert result.returncode == 0
        assert "  ... 5 unchanged segments hidden ..." in result.stdout
        assert "  ... 1 unchanged segment hidden ..." in result.stdout
        assert "  ... 2 unchanged segments hidden ..." in result.stdout

    def test_pin_keeps_segment_visible(self, x12_pair):
        """--pin keeps a segment id visible in diffs-only mode."""
        before, after = x12_pair
        result = run_cli(
            "compare", str(before), str(after),
            "-d", "--no-default-pins", "-C", "0", "--pin", "CTT",
        )
        assert "  CTT*2~" in result.stdout.splitlines()

    def test_type_filter_without_rows(self, x12_pair):
        """A filter matching nothing says so."""
        before, after = x12_pair
        result = run_cli("compare", str(before), str(after), "--type", "ZZZ")
        assert result.returncode == 0
        assert "(no ZZZ segments)" in result.stdout

    def test_identical_files(self, x12_pair):
        """Identical files report a perfect match."""
        before, _ = x12_pair
        result = run_cli("compare", str(before), str(before))
        assert result.returncode == 0
        assert "Structure matches perfectly." in result.stdout

    def test_max_segments_guard(self, x12_pair):
        """A side above --max-segments is refused."""
        before, after = x12_pair
        result = run_cli("compare", str(before), str(after), "--max-segments", "5")
        assert result.returncode == 1
        assert "--max-segments" in result.stderr

    def test_max_cells_guard(self, x12_pair):
        """A pair whose alignment table exceeds --max-cells is refused."""
        before, after = x12_pair
        result = run_cli("compare", str(before), str(after), "--max-cells", "100")
        assert result.returncode == 1
        assert result.stderr.startswith("Error:")
        assert "156 table cells" in result.stderr
        assert "--max-cells" in result.stderr

    def test_max_cells_applies_to_summary(self, x12_pair):
        """Every pair command checks the alignment table size."""
        before, after = x12_pair
        result = run_cli("summary", str(before), str(after), "--max-cells", "155")
        assert result.returncode == 1
        assert "--max-cells" in result.stderr


class TestSummaryAndReport:
    """Tests for the summary and report commands."""

    def test_summary(self, x12_pair):
        """summary prints change counts and the score."""
        before, after = x12_pair
        result = run_cli("summary", str(before), str(after))
        assert result.returncode == 0
        assert "COMPARISON SUMMARY" in result.stdout
        assert "Added:      1" in result.stdout
        assert "Modified:   3" in result.stdout
        assert "Score:      92" in result.stdout

    def test_report(self, x12_pair, tmp_path):
        """report writes the text report to the output directory."""
        before, after = x12_pair
        output_dir = tmp_path / "out"
        result = run_cli("report", str(before), str(after), "-O", str(output_dir))
        assert result.returncode == 0
        report = output_dir / "diff-before-after.txt"
        assert report.exists()
        assert f"Report written to {report}" in result.stdout
        assert report.read_text().startswith("Comparison Report\n")
