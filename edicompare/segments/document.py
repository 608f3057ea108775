"""
Document loading helpers shared by the CLI and the terminal viewer.
"""

from __future__ import annotations

import logging
from pathlib import Path

from edicompare.segments.base import ParsedDocument
from edicompare.segments.dialect_detector import (
    EXTENSION_MAP,
    SUPPORTED_DIALECTS,
    detect_dialect,
    get_parser_for_dialect,
)

logger = logging.getLogger(__name__)

# Largest LCS table (left segments x right segments) an alignment may build
DEFAULT_MAX_COMPARISON_CELLS = 16_000_000


def parse_text(content: str, dialect: str = "auto", source: str = "") -> ParsedDocument:
    """Parse interchange text into a ParsedDocument.

    Args:
        content: Raw interchange text.
        dialect: Dialect hint ('auto', 'x12', 'edifact').
        source: Label recorded on the document (usually the file path).

    Returns:
        The parsed document.

    Raises:
        ValueError: If the dialect is unsupported or cannot be detected.
    """
    if dialect == "auto":
        dialect = detect_dialect(content)
    elif dialect not in SUPPORTED_DIALECTS:
        raise ValueError(
            f"Unsupported dialect '{dialect}'. "
            f"Supported dialects: {', '.join(sorted(SUPPORTED_DIALECTS))}"
        )

    document = get_parser_for_dialect(dialect).parse_document(content, source=source)
    logger.debug(
        "Parsed %d %s segments from %s", len(document), dialect, source or "<text>"
    )
    return document


def load_document(filename: str, dialect: str = "auto") -> ParsedDocument:
    """Read and parse an interchange file.

    Args:
        filename: Path to the interchange file.
        dialect: Dialect hint ('auto', 'x12', 'edifact').

    Returns:
        The parsed document.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the dialect is unsupported or cannot be detected.
    """
    path = Path(filename)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {filename}")

    if dialect == "auto":
        dialect = EXTENSION_MAP.get(path.suffix.lower(), "auto")

    content = path.read_text(encoding="utf-8-sig")
    return parse_text(content, dialect=dialect, source=filename)


def ensure_comparable(left: ParsedDocument, right: ParsedDocument) -> None:
    """Check that two documents can be compared structurally.

    Raises:
        ValueError: If the documents are in different dialects.
    """
    if left.dialect != right.dialect:
        raise ValueError(
            f"Cannot compare a {left.dialect} document with a {right.dialect} "
            f"document: cross-dialect comparison is not supported"
        )


def comparison_cost(left: ParsedDocument, right: ParsedDocument) -> int:
    """Number of LCS table cells an alignment of the two documents needs."""
    return len(left) * len(right)


def check_comparison_size(
    left: ParsedDocument,
    right: ParsedDocument,
    max_cells: int = DEFAULT_MAX_COMPARISON_CELLS,
) -> None:
    """Refuse pairs whose alignment table would exceed max_cells.

    Raises:
        ValueError: If ``len(left) * len(right)`` is larger than max_cells.
    """
    cost = comparison_cost(left, right)
    if cost > max_cells:
        raise ValueError(
            f"Comparing {len(left):,} with {len(right):,} segments needs "
            f"{cost:,} table cells (limit {max_cells:,}); raise --max-cells to compare them"
        )
