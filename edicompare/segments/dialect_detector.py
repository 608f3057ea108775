"""
Dialect detection utilities for interchange content.

This module provides functions to detect the dialect (X12 or EDIFACT) of
interchange text and get appropriate parsers.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from edicompare.segments.base import SegmentParser


# Mapping of file extensions to dialect names (other extensions are sniffed)
EXTENSION_MAP: dict[str, str] = {
    ".x12": "x12",
    ".edifact": "edifact",
    ".edf": "edifact",
}

# Supported dialect names
SUPPORTED_DIALECTS = frozenset(["x12", "edifact"])

# Two or three alphanumerics followed by an asterisk, e.g. "G23*05"
_X12_SNIPPET = re.compile(r"^[A-Z0-9]{2,3}\*")

X12_ENVELOPE_PREFIXES = ("ISA", "GS", "ST")
EDIFACT_ENVELOPE_PREFIXES = ("UNA", "UNB", "UNH")


def detect_dialect(content: str) -> str:
    """Detect the dialect of interchange text.

    Args:
        content: Raw interchange text.

    Returns:
        Dialect name: "x12" or "edifact".

    Raises:
        ValueError: If the content is neither X12 nor EDIFACT.

    Examples:
        >>> detect_dialect("ISA*00*...")
        'x12'
        >>> detect_dialect("UNB+UNOA:1+SENDER+RECEIVER'")
        'edifact'
    """
    trimmed = content.lstrip()

    if trimmed.startswith(X12_ENVELOPE_PREFIXES):
        return "x12"
    if _X12_SNIPPET.match(trimmed):
        return "x12"
    if trimmed.startswith(EDIFACT_ENVELOPE_PREFIXES):
        return "edifact"

    preview = trimmed[:20].replace("\n", " ")
    raise ValueError(
        f"Cannot determine dialect for content starting with '{preview}'. "
        f"Supported dialects: {', '.join(sorted(SUPPORTED_DIALECTS))}"
    )


def detect_file_dialect(filename: str) -> str:
    """Detect the dialect of a file from its extension or content.

    Args:
        filename: Path to the interchange file.

    Returns:
        Dialect name: "x12" or "edifact".

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the dialect cannot be determined.
    """
    extension = Path(filename).suffix.lower()
    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]

    with open(filename, "r", encoding="utf-8-sig") as f:
        head = f.read(1024)
    return detect_dialect(head)


def get_parser(content: str) -> "SegmentParser":
    """Factory function to get the appropriate parser for content.

    Args:
        content: Raw interchange text.

    Returns:
        A SegmentParser instance for the detected dialect.

    Raises:
        ValueError: If the dialect cannot be determined.

    Examples:
        >>> parser = get_parser("ST*850*0001~")
        >>> parser.dialect_name
        'x12'
    """
    return get_parser_for_dialect(detect_dialect(content))


def get_parser_for_dialect(dialect_name: str) -> "SegmentParser":
    """Get a parser for a specific dialect name.

    Args:
        dialect_name: The dialect name ("x12" or "edifact").

    Returns:
        A SegmentParser instance for the specified dialect.

    Raises:
        ValueError: If the dialect name is not supported.
    """
    # Import parsers here to avoid circular imports
    from edicompare.segments.edifact_parser import EdifactParser
    from edicompare.segments.x12_parser import X12Parser

    if dialect_name not in SUPPORTED_DIALECTS:
        raise ValueError(
            f"Unsupported dialect '{dialect_name}'. "
            f"Supported dialects: {', '.join(sorted(SUPPORTED_DIALECTS))}"
        )

    parsers: dict[str, SegmentParser] = {
        "x12": X12Parser(),
        "edifact": EdifactParser(),
    }

    return parsers[dialect_name]
