"""
Segments module for dialect-aware interchange parsing.

This module provides a unified interface for turning X12 and EDIFACT text
into ordered Segment sequences.

Usage:
    from edicompare.segments import load_document

    document = load_document("order.x12")
    for segment in document.segments:
        print(segment.id, segment.elements)

    # Or pick a parser explicitly
    from edicompare.segments import get_parser_for_dialect
    parser = get_parser_for_dialect("edifact")
    segments = parser.parse("UNH+1+ORDERS:D:96A:UN'BGM+220+PO1'")
"""

from edicompare.segments.base import Delimiters, ParsedDocument, Segment, SegmentParser
from edicompare.segments.dialect_detector import (
    EXTENSION_MAP,
    SUPPORTED_DIALECTS,
    detect_dialect,
    detect_file_dialect,
    get_parser,
    get_parser_for_dialect,
)
from edicompare.segments.document import (
    DEFAULT_MAX_COMPARISON_CELLS,
    check_comparison_size,
    comparison_cost,
    ensure_comparable,
    load_document,
    parse_text,
)
from edicompare.segments.edifact_parser import EdifactParser
from edicompare.segments.x12_parser import X12Parser

__all__ = [
    # Model and base class
    "Segment",
    "Delimiters",
    "ParsedDocument",
    "SegmentParser",
    # Dialect detection
    "detect_dialect",
    "detect_file_dialect",
    "get_parser",
    "get_parser_for_dialect",
    "EXTENSION_MAP",
    "SUPPORTED_DIALECTS",
    # Document helpers
    "parse_text",
    "load_document",
    "ensure_comparable",
    "comparison_cost",
    "check_comparison_size",
    "DEFAULT_MAX_COMPARISON_CELLS",
    # Parsers
    "X12Parser",
    "EdifactParser",
]
