"""
Segment model and abstract base class for segment parsers.

This module defines the Segment record every parser produces and the
SegmentParser interface that all dialect-specific parsers must implement.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """One record of an interchange.

    ``elements`` holds every field in source order, starting with the
    segment id itself, so position ``i`` matches the element reference
    number (``N301`` is position 1).

    Attributes:
        id: The segment type code (e.g. "N1", "BGM"). May be empty.
        elements: All fields, segment id first.
        raw: The source text of the segment, terminator included.
        line_number: 1-based physical line (line mode) or segment ordinal.
    """

    id: str
    elements: tuple[str, ...]
    raw: str = ""
    line_number: int = 0

    @property
    def key(self) -> tuple[str, tuple[str, ...]]:
        """Comparison identity: id and content, ignoring raw formatting."""
        return (self.id, self.elements)

    @classmethod
    def from_text(cls, text: str, separator: str = "*", line_number: int = 0) -> Segment:
        """Build a segment from already-terminated-stripped text.

        Examples:
            >>> Segment.from_text("N1*BY*ACME").elements
            ('N1', 'BY', 'ACME')
        """
        parts = tuple(text.split(separator)) if separator else (text,)
        return cls(id=parts[0], elements=parts, raw=text, line_number=line_number)


@dataclass(frozen=True)
class Delimiters:
    """Delimiters in effect for one interchange."""

    dialect: str
    segment: str
    element: str
    component: str
    release: str = ""


@dataclass(frozen=True)
class ParsedDocument:
    """A parsed interchange: where it came from and its segments."""

    source: str
    dialect: str
    delimiters: Delimiters
    segments: tuple[Segment, ...]

    def __len__(self) -> int:
        return len(self.segments)


class SegmentParser(ABC):
    """Abstract base class for tokenizing interchanges into segments.

    Dialect parsers (X12, EDIFACT) inherit from this class. They supply
    delimiter detection and element splitting; chunking the text into
    segments is shared.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect name (e.g., 'x12', 'edifact')."""
        pass

    @abstractmethod
    def detect_delimiters(self, content: str) -> Delimiters:
        """Read the delimiters declared by (or assumed for) the content."""
        pass

    @abstractmethod
    def split_elements(self, text: str, delimiters: Delimiters) -> tuple[str, ...]:
        """Split one terminator-stripped segment into its fields."""
        pass

    def iter_segments(
        self, content: str, delimiters: Delimiters | None = None
    ) -> Iterator[Segment]:
        """Lazily tokenize content into segments.

        When the content contains newlines every non-blank line is split
        further by the segment terminator and ``line_number`` is the physical
        line. Otherwise the stream is split by the terminator and
        ``line_number`` is the segment ordinal.

        Args:
            content: Raw interchange text.
            delimiters: Delimiters to use; detected from content if None.

        Yields:
            Each segment in document order.
        """
        if not content:
            return
        if delimiters is None:
            delimiters = self.detect_delimiters(content)
        logger.debug(
            "Parsing %s content with delimiters %r", self.dialect_name, delimiters
        )

        if "\n" in content:
            for line_number, line in enumerate(content.splitlines(), start=1):
                for chunk in self._split_chunks(line, delimiters):
                    yield self._build_segment(chunk, delimiters, line_number)
        else:
            for ordinal, chunk in enumerate(self._split_chunks(content, delimiters), start=1):
                yield self._build_segment(chunk, delimiters, ordinal)

    def parse(self, content: str, delimiters: Delimiters | None = None) -> list[Segment]:
        """Tokenize the whole content into a list of segments."""
        return list(self.iter_segments(content, delimiters))

    def parse_document(self, content: str, source: str = "") -> ParsedDocument:
        """Parse content into a ParsedDocument."""
        delimiters = self.detect_delimiters(content)
        return ParsedDocument(
            source=source,
            dialect=self.dialect_name,
            delimiters=delimiters,
            segments=tuple(self.iter_segments(content, delimiters)),
        )

    def load(self, filename: str) -> ParsedDocument:
        """Read and parse an interchange file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        with open(filename, "r", encoding="utf-8-sig") as f:
            content = f.read()
        return self.parse_document(content, source=filename)

    def get_segment_count(self, content: str) -> int:
        """Count segments without keeping them."""
        return sum(1 for _ in self.iter_segments(content))

    def _split_chunks(self, text: str, delimiters: Delimiters) -> list[str]:
        """Split text on the terminator, keeping the terminator on each chunk."""
        terminator = delimiters.segment
        if terminator in ("\n", "\r\n") or terminator not in text:
            stripped = text.strip()
            return [stripped] if stripped else []

        chunks = []
        for piece in self._split_unreleased(text, terminator, delimiters.release):
            piece = piece.strip()
            if piece:
                chunks.append(piece + terminator)
        return chunks

    @staticmethod
    def _split_unreleased(text: str, separator: str, release: str) -> list[str]:
        """Split on separator, skipping separators preceded by the release char."""
        if not release:
            return text.split(separator)

        parts = []
        current: list[str] = []
        i = 0
        while i < len(text):
            char = text[i]
            if char == release and i + 1 < len(text):
                current.append(char)
                current.append(text[i + 1])
                i += 2
                continue
            if char == separator:
                parts.append("".join(current))
                current = []
            else:
                current.append(char)
            i += 1
        parts.append("".join(current))
        return parts

    def _build_segment(self, chunk: str, delimiters: Delimiters, line_number: int) -> Segment:
        """Turn one raw chunk into a Segment."""
        text = chunk.strip()
        terminator = delimiters.segment
        if terminator not in ("\n", "\r\n") and text.endswith(terminator):
            text = text[: -len(terminator)].strip()
        elements = self.split_elements(text, delimiters)
        return Segment(
            id=elements[0] if elements else "",
            elements=elements,
            raw=chunk,
            line_number=line_number,
        )
