"""
UN/EDIFACT segment parser.

This module provides the EdifactParser class. EDIFACT interchanges may
open with a UNA service string advice that declares their delimiters;
without it the level A defaults apply.
"""

from __future__ import annotations

from edicompare.segments.base import Delimiters, SegmentParser

# UNA:+.? '  -> component, element, decimal mark, release, reserved, terminator
UNA_LENGTH = 9
DEFAULT_DELIMITERS = {
    "component": ":",
    "element": "+",
    "release": "?",
    "segment": "'",
}


class EdifactParser(SegmentParser):
    """Segment parser for UN/EDIFACT interchanges.

    Separators preceded by the release character do not split, and the
    release character is dropped from element values.

    Attributes:
        dialect_name: Returns 'edifact'.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect name."""
        return "edifact"

    def detect_delimiters(self, content: str) -> Delimiters:
        """Read delimiters from the UNA segment, or use level A defaults."""
        trimmed = content.lstrip()

        if trimmed.startswith("UNA") and len(trimmed) >= UNA_LENGTH:
            return Delimiters(
                dialect=self.dialect_name,
                component=trimmed[3],
                element=trimmed[4],
                release=trimmed[6],
                segment=trimmed[8],
            )

        return Delimiters(dialect=self.dialect_name, **DEFAULT_DELIMITERS)

    def split_elements(self, text: str, delimiters: Delimiters) -> tuple[str, ...]:
        """Split an EDIFACT segment, honoring the release character."""
        # The service string advice holds the delimiters themselves
        if text.startswith("UNA"):
            return ("UNA", text[3:])

        parts = self._split_unreleased(text, delimiters.element, delimiters.release)
        return tuple(self._unescape(part, delimiters.release) for part in parts)

    def _split_chunks(self, text: str, delimiters: Delimiters) -> list[str]:
        """Split chunks, keeping a leading UNA advice intact."""
        stripped = text.lstrip()
        if stripped.startswith("UNA") and len(stripped) >= UNA_LENGTH:
            advice = stripped[:UNA_LENGTH]
            return [advice] + super()._split_chunks(stripped[UNA_LENGTH:], delimiters)
        return super()._split_chunks(text, delimiters)

    @staticmethod
    def _unescape(value: str, release: str) -> str:
        """Drop release characters, keeping the character each one releases."""
        if not release or release not in value:
            return value

        chars = []
        i = 0
        while i < len(value):
            if value[i] == release and i + 1 < len(value):
                chars.append(value[i + 1])
                i += 2
            else:
                chars.append(value[i])
                i += 1
        return "".join(chars)
