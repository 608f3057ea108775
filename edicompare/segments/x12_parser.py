"""
X12 segment parser.

This module provides the X12Parser class. X12 interchanges declare their
delimiters positionally in the fixed-length ISA header.
"""

from __future__ import annotations

from edicompare.segments.base import Delimiters, SegmentParser

# Fixed ISA layout: element separator after "ISA", component separator and
# segment terminator at the end of the 106-character header.
ISA_LENGTH = 106
ISA_ELEMENT_OFFSET = 3
ISA_COMPONENT_OFFSET = 104
ISA_TERMINATOR_OFFSET = 105


class X12Parser(SegmentParser):
    """Segment parser for ANSI X12 interchanges.

    Attributes:
        dialect_name: Returns 'x12'.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect name."""
        return "x12"

    def detect_delimiters(self, content: str) -> Delimiters:
        """Read delimiters from the ISA header, or guess for partial content.

        A full-length ISA header is authoritative. Snippets starting at GS,
        ST or a body segment fall back to the conventional ``*``/``~``
        (``+`` when no asterisk is present, newline when there is no tilde).

        Examples:
            >>> X12Parser().detect_delimiters("N1*BY*ACME~").element
            '*'
        """
        trimmed = content.lstrip()

        if trimmed.startswith("ISA") and len(trimmed) >= ISA_LENGTH:
            return Delimiters(
                dialect=self.dialect_name,
                segment=trimmed[ISA_TERMINATOR_OFFSET],
                element=trimmed[ISA_ELEMENT_OFFSET],
                component=trimmed[ISA_COMPONENT_OFFSET],
            )

        if trimmed.startswith("ISA") and len(trimmed) > ISA_ELEMENT_OFFSET:
            element = trimmed[ISA_ELEMENT_OFFSET]
        elif "*" not in trimmed and "+" in trimmed:
            element = "+"
        else:
            element = "*"

        if "~" in trimmed:
            segment = "~"
        elif "\n" in trimmed:
            segment = "\n"
        else:
            segment = "~"

        return Delimiters(
            dialect=self.dialect_name,
            segment=segment,
            element=element,
            component=">",
        )

    def split_elements(self, text: str, delimiters: Delimiters) -> tuple[str, ...]:
        """Split an X12 segment on the element separator."""
        return tuple(text.split(delimiters.element))
