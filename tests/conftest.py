"""Pytest configuration and shared fixtures for edicompare tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from edicompare.segments import Segment


def build_isa(element: str = "*", component: str = ">", terminator: str = "~") -> str:
    """Build a fixed-width 106 character ISA header."""
    fields = [
        "ISA",
        "00",
        " " * 10,
        "00",
        " " * 10,
        "ZZ",
        "SENDER".ljust(15),
        "ZZ",
        "RECEIVER".ljust(15),
        "210101",
        "1200",
        "U",
        "00401",
        "000000001",
        "0",
        "P",
        component,
    ]
    return element.join(fields) + terminator


X12_BODY_BEFORE = [
    "GS*PO*SENDER*RECEIVER*20210101*1200*1*X*004010~",
    "ST*850*0001~",
    "BEG*00*SA*PO-1001**20210101~",
    "N1*BY*ACME CORP~",
    "N3*123 Main St~",
    "PO1*1*10*EA*9.99**VP*WIDGET~",
    "PO1*2*5*EA*19.99**VP*GADGET~",
    "CTT*2~",
    "SE*9*0001~",
    "GE*1*1~",
    "IEA*1*000000001~",
]

X12_BODY_AFTER = [
    "GS*PO*SENDER*RECEIVER*20210101*1200*1*X*004010~",
    "ST*850*0001~",
    "BEG*00*SA*PO-1001**20210101~",
    "N1*BY*ACME CORP~",
    "N3*456 Oak Ave~",
    "PO1*1*10*EA*9.99**VP*WIDGET~",
    "PO1*2*8*EA*19.99**VP*GADGET~",
    "PID*F****BLUE GADGET~",
    "CTT*2~",
    "SE*10*0001~",
    "GE*1*1~",
    "IEA*1*000000001~",
]

EDIFACT_SEGMENTS = [
    "UNA:+.? '",
    "UNB+UNOA:1+SENDER+RECEIVER+210101:1200+1'",
    "UNH+1+ORDERS:D:96A:UN'",
    "BGM+220+PO1001+9'",
    "NAD+BY+ACME?+CO::9'",
    "LIN+1++WIDGET:IN'",
    "QTY+21:10'",
    "UNT+6+1'",
    "UNZ+1+1'",
]


@pytest.fixture
def isa_header() -> Callable[..., str]:
    """Return a builder for fixed-width ISA headers."""
    return build_isa


@pytest.fixture
def x12_before_text() -> str:
    """X12 850 purchase order, one segment per line."""
    return "\n".join([build_isa()] + X12_BODY_BEFORE) + "\n"


@pytest.fixture
def x12_after_text() -> str:
    """Revised purchase order: N3 and PO1 changed, PID added, SE recounted."""
    return "\n".join([build_isa()] + X12_BODY_AFTER) + "\n"


@pytest.fixture
def edifact_text() -> str:
    """EDIFACT ORDERS interchange as a single unbroken stream."""
    return "".join(EDIFACT_SEGMENTS)


@pytest.fixture
def x12_pair(tmp_path: Path, x12_before_text: str, x12_after_text: str) -> tuple[Path, Path]:
    """Write the before/after purchase orders to files."""
    before = tmp_path / "before.x12"
    after = tmp_path / "after.x12"
    before.write_text(x12_before_text)
    after.write_text(x12_after_text)
    return before, after


@pytest.fixture
def edifact_file(tmp_path: Path, edifact_text: str) -> Path:
    """Write the EDIFACT interchange to a file with a neutral extension."""
    filepath = tmp_path / "orders.txt"
    filepath.write_text(edifact_text)
    return filepath


@pytest.fixture
def make_segments() -> Callable[[str], list[Segment]]:
    """Return a helper turning "A*1~B*2" into a list of segments."""

    def _make(text: str) -> list[Segment]:
        return [
            Segment.from_text(part, line_number=index)
            for index, part in enumerate(text.split("~"), start=1)
            if part
        ]

    return _make
