"""Shared pytest fixtures for the full modsplit test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.pdf_factory import numbered_pages, text_lines, write_pdf

TEXTBOOK_PAGE_COUNT = 8
TEXTBOOK_HEADING_PAGES = (1, 4, 6)


def textbook_pages() -> list[list[tuple[str, float, float]]]:
    """Return an 8-page textbook with unit headings on pages 1, 4, and 6."""

    headings = {
        1: "Unit 1: Cells and   Tissues",
        4: "UNIT 2 - Genetics",
        6: "Unit 3 Ecology",
    }
    pages = []
    for page_number in range(1, TEXTBOOK_PAGE_COUNT + 1):
        lines = []
        if page_number in headings:
            lines.append(headings[page_number])
        lines.extend(
            [
                f"Body text for page {page_number}.",
                "Review the key terms before moving on.",
            ]
        )
        pages.append(text_lines(lines))
    return pages


@pytest.fixture
def textbook_pdf(tmp_path: Path) -> Path:
    """Provide an 8-page PDF with three detectable unit headings."""

    return write_pdf(tmp_path / "textbook.pdf", textbook_pages())


@pytest.fixture
def long_pdf(tmp_path: Path) -> Path:
    """Provide a 60-page PDF without headings, one `Page N` line per page."""

    return write_pdf(tmp_path / "long.pdf", numbered_pages(60))


@pytest.fixture
def plain_pdf(tmp_path: Path) -> Path:
    """Provide a 3-page PDF without headings."""

    return write_pdf(tmp_path / "plain.pdf", numbered_pages(3))
