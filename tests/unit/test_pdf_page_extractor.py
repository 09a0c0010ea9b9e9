"""Unit tests for page range extraction into new PDFs."""

from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader

from modsplit.io.pdf_page_extractor import PdfPageRangeExtractor
from tests.pdf_factory import build_pdf, numbered_pages


def _reader(page_count: int) -> PdfReader:
    return PdfReader(BytesIO(build_pdf(numbered_pages(page_count))))


def test_extract_copies_inclusive_range_in_order() -> None:
    data = PdfPageRangeExtractor().extract(_reader(6), 2, 4)

    extracted = PdfReader(BytesIO(data))
    assert len(extracted.pages) == 3
    texts = [page.extract_text() for page in extracted.pages]
    assert ["Page 2" in texts[0], "Page 3" in texts[1], "Page 4" in texts[2]] == [
        True,
        True,
        True,
    ]


def test_extract_single_page() -> None:
    data = PdfPageRangeExtractor().extract(_reader(3), 3, 3)

    assert len(PdfReader(BytesIO(data)).pages) == 1


@pytest.mark.parametrize(("start", "end"), [(0, 2), (3, 2), (2, 7)])
def test_extract_rejects_out_of_bounds_ranges(start: int, end: int) -> None:
    with pytest.raises(IndexError, match="outside the document's 6 pages"):
        PdfPageRangeExtractor().extract(_reader(6), start, end)
