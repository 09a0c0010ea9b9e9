"""Positioned text extraction from PDF pages.

Responsibilities:
- Report page counts for in-memory PDF bytes.
- Yield per-page positioned text fragments using the `pypdf` text visitor.
"""

from __future__ import annotations

from io import BytesIO
from typing import Iterator, Sequence

from pypdf import PdfReader

from ..models.datatypes import TextFragment


class PdfTextLayer:
    """Read page counts and positioned text runs from PDF bytes.

    Every call opens its own reader over the immutable source bytes.
    """

    def open(self, data: bytes) -> PdfReader:
        """Return a fresh `PdfReader` for PDF bytes."""

        return PdfReader(BytesIO(data))

    def page_count(self, data: bytes) -> int:
        """Return the number of pages in a PDF."""

        return len(self.open(data).pages)

    def iter_page_fragments(self, data: bytes) -> Iterator[list[TextFragment]]:
        """Yield the positioned text fragments of each page, in page order."""

        reader = self.open(data)
        for page in reader.pages:
            fragments: list[TextFragment] = []

            def _collect(
                text: str,
                cm: Sequence[float],
                tm: Sequence[float],
                font_dict: object,
                font_size: float,
            ) -> None:
                _ = font_dict
                _ = font_size
                fragment = self.fragment_from_visitor(text, cm, tm)
                if fragment is not None:
                    fragments.append(fragment)

            page.extract_text(visitor_text=_collect)
            yield fragments

    @staticmethod
    def fragment_from_visitor(
        text: str, cm: Sequence[float], tm: Sequence[float]
    ) -> TextFragment | None:
        """Build a fragment from one visitor callback, or `None` for blank text.

        The text matrix origin is mapped through the current transformation
        matrix to get the baseline position in page space.
        """

        clean = " ".join(text.split())
        if not clean:
            return None
        tx, ty = float(tm[4]), float(tm[5])
        x = tx * float(cm[0]) + ty * float(cm[2]) + float(cm[4])
        y = tx * float(cm[1]) + ty * float(cm[3]) + float(cm[5])
        return TextFragment(text=clean, x=x, y=y)
