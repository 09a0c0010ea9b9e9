"""Page range extraction into standalone PDF documents."""

from __future__ import annotations

from io import BytesIO

from pypdf import PdfReader, PdfWriter


class PdfPageRangeExtractor:
    """Copy 1-based inclusive page ranges into new PDF documents."""

    def extract(self, reader: PdfReader, start: int, end: int) -> bytes:
        """Return serialized bytes of a new PDF holding pages `start..end`.

        Raises:
            IndexError: If the range falls outside the source document.
        """

        page_total = len(reader.pages)
        if start < 1 or end < start or end > page_total:
            raise IndexError(
                f"Page range {start}-{end} is outside the document's {page_total} pages."
            )

        writer = PdfWriter()
        for page_index in range(start - 1, end):
            writer.add_page(reader.pages[page_index])

        buffer = BytesIO()
        writer.write(buffer)
        return buffer.getvalue()
