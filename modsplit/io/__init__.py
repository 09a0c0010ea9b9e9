"""Input/output stage components for modsplit.

This package contains PDF text-layer reading, page range extraction, and
artifact storage used by the pipeline.
"""

from .pdf_page_extractor import PdfPageRangeExtractor
from .pdf_text_layer import PdfTextLayer
from .storage import ArtifactStore

__all__ = ["ArtifactStore", "PdfPageRangeExtractor", "PdfTextLayer"]
