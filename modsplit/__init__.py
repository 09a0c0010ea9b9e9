"""Top-level package for modsplit.

This package splits textbook PDFs into smaller module PDFs from manual page
ranges, detected `Module/Unit/Chapter N` headings, or fixed-size chunks. The
main orchestration entry point is `ModuleSplitPipeline`.
"""

from .pipeline import ModuleSplitPipeline

__all__ = ["ModuleSplitPipeline", "__version__"]

__version__ = "0.1.0"
