"""Core datatypes shared across modsplit modules.

Responsibilities:
- Represent immutable records exchanged between pipeline stages.
- Provide explicit typing for manifest serialization.

Key types:
- `TextFragment`, `Line`, `HeadingHit`, `Module`, `DetectionResult`,
  `ResolvedModules`, `SplitPlan`, `ModuleArtifact`, and `SplitManifest`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class TextFragment:
    """One positioned text run reported by the PDF text layer.

    Attributes:
        text: Text content of the run.
        x: Horizontal baseline position in page space.
        y: Vertical baseline position in page space (y grows upwards).
    """

    text: str
    x: float
    y: float


@dataclass(slots=True)
class Line:
    """A reconstructed visual text line.

    Attributes:
        y: Baseline of the fragment that started the line.
        text: Space-joined fragment texts.
    """

    y: float
    text: str


@dataclass(frozen=True, slots=True)
class HeadingHit:
    """A page where a heading-like line was found.

    Attributes:
        name: Sanitized heading text.
        start: 1-based page number of the heading.
    """

    name: str
    start: int


@dataclass(frozen=True, slots=True)
class Module:
    """A named, 1-based inclusive page range.

    Attributes:
        name: Display name, also used for the output filename.
        start: First page (1-based).
        end: Last page (1-based, inclusive).
    """

    name: str
    start: int
    end: int

    @property
    def page_count(self) -> int:
        """Return the number of pages covered by this range."""

        return self.end - self.start + 1

    @property
    def caption(self) -> str:
        """Return the human-readable page caption."""

        return f"Pages {self.start}–{self.end}"


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Outcome of one heading detection scan.

    Attributes:
        status: `detected`, `no_headings`, or `failed`.
        modules: Detected modules, `None` unless `status` is `detected`.
        message: User-facing status line.
    """

    status: str
    modules: tuple[Module, ...] | None
    message: str

    @property
    def succeeded(self) -> bool:
        """Return whether detection produced usable modules."""

        return self.status == "detected" and self.modules is not None


@dataclass(frozen=True, slots=True)
class ResolvedModules:
    """Modules chosen for one generation request.

    Attributes:
        source: `manual`, `detected`, or `default`.
        modules: Ordered modules before part splitting.
    """

    source: str
    modules: tuple[Module, ...]


@dataclass(frozen=True, slots=True)
class ModuleArtifact:
    """A module PDF written to the output directory.

    Attributes:
        order: 1-based position in the output batch.
        module: Page range and name of the part.
        filename: Output file name.
        path: Full path to the written PDF.
        page_count: Number of pages in the written PDF.
    """

    order: int
    module: Module
    filename: str
    path: Path
    page_count: int


@dataclass(frozen=True, slots=True)
class SplitManifest:
    """Record of one completed split run.

    Attributes:
        source_pdf: Input PDF path.
        total_pages: Page count of the input PDF.
        module_source: Which resolver path produced the modules.
        max_part_pages: Page cap applied by the part splitter.
        artifacts: Written module PDFs in order.
        manifest_path: Path of the JSON manifest, when written.
        extra: Additional metadata such as the detection message.
    """

    source_pdf: Path
    total_pages: int
    module_source: str
    max_part_pages: int
    artifacts: tuple[ModuleArtifact, ...]
    manifest_path: Path | None = None
    extra: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SplitPlan:
    """Resolved and part-split modules for one request, before extraction.

    Attributes:
        total_pages: Page count of the input PDF.
        resolved: Module source and modules before part splitting.
        parts: Final page-capped parts in output order.
        detection: Detection outcome when a scan ran for this request.
    """

    total_pages: int
    resolved: ResolvedModules
    parts: tuple[Module, ...]
    detection: DetectionResult | None = None
