"""Pipeline orchestration for modsplit.

Responsibilities:
- Define the stage order for detection, resolution, and extraction.
- Keep every request self-contained: manual text and detection results are
  passed in explicitly and each operation opens its own PDF reader.

Key types:
- `ModuleSplitPipeline`: orchestration facade used by the CLI.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from ..config import SplitterConfig
from ..errors import ModuleInputError, OutputGenerationError, PipelineStageError
from ..io.pdf_page_extractor import PdfPageRangeExtractor
from ..io.pdf_text_layer import PdfTextLayer
from ..io.storage import ArtifactStore
from ..models.datatypes import (
    DetectionResult,
    Module,
    ModuleArtifact,
    ResolvedModules,
    SplitManifest,
    SplitPlan,
)
from ..telemetry.logger import RunLogger
from ..text.headings import HeadingDetector
from ..text.module_ranges import has_manual_input, resolve_modules, split_modules_into_parts
from ..text.slug import module_filename
from .telemetry import PipelineTelemetryMixin

MANIFEST_FILENAME = "split_manifest.json"

_NO_HEADINGS_MESSAGE = "No module headings found. Try manual entry or auto-split."
_MANUAL_FORMAT_HINT = "Use one `<name> | <start>-<end>` entry per line, e.g. `Unit 1 | 1-12`."


@dataclass(frozen=True, slots=True)
class _LoadedSource:
    """Immutable source bytes and their page count."""

    data: bytes
    total_pages: int


class ModuleSplitPipeline(PipelineTelemetryMixin):
    """Coordinate all stages for a single module split run."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
        text_layer: PdfTextLayer | None = None,
        extractor: PdfPageRangeExtractor | None = None,
    ) -> None:
        """Initialize optional runtime logging, progress hooks, and PDF collaborators."""

        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback
        self._text_layer = text_layer or PdfTextLayer()
        self._extractor = extractor or PdfPageRangeExtractor()

    def page_count(self, config: SplitterConfig) -> int:
        """Return the page count of the configured input PDF."""

        return self._load_source(config.input_pdf).total_pages

    def load_manual_text(self, config: SplitterConfig, manual_text: str | None = None) -> str | None:
        """Return explicit manual text, or the contents of `config.modules_file`."""

        if manual_text is not None:
            return manual_text
        if config.modules_file is None:
            return None
        try:
            return config.modules_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise PipelineStageError(
                stage="resolve",
                detail=f"Failed to read modules file `{config.modules_file}`: {exc}",
                hint="Provide an existing text file via `--modules-file <path>`.",
            ) from exc

    def detect(self, config: SplitterConfig) -> DetectionResult:
        """Scan the input PDF for module headings.

        Read errors of the input file raise `PipelineStageError`. Errors while
        scanning pages do not raise; they produce a `failed` result with no
        modules so callers can fall back to manual or default splitting.
        """

        self._validate_config(config)
        source = self._run_stage("read", lambda: self._load_source(config.input_pdf))
        return self._detect_source(source, config)

    def plan(
        self,
        config: SplitterConfig,
        manual_text: str | None = None,
        detected: Sequence[Module] | None = None,
    ) -> SplitPlan:
        """Resolve and part-split modules without writing any output."""

        self._validate_config(config)
        source = self._run_stage("read", lambda: self._load_source(config.input_pdf))
        return self._plan_source(source, config, manual_text, detected)

    def plan_request(self, config: SplitterConfig, manual_text: str | None = None) -> SplitPlan:
        """Plan one CLI request, running detection first when configured and needed."""

        self._validate_config(config)
        manual = self.load_manual_text(config, manual_text)
        source = self._run_stage("read", lambda: self._load_source(config.input_pdf))
        return self._plan_for_request(source, config, manual)

    def generate(
        self,
        config: SplitterConfig,
        manual_text: str | None = None,
        detected: Sequence[Module] | None = None,
    ) -> SplitManifest:
        """Resolve modules, write one PDF per part, and write the split manifest.

        Raises:
            PipelineStageError: If the input cannot be read or manual text is invalid.
            OutputGenerationError: If a part cannot be extracted; earlier parts stay written.
        """

        self._validate_config(config)
        source = self._run_stage("read", lambda: self._load_source(config.input_pdf))
        plan = self._plan_source(source, config, manual_text, detected)
        return self._write_outputs(source, config, plan)

    def run(self, config: SplitterConfig, manual_text: str | None = None) -> SplitManifest:
        """Run one CLI split request end to end.

        Manual text comes from `manual_text` or `config.modules_file`. Detection
        runs only when `config.detect_headings` is set and no manual text is given.
        """

        self._validate_config(config)
        manual = self.load_manual_text(config, manual_text)
        source = self._run_stage("read", lambda: self._load_source(config.input_pdf))
        plan = self._plan_for_request(source, config, manual)
        return self._write_outputs(source, config, plan)

    def _validate_config(self, config: SplitterConfig) -> None:
        """Validate config and map value errors to a stage error."""

        try:
            config.validate()
        except ValueError as exc:
            raise PipelineStageError(
                stage="config",
                detail=str(exc),
                hint="Fix config values and rerun.",
            ) from exc

    def _load_source(self, input_pdf: Path) -> _LoadedSource:
        """Read the input PDF bytes once and count pages."""

        try:
            data = input_pdf.read_bytes()
        except OSError as exc:
            raise PipelineStageError(
                stage="read",
                detail=f"Failed to read input PDF `{input_pdf}`: {exc}",
                hint="Verify the input file exists and is readable.",
            ) from exc
        try:
            total_pages = self._text_layer.page_count(data)
        except Exception as exc:
            raise PipelineStageError(
                stage="read",
                detail=f"Failed to parse input PDF `{input_pdf}`: {exc}",
                hint="Verify the file is a valid, unencrypted PDF.",
            ) from exc
        return _LoadedSource(data=data, total_pages=total_pages)

    def _plan_for_request(
        self, source: _LoadedSource, config: SplitterConfig, manual_text: str | None
    ) -> SplitPlan:
        """Plan a request, attaching the detection outcome when a scan ran."""

        detection = self._detection_for_request(source, config, manual_text)
        plan = self._plan_source(
            source,
            config,
            manual_text,
            detection.modules if detection is not None else None,
        )
        return SplitPlan(
            total_pages=plan.total_pages,
            resolved=plan.resolved,
            parts=plan.parts,
            detection=detection,
        )

    def _detection_for_request(
        self, source: _LoadedSource, config: SplitterConfig, manual_text: str | None
    ) -> DetectionResult | None:
        """Run detection when configured, skipping it when manual text takes priority."""

        if not config.detect_headings or has_manual_input(manual_text):
            return None
        return self._detect_source(source, config)

    def _detect_source(self, source: _LoadedSource, config: SplitterConfig) -> DetectionResult:
        """Scan loaded source bytes for headings and classify the outcome."""

        detector = HeadingDetector(
            top_band_height=config.top_band_height,
            line_tolerance=config.line_tolerance,
        )
        self._on_stage_start("detect")
        try:
            modules = detector.detect(
                self._text_layer.iter_page_fragments(source.data),
                source.total_pages,
            )
        except Exception as exc:
            self._on_stage_failure("detect", exc)
            return DetectionResult(
                status="failed",
                modules=None,
                message=f"Unable to detect modules from this PDF: {exc}",
            )

        if not modules:
            self._on_stage_notice("detect", "no_headings")
            return DetectionResult(status="no_headings", modules=None, message=_NO_HEADINGS_MESSAGE)

        self._on_stage_complete("detect", modules=len(modules))
        return DetectionResult(
            status="detected",
            modules=tuple(modules),
            message=f"Detected {len(modules)} modules from the PDF.",
        )

    def _plan_source(
        self,
        source: _LoadedSource,
        config: SplitterConfig,
        manual_text: str | None,
        detected: Sequence[Module] | None,
    ) -> SplitPlan:
        """Resolve the module source and cap every module at the part size."""

        resolved = self._run_stage(
            "resolve",
            lambda: self._resolve(manual_text, detected, source.total_pages, config),
        )
        parts = self._run_stage(
            "split",
            lambda: split_modules_into_parts(resolved.modules, config.max_part_pages),
        )
        return SplitPlan(
            total_pages=source.total_pages,
            resolved=resolved,
            parts=tuple(parts),
        )

    def _resolve(
        self,
        manual_text: str | None,
        detected: Sequence[Module] | None,
        total_pages: int,
        config: SplitterConfig,
    ) -> ResolvedModules:
        """Resolve modules and map manual input errors to a stage error."""

        try:
            return resolve_modules(manual_text, detected, total_pages, config.max_part_pages)
        except ModuleInputError as exc:
            raise PipelineStageError(
                stage="resolve",
                detail=str(exc),
                hint=_MANUAL_FORMAT_HINT,
            ) from exc

    def _write_outputs(
        self, source: _LoadedSource, config: SplitterConfig, plan: SplitPlan
    ) -> SplitManifest:
        """Extract every part and persist the manifest."""

        store = ArtifactStore(config.output_dir)
        artifacts = self._run_stage(
            "extract", lambda: self._extract_parts(source, plan.parts, store)
        )
        extra = dict(config.extra)
        if plan.detection is not None:
            extra["detection_status"] = plan.detection.status
            extra["detection_message"] = plan.detection.message
        manifest = SplitManifest(
            source_pdf=config.input_pdf,
            total_pages=plan.total_pages,
            module_source=plan.resolved.source,
            max_part_pages=config.max_part_pages,
            artifacts=artifacts,
            extra=extra,
        )
        manifest_path = self._run_stage(
            "manifest",
            lambda: store.save_json(Path(MANIFEST_FILENAME), manifest_payload(manifest)),
        )
        return SplitManifest(
            source_pdf=manifest.source_pdf,
            total_pages=manifest.total_pages,
            module_source=manifest.module_source,
            max_part_pages=manifest.max_part_pages,
            artifacts=manifest.artifacts,
            manifest_path=manifest_path,
            extra=manifest.extra,
        )

    def _extract_parts(
        self, source: _LoadedSource, parts: Sequence[Module], store: ArtifactStore
    ) -> tuple[ModuleArtifact, ...]:
        """Write parts one by one, stopping at the first failure."""

        reader = PdfReader(BytesIO(source.data))
        artifacts: list[ModuleArtifact] = []
        for order, part in enumerate(parts, start=1):
            filename = module_filename(part.name, order)
            try:
                pdf_bytes = self._extractor.extract(reader, part.start, part.end)
                written_pages = len(PdfReader(BytesIO(pdf_bytes)).pages)
                path = store.save_pdf(Path(filename), pdf_bytes)
            except Exception as exc:
                raise OutputGenerationError(
                    detail=f"Failed to extract `{part.name}` ({part.caption}): {exc}",
                    artifacts=tuple(artifacts),
                    hint="Earlier module PDFs were kept; fix the range and rerun.",
                ) from exc
            artifacts.append(
                ModuleArtifact(
                    order=order,
                    module=part,
                    filename=filename,
                    path=path,
                    page_count=written_pages,
                )
            )
        return tuple(artifacts)


def manifest_payload(manifest: SplitManifest) -> dict[str, object]:
    """Serialize a split manifest to a JSON-compatible payload."""

    return {
        "source_pdf": str(manifest.source_pdf),
        "total_pages": manifest.total_pages,
        "module_source": manifest.module_source,
        "max_part_pages": manifest.max_part_pages,
        "artifacts": [
            {
                "order": artifact.order,
                "name": artifact.module.name,
                "start": artifact.module.start,
                "end": artifact.module.end,
                "caption": artifact.module.caption,
                "file": artifact.filename,
                "page_count": artifact.page_count,
            }
            for artifact in manifest.artifacts
        ],
        "extra": dict(manifest.extra),
    }
