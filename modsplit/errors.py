"""Domain exceptions for pipeline and CLI diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.datatypes import ModuleArtifact


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class OutputGenerationError(PipelineStageError):
    """Raised when extracting one module aborts the remaining output batch.

    Attributes:
        artifacts: Module PDFs written before the failing part.
    """

    def __init__(
        self,
        *,
        detail: str,
        artifacts: tuple[ModuleArtifact, ...] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(stage="extract", detail=detail, hint=hint)
        self.artifacts = artifacts


class ModuleInputError(ValueError):
    """Raised when one manual module line cannot be parsed or validated."""

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"Line {line_number}: {message}")
        self.line_number = line_number
