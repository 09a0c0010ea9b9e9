"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
module plans, detection results, and written module PDFs.
"""

from __future__ import annotations

from typing import Iterable, NoReturn

import typer

from .errors import OutputGenerationError, PipelineStageError
from .models.datatypes import DetectionResult, Module, ModuleArtifact, SplitManifest


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, OutputGenerationError) and exc.artifacts:
        echo_artifacts(exc.artifacts)
    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_detection(detection: DetectionResult | None) -> None:
    """Print a detection status line when a scan ran."""

    if detection is None:
        return
    color = typer.colors.GREEN if detection.succeeded else typer.colors.YELLOW
    typer.secho(detection.message, fg=color)


def echo_module_plan(parts: Iterable[Module]) -> None:
    """Print one `name (Pages a–b)` row per planned part, or the empty-state line."""

    rows = list(parts)
    if not rows:
        typer.echo("No modules generated.")
        return
    for order, part in enumerate(rows, start=1):
        typer.echo(f"{order}. {part.name} ({part.caption})")


def echo_artifacts(artifacts: Iterable[ModuleArtifact]) -> None:
    """Print written module PDFs with their page captions."""

    for artifact in artifacts:
        typer.echo(f"{artifact.module.name} | {artifact.module.caption} | {artifact.path}")


def echo_split_summary(manifest: SplitManifest) -> None:
    """Print module source, written PDFs, and manifest location."""

    typer.echo(f"Module source: {manifest.module_source}")
    if not manifest.artifacts:
        typer.echo("No modules generated.")
    else:
        echo_artifacts(manifest.artifacts)
    typer.echo(f"Manifest: {manifest.manifest_path or '(not written)'}")
