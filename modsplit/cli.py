"""Command-line interface for modsplit.

Responsibilities:
- Expose user-facing commands for inspection, detection, planning, and splitting.
- Convert CLI arguments into `SplitterConfig` and execute the pipeline.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_detection,
    echo_module_plan,
    echo_split_summary,
    exit_with_command_error,
)
from .config import ConfigLoader, SplitterConfig
from .errors import PipelineStageError
from .pipeline import ModuleSplitPipeline
from .telemetry.logger import RunLogger
from .text.module_ranges import format_module_lines

app = typer.Typer(
    name="modsplit",
    no_args_is_help=True,
    help="Split textbook PDFs into module PDFs.",
)


class SplitProgressIndicator:
    """Render deterministic per-stage progress lines for long-running commands."""

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        typer.echo(
            f"[progress] command={self._command_name} "
            f"{stage_index}/{stage_total} stage={stage_name}"
        )


def _load_yaml_config(config_path: Path | None) -> SplitterConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_command_config(
    config_file: Path | None,
    input_pdf: Path | None,
    out: Path | None = None,
    max_part_pages: int | None = None,
    detect: bool | None = None,
    modules_file: Path | None = None,
) -> SplitterConfig:
    """Resolve effective command config from YAML defaults and explicit CLI overrides."""

    loaded_config = _load_yaml_config(config_file)

    if loaded_config is None:
        if input_pdf is None:
            raise PipelineStageError(
                stage="config",
                detail="Input PDF path is required when `--config` is not provided.",
                hint="Pass `<input.pdf>` or use `--config <path.yaml>` with `input_pdf`.",
            )
        loaded_config = SplitterConfig(input_pdf=input_pdf)

    return SplitterConfig(
        input_pdf=input_pdf if input_pdf is not None else loaded_config.input_pdf,
        output_dir=out if out is not None else loaded_config.output_dir,
        max_part_pages=(
            max_part_pages if max_part_pages is not None else loaded_config.max_part_pages
        ),
        line_tolerance=loaded_config.line_tolerance,
        top_band_height=loaded_config.top_band_height,
        detect_headings=detect if detect is not None else loaded_config.detect_headings,
        modules_file=modules_file if modules_file is not None else loaded_config.modules_file,
        extra=dict(loaded_config.extra),
    )


def _reject_conflicting_module_inputs(modules: str | None, modules_file: Path | None) -> None:
    """Allow at most one manual module source per invocation."""

    if modules is not None and modules_file is not None:
        raise PipelineStageError(
            stage="config",
            detail="`--modules` and `--modules-file` cannot be used together.",
            hint="Pass module lines inline or from a file, not both.",
        )


def _inline_modules(modules: str | None) -> str | None:
    """Turn `;`-separated inline module entries into manual text lines."""

    if modules is None:
        return None
    return "\n".join(modules.split(";"))


InputPdfArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to source PDF. Required unless provided by `--config`."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with command defaults."),
]
ModulesOption = Annotated[
    str | None,
    typer.Option(
        "--modules",
        help="Manual modules, `;`-separated: `Intro | 1-12; Unit 2 | 13-40`.",
    ),
]
ModulesFileOption = Annotated[
    Path | None,
    typer.Option(
        "--modules-file",
        help="Text file with one `<name> | <start>-<end>` module per line.",
    ),
]
DetectOption = Annotated[
    bool | None,
    typer.Option(
        "--detect/--no-detect",
        help="Detect `Module/Unit/Chapter N` headings when no manual modules are given.",
    ),
]
MaxPartPagesOption = Annotated[
    int | None,
    typer.Option("--max-part-pages", help="Maximum pages per output PDF (default 25)."),
]


@app.command("info")
def info_command(
    input_pdf: Annotated[Path, typer.Argument(help="Path to source PDF.")],
) -> None:
    """Print file size and page count of a PDF."""

    try:
        pipeline = ModuleSplitPipeline()
        total_pages = pipeline.page_count(SplitterConfig(input_pdf=input_pdf))
        size_mb = input_pdf.stat().st_size / 1024 / 1024
    except Exception as exc:
        exit_with_command_error("info", exc)

    typer.echo(f"{input_pdf.name} · {size_mb:.2f} MB")
    typer.echo(f"Pages: {total_pages}")


@app.command("detect")
def detect_command(
    input_pdf: InputPdfArgument = None,
    config_file: ConfigOption = None,
    write_modules: Annotated[
        Path | None,
        typer.Option(
            "--write-modules",
            help="Write detected modules in `--modules-file` format to this path.",
        ),
    ] = None,
) -> None:
    """Detect module headings and print them as editable module lines."""

    try:
        config = _resolve_command_config(config_file=config_file, input_pdf=input_pdf)
        pipeline = ModuleSplitPipeline(run_logger=RunLogger())
        detection = pipeline.detect(config)
        if detection.status == "failed":
            raise PipelineStageError(
                stage="detect",
                detail=detection.message,
                hint="Enter modules manually with `--modules` or rely on the default split.",
            )
        if detection.modules and write_modules is not None:
            write_modules.write_text(
                format_module_lines(detection.modules) + "\n", encoding="utf-8"
            )
    except Exception as exc:
        exit_with_command_error("detect", exc)

    echo_detection(detection)
    if detection.modules:
        typer.echo(format_module_lines(detection.modules))
        if write_modules is not None:
            typer.echo(f"Modules file: {write_modules}")


@app.command("plan")
def plan_command(
    input_pdf: InputPdfArgument = None,
    config_file: ConfigOption = None,
    modules: ModulesOption = None,
    modules_file: ModulesFileOption = None,
    detect: DetectOption = None,
    max_part_pages: MaxPartPagesOption = None,
) -> None:
    """Print the module parts a split would write, without writing files."""

    try:
        _reject_conflicting_module_inputs(modules, modules_file)
        config = _resolve_command_config(
            config_file=config_file,
            input_pdf=input_pdf,
            max_part_pages=max_part_pages,
            detect=detect,
            modules_file=modules_file,
        )
        pipeline = ModuleSplitPipeline()
        plan = pipeline.plan_request(config, manual_text=_inline_modules(modules))
    except Exception as exc:
        exit_with_command_error("plan", exc)

    echo_detection(plan.detection)
    typer.echo(f"Pages: {plan.total_pages}")
    typer.echo(f"Module source: {plan.resolved.source}")
    echo_module_plan(plan.parts)


@app.command("split")
def split_command(
    input_pdf: InputPdfArgument = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory (overrides config file value)."),
    ] = None,
    config_file: ConfigOption = None,
    modules: ModulesOption = None,
    modules_file: ModulesFileOption = None,
    detect: DetectOption = None,
    max_part_pages: MaxPartPagesOption = None,
) -> None:
    """Split a PDF into module PDFs and write a split manifest."""

    try:
        _reject_conflicting_module_inputs(modules, modules_file)
        config = _resolve_command_config(
            config_file=config_file,
            input_pdf=input_pdf,
            out=out,
            max_part_pages=max_part_pages,
            detect=detect,
            modules_file=modules_file,
        )
        progress = SplitProgressIndicator(command_name="split")
        pipeline = ModuleSplitPipeline(
            run_logger=RunLogger(),
            stage_progress_callback=progress.on_stage_start,
        )
        manifest = pipeline.run(config, manual_text=_inline_modules(modules))
    except Exception as exc:
        exit_with_command_error("split", exc)

    detection_message = manifest.extra.get("detection_message")
    if detection_message:
        typer.echo(detection_message)
    echo_split_summary(manifest)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
