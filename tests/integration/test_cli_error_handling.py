"""CLI error-handling tests for concise diagnostics."""

from __future__ import annotations

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from modsplit.cli import app
from modsplit.io.pdf_text_layer import PdfTextLayer


def test_split_command_reports_invalid_manual_line(textbook_pdf: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app,
        [
            "split",
            str(textbook_pdf),
            "--out",
            str(tmp_path / "out"),
            "--modules",
            "Intro | 1-2; ; Broken",
        ],
    )

    assert result.exit_code == 1
    assert "split failed at stage `resolve`: Line 2: Missing page range." in result.output
    assert "Hint: Use one `<name> | <start>-<end>` entry per line" in result.output
    assert not (tmp_path / "out").exists()


def test_split_command_rejects_both_manual_sources(textbook_pdf: Path, tmp_path: Path) -> None:
    modules_file = tmp_path / "modules.txt"
    modules_file.write_text("A | 1-2\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        [
            "split",
            str(textbook_pdf),
            "--modules",
            "A | 1-2",
            "--modules-file",
            str(modules_file),
        ],
    )

    assert result.exit_code == 1
    assert "`--modules` and `--modules-file` cannot be used together." in result.output


def test_split_command_reports_missing_input(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["split", str(tmp_path / "missing.pdf")])

    assert result.exit_code == 1
    assert "split failed at stage `read`" in result.output
    assert "Hint: Verify the input file exists and is readable." in result.output


def test_split_command_requires_input_without_config() -> None:
    result = CliRunner().invoke(app, ["split"])

    assert result.exit_code == 1
    assert "Input PDF path is required when `--config` is not provided." in result.output


def test_split_command_reports_missing_config_file() -> None:
    result = CliRunner().invoke(app, ["split", "--config", "missing-modsplit.yaml"])

    assert result.exit_code == 1
    assert "split failed at stage `config`" in result.output
    assert "Config file not found: `missing-modsplit.yaml`." in result.output


def test_detect_command_fails_when_scan_errors(
    textbook_pdf: Path, monkeypatch: MonkeyPatch
) -> None:
    def _failing_pages(self: PdfTextLayer, data: bytes):
        raise ValueError("broken text layer")
        yield []

    monkeypatch.setattr(PdfTextLayer, "iter_page_fragments", _failing_pages)

    result = CliRunner().invoke(app, ["detect", str(textbook_pdf)])

    assert result.exit_code == 1
    assert "detect failed at stage `detect`: Unable to detect modules from this PDF" in (
        result.output
    )


def test_split_command_falls_back_when_detection_fails(
    textbook_pdf: Path, tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    def _failing_pages(self: PdfTextLayer, data: bytes):
        raise ValueError("broken text layer")
        yield []

    monkeypatch.setattr(PdfTextLayer, "iter_page_fragments", _failing_pages)
    out = tmp_path / "out"

    result = CliRunner().invoke(app, ["split", str(textbook_pdf), "--out", str(out), "--detect"])

    assert result.exit_code == 0
    assert "Unable to detect modules from this PDF: broken text layer" in result.output
    assert "Module source: default" in result.output
    assert (out / "01-module-1.pdf").exists()
