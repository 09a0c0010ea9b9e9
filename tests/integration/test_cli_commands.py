"""CLI tests for info, detect, plan, and split commands."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from modsplit.cli import app
from modsplit.pipeline import MANIFEST_FILENAME


def test_info_command_prints_page_count(textbook_pdf: Path) -> None:
    result = CliRunner().invoke(app, ["info", str(textbook_pdf)])

    assert result.exit_code == 0
    assert "textbook.pdf ·" in result.output
    assert "Pages: 8" in result.output


def test_detect_command_prints_editable_module_lines(
    textbook_pdf: Path, tmp_path: Path
) -> None:
    modules_path = tmp_path / "modules.txt"

    result = CliRunner().invoke(
        app, ["detect", str(textbook_pdf), "--write-modules", str(modules_path)]
    )

    assert result.exit_code == 0
    assert "Detected 3 modules from the PDF." in result.output
    assert "Unit 1: Cells and Tissues | 1-3" in result.output
    assert modules_path.read_text(encoding="utf-8") == (
        "Unit 1: Cells and Tissues | 1-3\n"
        "UNIT 2 - Genetics | 4-5\n"
        "Unit 3 Ecology | 6-8\n"
    )


def test_detect_command_reports_no_headings_without_failing(plain_pdf: Path) -> None:
    result = CliRunner().invoke(app, ["detect", str(plain_pdf)])

    assert result.exit_code == 0
    assert "No module headings found. Try manual entry or auto-split." in result.output


def test_plan_command_lists_parts_without_writing(long_pdf: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["plan", str(long_pdf), "--modules", "Mechanics | 1-30; | 31-60"],
    )

    assert result.exit_code == 0
    assert "Module source: manual" in result.output
    assert "1. Mechanics (Pages 1–25)" in result.output
    assert "2. Mechanics · Part 2 (Pages 26–30)" in result.output
    assert "3. Module 2 (Pages 31–55)" in result.output
    assert "4. Module 2 · Part 2 (Pages 56–60)" in result.output
    assert list(tmp_path.glob("*.pdf")) == [long_pdf]


def test_split_command_writes_detected_modules_and_manifest(
    textbook_pdf: Path, tmp_path: Path
) -> None:
    out = tmp_path / "modules"

    result = CliRunner().invoke(
        app, ["split", str(textbook_pdf), "--out", str(out), "--detect"]
    )

    assert result.exit_code == 0
    assert "[progress] command=split 1/6 stage=read" in result.output
    assert "Detected 3 modules from the PDF." in result.output
    assert "Module source: detected" in result.output
    assert "Unit 3 Ecology | Pages 6–8 |" in result.output
    payload = json.loads((out / MANIFEST_FILENAME).read_text(encoding="utf-8"))
    assert [entry["file"] for entry in payload["artifacts"]] == [
        "01-unit-1-cells-and-tissues.pdf",
        "02-unit-2---genetics.pdf",
        "03-unit-3-ecology.pdf",
    ]


def test_split_command_uses_modules_file_from_yaml_config(
    textbook_pdf: Path, tmp_path: Path
) -> None:
    modules_file = tmp_path / "ranges.txt"
    modules_file.write_text("Intro | 1-2\n\nRest | 3-8\n", encoding="utf-8")
    out = tmp_path / "from-config"
    config_path = tmp_path / "modsplit.yml"
    config_path.write_text(
        f"input_pdf: {textbook_pdf}\n"
        f"output_dir: {out}\n"
        f"modules_file: {modules_file}\n"
        "detect_headings: true\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["split", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "Module source: manual" in result.output
    assert (out / "01-intro.pdf").exists()
    assert (out / "02-rest.pdf").exists()


def test_split_command_max_part_pages_override(long_pdf: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = CliRunner().invoke(
        app, ["split", str(long_pdf), "--out", str(out), "--max-part-pages", "30"]
    )

    assert result.exit_code == 0
    assert sorted(path.name for path in out.glob("*.pdf")) == [
        "01-module-1.pdf",
        "02-module-2.pdf",
    ]
