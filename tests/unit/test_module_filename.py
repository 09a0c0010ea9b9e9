"""Unit tests for module output filenames."""

from __future__ import annotations

from modsplit.text.slug import module_filename


def test_module_filename_lowercases_and_hyphenates_whitespace() -> None:
    assert module_filename("Unit 2  Genetics", 3) == "03-unit-2-genetics.pdf"


def test_module_filename_keeps_part_marker_and_drops_unsafe_characters() -> None:
    assert module_filename("Unit 1: Cells · Part 2", 12) == "12-unit-1-cells-·-part-2.pdf"
    assert module_filename("Labs/Notes", 1) == "01-labsnotes.pdf"


def test_module_filename_falls_back_for_empty_slug() -> None:
    assert module_filename(" ?? ", 4) == "04-module.pdf"
