"""Unit tests for heading detection over page fragments."""

from __future__ import annotations

from modsplit.models.datatypes import HeadingHit, Module, TextFragment
from modsplit.text.headings import HeadingDetector, modules_from_hits, sanitize_module_name


def _page(*lines: tuple[str, float]) -> list[TextFragment]:
    return [TextFragment(text=text, x=72, y=y) for text, y in lines]


def test_sanitize_module_name_collapses_whitespace_and_falls_back() -> None:
    assert sanitize_module_name("  Unit   4:\tWaves ", 1) == "Unit 4: Waves"
    assert sanitize_module_name(" \t ", 3) == "Module 3"


def test_find_heading_matches_supported_keywords_case_insensitively() -> None:
    detector = HeadingDetector()

    assert detector.find_heading(_page(("MODULE 3: Forces", 780))) == "MODULE 3: Forces"
    assert detector.find_heading(_page(("unit 12 – Optics", 780))) == "unit 12 – Optics"
    assert detector.find_heading(_page(("Chapter 7", 780))) == "Chapter 7"


def test_find_heading_requires_number_after_keyword() -> None:
    detector = HeadingDetector()

    assert detector.find_heading(_page(("Chapter Seven", 780))) is None
    assert detector.find_heading(_page(("Units 3 and 4", 780))) is None
    assert detector.find_heading(_page(("Module 3b Forces", 780))) is None


def test_find_heading_ignores_lines_outside_top_band() -> None:
    detector = HeadingDetector(top_band_height=60)
    page = _page(
        ("Running header", 800),
        ("Chapter 2: Below the band", 739),
    )

    assert detector.find_heading(page) is None


def test_find_heading_includes_line_at_band_edge() -> None:
    detector = HeadingDetector(top_band_height=60)
    page = _page(
        ("Running header", 800),
        ("Chapter 2: On the edge", 740),
    )

    assert detector.find_heading(page) == "Chapter 2: On the edge"


def test_scan_records_at_most_one_hit_per_page() -> None:
    detector = HeadingDetector()
    pages = [
        _page(("Unit 1: Intro", 780), ("Unit 2: Next", 764)),
        _page(("Body only", 780)),
        [],
        _page(("Chapter 3", 780)),
    ]

    hits = detector.scan(pages)

    assert hits == [
        HeadingHit(name="Unit 1: Intro", start=1),
        HeadingHit(name="Chapter 3", start=4),
    ]


def test_modules_from_hits_are_contiguous_and_total_covering() -> None:
    hits = [
        HeadingHit(name="Unit 3", start=9),
        HeadingHit(name="Unit 1", start=1),
        HeadingHit(name="Unit 2", start=4),
    ]

    modules = modules_from_hits(hits, total_pages=12)

    assert modules == [
        Module(name="Unit 1", start=1, end=3),
        Module(name="Unit 2", start=4, end=8),
        Module(name="Unit 3", start=9, end=12),
    ]
    for previous, current in zip(modules, modules[1:]):
        assert current.start == previous.end + 1


def test_modules_from_hits_keeps_single_page_module_for_adjacent_hits() -> None:
    hits = [HeadingHit(name="A", start=2), HeadingHit(name="B", start=3)]

    modules = modules_from_hits(hits, total_pages=3)

    assert modules == [Module(name="A", start=2, end=2), Module(name="B", start=3, end=3)]


def test_detect_returns_empty_list_without_hits() -> None:
    detector = HeadingDetector()

    assert detector.detect([_page(("Preface", 780))], total_pages=1) == []


def test_find_heading_requires_ascii_digits() -> None:
    detector = HeadingDetector()

    assert detector.find_heading(_page(("Chapter ٣ Waves", 780))) is None
    assert detector.find_heading(_page(("Unit ３ Optics", 780))) is None
