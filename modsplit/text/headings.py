"""Heading detection over reconstructed page lines.

Responsibilities:
- Find at most one `Module/Unit/Chapter N` heading near the top of each page.
- Turn sorted heading hits into contiguous, total-covering modules.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from ..models.datatypes import HeadingHit, Line, Module, TextFragment
from .lines import DEFAULT_LINE_TOLERANCE, build_lines_from_fragments

DEFAULT_TOP_BAND_HEIGHT = 60.0

_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_module_name(label: str, fallback_index: int) -> str:
    """Collapse whitespace in a label, falling back to `Module {fallback_index}`."""

    clean = _WHITESPACE_RE.sub(" ", label).strip()
    return clean or f"Module {fallback_index}"


def modules_from_hits(hits: Sequence[HeadingHit], total_pages: int) -> list[Module]:
    """Close each heading hit's range at the page before the next hit.

    The last hit runs to `total_pages`.
    """

    ordered = sorted(hits, key=lambda hit: hit.start)
    modules: list[Module] = []
    for index, hit in enumerate(ordered):
        if index < len(ordered) - 1:
            end = max(hit.start, ordered[index + 1].start - 1)
        else:
            end = total_pages
        modules.append(Module(name=hit.name, start=hit.start, end=end))
    return modules


class HeadingDetector:
    """Scan page text layers for module headings."""

    _HEADING_RE = re.compile(
        r"^(module|unit|chapter)\s+([0-9]+)\b[:\-–]?\s*(.*)$",
        re.IGNORECASE,
    )

    def __init__(
        self,
        top_band_height: float = DEFAULT_TOP_BAND_HEIGHT,
        line_tolerance: float = DEFAULT_LINE_TOLERANCE,
    ) -> None:
        self.top_band_height = top_band_height
        self.line_tolerance = line_tolerance

    def top_band(self, lines: Sequence[Line]) -> list[Line]:
        """Return lines within `top_band_height` of the topmost line, in given order."""

        if not lines:
            return []
        max_y = max(line.y for line in lines)
        return [line for line in lines if line.y >= max_y - self.top_band_height]

    def find_heading(self, fragments: Iterable[TextFragment]) -> str | None:
        """Return the first heading text in a page's top band, if any."""

        lines = build_lines_from_fragments(fragments, tolerance=self.line_tolerance)
        for line in self.top_band(lines):
            match = self._HEADING_RE.match(line.text)
            if match:
                return match.group(0)
        return None

    def scan(self, pages: Iterable[Iterable[TextFragment]]) -> list[HeadingHit]:
        """Scan pages in order and return one hit per page that has a heading.

        Errors raised while iterating `pages` propagate; callers decide how to
        report an aborted scan.
        """

        hits: list[HeadingHit] = []
        for page_number, fragments in enumerate(pages, start=1):
            label = self.find_heading(fragments)
            if label is None:
                continue
            hits.append(
                HeadingHit(
                    name=sanitize_module_name(label, len(hits) + 1),
                    start=page_number,
                )
            )
        return hits

    def detect(
        self, pages: Iterable[Iterable[TextFragment]], total_pages: int
    ) -> list[Module]:
        """Return detected modules, or an empty list when no heading was found."""

        return modules_from_hits(self.scan(pages), total_pages)
