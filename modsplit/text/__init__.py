"""Text-layer heuristics and module range logic.

This package contains line reconstruction, heading detection, module range
resolution, and output filename helpers.
"""

from .headings import HeadingDetector, modules_from_hits, sanitize_module_name
from .lines import build_lines_from_fragments
from .module_ranges import (
    MAX_PART_PAGES,
    build_default_modules,
    format_module_lines,
    parse_module_lines,
    resolve_modules,
    split_module_into_parts,
    split_modules_into_parts,
)

__all__ = [
    "HeadingDetector",
    "MAX_PART_PAGES",
    "build_default_modules",
    "build_lines_from_fragments",
    "format_module_lines",
    "modules_from_hits",
    "parse_module_lines",
    "resolve_modules",
    "sanitize_module_name",
    "split_module_into_parts",
    "split_modules_into_parts",
]
