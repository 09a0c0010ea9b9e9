"""Module range parsing, resolution, and part splitting.

Responsibilities:
- Parse manual `<name>? | <start>-<end>` module lines with line-numbered errors.
- Pick the active module source (manual text > detected modules > even split).
- Cap every module at a maximum page count by splitting it into parts.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from ..errors import ModuleInputError
from ..models.datatypes import Module, ResolvedModules

MAX_PART_PAGES = 25

_RANGE_RE = re.compile(r"([0-9]+)\s*[-–—]\s*([0-9]+)")


def non_blank_lines(text: str | Iterable[str] | None) -> list[str]:
    """Return stripped non-blank lines from text or an iterable of lines."""

    if text is None:
        return []
    raw_lines = text.splitlines() if isinstance(text, str) else list(text)
    return [line.strip() for line in raw_lines if line.strip()]


def has_manual_input(text: str | Iterable[str] | None) -> bool:
    """Return whether manual module text contains at least one non-blank line."""

    return bool(non_blank_lines(text))


def parse_module_lines(lines: str | Iterable[str]) -> list[Module]:
    """Parse manual module lines into modules.

    Blank lines are dropped before numbering, so error line numbers count
    non-blank lines only.

    Args:
        lines: Raw text or an iterable of raw lines.

    Returns:
        Modules in input order.

    Raises:
        ModuleInputError: If a line has a missing, malformed, or invalid range.
    """

    modules: list[Module] = []
    for line_number, line in enumerate(non_blank_lines(lines), start=1):
        name_part, _, range_part = line.partition("|")
        name_part = name_part.strip()
        range_part = range_part.strip()
        if not range_part:
            raise ModuleInputError(line_number, "Missing page range.")

        match = _RANGE_RE.search(range_part)
        if match is None:
            raise ModuleInputError(line_number, "Invalid range format.")

        start = int(match.group(1))
        end = int(match.group(2))
        if start < 1 or end < start:
            raise ModuleInputError(line_number, "Invalid page range.")

        modules.append(
            Module(
                name=name_part or f"Module {len(modules) + 1}",
                start=start,
                end=end,
            )
        )
    return modules


def validate_manual_modules(modules: Sequence[Module], total_pages: int) -> None:
    """Reject manual modules that leave the document or overlap an earlier line.

    Module positions map to 1-based line numbers of the parsed input.

    Raises:
        ModuleInputError: On the first out-of-bounds or overlapping range.
    """

    for line_number, module in enumerate(modules, start=1):
        if module.end > total_pages:
            raise ModuleInputError(
                line_number,
                f"Page range {module.start}-{module.end} exceeds the document's "
                f"{total_pages} pages.",
            )
        for previous_number, previous in enumerate(modules[: line_number - 1], start=1):
            if module.start <= previous.end and previous.start <= module.end:
                raise ModuleInputError(
                    line_number,
                    f"Page range {module.start}-{module.end} overlaps line {previous_number}.",
                )


def build_default_modules(page_count: int, max_part_pages: int = MAX_PART_PAGES) -> list[Module]:
    """Split `page_count` pages into `Module {k}` ranges of `max_part_pages` pages."""

    modules: list[Module] = []
    page = 1
    index = 1
    while page <= page_count:
        end = min(page + max_part_pages - 1, page_count)
        modules.append(Module(name=f"Module {index}", start=page, end=end))
        page = end + 1
        index += 1
    return modules


def split_module_into_parts(module: Module, max_part_pages: int = MAX_PART_PAGES) -> list[Module]:
    """Split one module into consecutive parts of at most `max_part_pages` pages.

    The first part keeps the module name; later parts are suffixed
    `· Part {k}`.
    """

    parts: list[Module] = []
    part_start = module.start
    part_index = 1
    while part_start <= module.end:
        part_end = min(part_start + max_part_pages - 1, module.end)
        name = module.name if part_index == 1 else f"{module.name} · Part {part_index}"
        parts.append(Module(name=name, start=part_start, end=part_end))
        part_start = part_end + 1
        part_index += 1
    return parts


def split_modules_into_parts(
    modules: Iterable[Module], max_part_pages: int = MAX_PART_PAGES
) -> list[Module]:
    """Apply `split_module_into_parts` to every module, preserving order."""

    parts: list[Module] = []
    for module in modules:
        parts.extend(split_module_into_parts(module, max_part_pages))
    return parts


def resolve_modules(
    manual_text: str | Iterable[str] | None,
    detected: Sequence[Module] | None,
    total_pages: int,
    max_part_pages: int = MAX_PART_PAGES,
) -> ResolvedModules:
    """Choose the module source for one generation request.

    Non-blank manual text always wins, then a successful detection result,
    then the default even split.

    Raises:
        ModuleInputError: If manual text is malformed, out of bounds, or overlapping.
    """

    if has_manual_input(manual_text):
        modules = parse_module_lines(manual_text)
        validate_manual_modules(modules, total_pages)
        return ResolvedModules(source="manual", modules=tuple(modules))
    if detected is not None:
        return ResolvedModules(source="detected", modules=tuple(detected))
    return ResolvedModules(
        source="default",
        modules=tuple(build_default_modules(total_pages, max_part_pages)),
    )


def format_module_lines(modules: Iterable[Module]) -> str:
    """Render modules in the manual `<name> | <start>-<end>` line format."""

    return "\n".join(f"{module.name} | {module.start}-{module.end}" for module in modules)
