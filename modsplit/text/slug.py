"""Filename helpers for module PDF outputs."""

from __future__ import annotations

import re

_UNSAFE_FILENAME_RE = re.compile(r"[<>:\"|?*/\\\x00-\x1f]")


def module_filename(name: str, order: int) -> str:
    """Return `NN-<slug>.pdf` for a module name and its 1-based batch order.

    The slug replaces whitespace runs with `-` and lowercases, keeping other
    characters such as `·` intact; characters unsafe in filenames are dropped.
    """

    slug = re.sub(r"\s+", "-", name.strip()).lower()
    slug = _UNSAFE_FILENAME_RE.sub("", slug).strip(".-")
    return f"{order:02d}-{slug or 'module'}.pdf"
