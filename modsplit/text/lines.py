"""Visual line reconstruction from positioned text fragments.

Responsibilities:
- Order fragments top-to-bottom, left-to-right in y-up page space.
- Group fragments whose baselines fall within a fixed tolerance.
"""

from __future__ import annotations

from typing import Iterable

from ..models.datatypes import Line, TextFragment

DEFAULT_LINE_TOLERANCE = 4.0


def build_lines_from_fragments(
    fragments: Iterable[TextFragment], tolerance: float = DEFAULT_LINE_TOLERANCE
) -> list[Line]:
    """Group positioned fragments into visual lines.

    A fragment joins the first existing line whose baseline differs by less than
    `tolerance`, not the nearest one, so closely spaced lines can chain together.
    Lines are returned in creation order.
    """

    ordered = sorted(
        (fragment for fragment in fragments if fragment.text and fragment.text.strip()),
        key=lambda fragment: (-fragment.y, fragment.x),
    )

    lines: list[Line] = []
    for fragment in ordered:
        existing = next(
            (line for line in lines if abs(line.y - fragment.y) < tolerance),
            None,
        )
        if existing is not None:
            existing.text += f" {fragment.text}"
        else:
            lines.append(Line(y=fragment.y, text=fragment.text))
    return lines
