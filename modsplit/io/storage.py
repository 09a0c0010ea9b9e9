"""Artifact storage abstraction.

Responsibilities:
- Provide deterministic filesystem storage for module PDFs and JSON manifests.
"""

from __future__ import annotations

import json
from pathlib import Path


class ArtifactStore:
    """Filesystem-backed artifact store."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root output directory."""

        self.root = root

    def save_pdf(self, relative_path: Path, data: bytes) -> Path:
        """Save PDF bytes and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def save_json(self, relative_path: Path, payload: dict[str, object]) -> Path:
        """Save JSON-serializable payload and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        return path
