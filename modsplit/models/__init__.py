"""Shared typed data models for modsplit.

This package contains dataclasses used across pipeline modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    DetectionResult,
    HeadingHit,
    Line,
    Module,
    ModuleArtifact,
    ResolvedModules,
    SplitManifest,
    SplitPlan,
    TextFragment,
)

__all__ = [
    "DetectionResult",
    "HeadingHit",
    "Line",
    "Module",
    "ModuleArtifact",
    "ResolvedModules",
    "SplitManifest",
    "SplitPlan",
    "TextFragment",
]
