"""modsplit pipeline package.

This package contains orchestration and stage telemetry helpers for heading
detection, module resolution, and module PDF extraction.
"""

from .orchestrator import MANIFEST_FILENAME, ModuleSplitPipeline, manifest_payload

__all__ = ["MANIFEST_FILENAME", "ModuleSplitPipeline", "manifest_payload"]
