"""Telemetry and observability helpers.

This package emits deterministic run events for split auditing.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
