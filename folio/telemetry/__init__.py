"""Telemetry helpers.

This package emits stage-level import events for deterministic auditing.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
