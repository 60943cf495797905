"""Telemetry scaffolds.

This package emits structured bind events for deterministic diagnostics.
"""

from .logger import BindLogger, configure_cli_logging

__all__ = ["BindLogger", "configure_cli_logging"]
