"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from newsecho.shared.telemetry.logging import get_logger, setup_logging
from newsecho.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from newsecho.shared.telemetry.tracing import traced

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
]
