"""
Telemetry module for sockcomm.

This module provides the observability features of sockcomm: tracing through
OpenTelemetry and structured logging through structlog.
"""

from sockcomm.telemetry.config import configure_telemetry
from sockcomm.telemetry.facade import LoggingFacade, TracingFacade


def get_telemetry(name: str) -> tuple:
    """
    Get tracer and logger instances for the given name.

    Args:
        name: The name to use for the tracer and logger

    Returns:
        A tuple containing a tracer and logger
    """
    return TracingFacade(name), LoggingFacade(name)


__all__ = [
    "LoggingFacade",
    "TracingFacade",
    "configure_telemetry",
    "get_telemetry",
]
