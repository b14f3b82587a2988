"""Public observability primitives: structured JSON-lines logging."""

from appcontext.observability.logging import (
    LoggingConfig,
    StructuredLoggingHandle,
    flush_logging,
    get_active_logging_handle,
    setup_logging,
    setup_structured_logging,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "StructuredLoggingHandle",
    "flush_logging",
    "get_active_logging_handle",
    "setup_logging",
    "setup_structured_logging",
    "shutdown_logging",
]
