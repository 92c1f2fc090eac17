"""Public observability primitives: structured logging and correlation scopes."""

from chef_provider.observability.logging import (
    LogFormat,
    configure_logging,
    correlation_scope,
    get_logger,
    redact_event_dict,
)

__all__ = [
    "LogFormat",
    "configure_logging",
    "correlation_scope",
    "get_logger",
    "redact_event_dict",
]
