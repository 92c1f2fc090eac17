"""Structured logging setup with JSON-lines output and credential redaction."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import Any, Final, Literal, TextIO, cast

import structlog

from chef_provider.security.redaction import redact_structure

LogFormat = Literal["json", "text"]

_DEFAULT_LOGGER_NAME: Final[str] = "chef_provider"
_LOG_FORMATS: Final[frozenset[str]] = frozenset({"json", "text"})


def configure_logging(
    level: int | str = "INFO",
    *,
    log_format: str = "json",
    redact_secrets: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the process.

    Events are rendered as one JSON object per line (or a console line for
    ``text``) on ``stream``, defaulting to stderr so stdout stays free for
    command output.
    """

    numeric_level = _parse_log_level(level)
    resolved_format = _validate_log_format(log_format)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if redact_secrets:
        processors.append(redact_event_dict)
    if resolved_format == "json":
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(
            file=stream if stream is not None else sys.stderr
        ),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name or _DEFAULT_LOGGER_NAME)


def redact_event_dict(
    logger: object, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking credential fields and PEM blocks."""
    return cast("dict[str, Any]", redact_structure(dict(event_dict)))


@contextmanager
def correlation_scope(**fields: str | None) -> Iterator[None]:
    """Temporarily bind correlation fields for log events in scope."""
    bound = {key: value for key, value in fields.items() if value is not None and value.strip()}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


def _validate_log_format(value: str) -> LogFormat:
    normalized = value.strip().lower()
    if normalized not in _LOG_FORMATS:
        raise ValueError(f"unsupported log format {value!r}; expected json or text")
    return "json" if normalized == "json" else "text"


__all__ = [
    "LogFormat",
    "configure_logging",
    "correlation_scope",
    "get_logger",
    "redact_event_dict",
]
