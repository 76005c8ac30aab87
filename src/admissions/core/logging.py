"""Structured logging configuration for the admissions assistant.

structlog over stdlib logging. The API server writes JSON lines; the CLI
uses the console renderer. Log output goes to stderr so command output on
stdout (replies, drafts, tables) stays clean. Every entry carries the id of
the AdmissionsSession that produced it.

Usage:
    from admissions.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("roster_ingested", source="Sheet1", applicants=12)
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

_session_id: ContextVar[str | None] = ContextVar("admissions_session_id", default=None)


def set_session_id(session_id: str | None) -> None:
    """Bind log entries in the current context to a session (None clears it)."""
    _session_id.set(session_id)


def get_session_id() -> str | None:
    return _session_id.get()


def _add_session_id(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    session_id = _session_id.get()
    if session_id is not None:
        event_dict.setdefault("session_id", session_id)
    return event_dict


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog for the application.

    Safe to call more than once; the last call wins (``serve`` reconfigures
    after the CLI group's console setup).

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        json_output: JSON lines if True, human-readable console output if False
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_session_id,
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (pass the calling module's ``__name__``)."""
    return structlog.get_logger(name)
