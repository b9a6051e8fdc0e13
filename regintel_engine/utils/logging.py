"""Structured logging utilities using structlog for analysis-run context and tracing."""

import os
import sys
import uuid
from typing import Any, Optional
import structlog
from structlog.processors import JSONRenderer
from structlog.contextvars import merge_contextvars

# Console rendering only when attached to a TTY with LOG_FORMAT=console
IS_TTY = sys.stderr.isatty()
LOG_FORMAT = os.getenv("LOG_FORMAT", "console").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_structured_logging() -> None:
    """
    Configure structured logging with appropriate processors and renderers.

    Uses:
    - Console renderer for development (colorized, human-readable)
    - JSON renderer for production (structured, machine-readable)
    - Context binding for run_id and component
    """
    # Shared by both renderers
    processors = [
        merge_contextvars,  # run-scoped context vars
        structlog.processors.add_log_level,  # level name
        structlog.processors.TimeStamper(fmt="iso"),  # ISO timestamp
        structlog.processors.StackInfoRenderer(),  # stack_info=True support
        structlog.processors.format_exc_info,  # exc_info to text
    ]

    # Renderer goes last
    if IS_TTY and LOG_FORMAT == "console":
        # Development: colorized key=value output
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        # Production: JSON lines
        processors.append(JSONRenderer())

    # Configure structlog
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_structured_logger(
    name: str,
    run_id: Optional[str] = None,
    **additional_context: Any,
) -> structlog.BoundLogger:
    """
    Get a structured logger with bound context.

    Args:
        name: Logger name (typically module name)
        run_id: Optional analysis-run correlation ID to bind
        **additional_context: Additional context to bind

    Returns:
        Configured BoundLogger instance with context

    Example:
        >>> logger = get_structured_logger("engine", run_id="abc-123")
        >>> logger.info("analysis started", records=120)
    """
    logger = structlog.get_logger(name)

    # Bind analysis-run context if provided
    if run_id:
        logger = logger.bind(run_id=run_id)

    # Bind additional context
    if additional_context:
        logger = logger.bind(**additional_context)

    return logger


def get_correlation_id() -> str:
    """
    Generate a correlation ID for tracing one analysis run.

    Returns:
        UUID string for correlation
    """
    return str(uuid.uuid4())


# Configure on module import
configure_structured_logging()


# Export for convenience
__all__ = [
    "get_structured_logger",
    "get_correlation_id",
    "configure_structured_logging",
]
