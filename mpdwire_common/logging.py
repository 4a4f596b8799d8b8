"""
mpdwire logging configuration and context management

Structured logging with structlog on top of the standard library, so that
applications embedding the client keep control of handlers and levels.
Library modules only call get_bound_logger(); the CLI calls
configure_structlog() once at startup.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Optional
from pathlib import Path

import structlog

_STRUCTLOG_CONFIGURED = False


def configure_structlog(
    log_level: str = "WARNING",
    log_format: str = "console",
    log_file: Optional[Path] = None,
    force: bool = False
) -> None:
    """
    Configure structlog with stdlib integration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" or "console")
        log_file: Optional log file path
        force: Reconfigure even if already configured
    """
    global _STRUCTLOG_CONFIGURED

    # First call wins unless forced
    if _STRUCTLOG_CONFIGURED and not force:
        return

    log_level_numeric = getattr(logging, log_level.upper(), logging.WARNING)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_file), mode='a')
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level_numeric)

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors = [
        timestamper,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=shared_processors,
    )
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=log_level_numeric,
        handlers=[handler],
        force=True,
    )

    _STRUCTLOG_CONFIGURED = True


def get_bound_logger(component: str, **default_context):
    """
    Get a logger bound to a component name.

    Nothing is configured here. Events go to the stdlib "mpdwire" logger, so
    they follow whatever handlers and levels the application has set up, or
    the CLI's configure_structlog() call. Processors are resolved on first
    use, after any configuration made at startup.

    Usage:
        logger = get_bound_logger("command_runner")
        logger.debug("command.sent", verb="status")
    """
    return structlog.wrap_logger(
        logging.getLogger("mpdwire"),
        wrapper_class=structlog.stdlib.BoundLogger,
        component=component,
        **default_context
    )


@contextmanager
def operation_context(**context):
    """Context manager for temporary operation-specific context."""
    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        if context:
            structlog.contextvars.unbind_contextvars(*context.keys())


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
