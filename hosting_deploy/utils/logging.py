"""Logging configuration using structlog."""

import logging
import os
import sys
from collections.abc import Mapping
from typing import Any

import structlog

from hosting_deploy.config import Settings, settings


def resolve_log_format(config: Settings, environ: Mapping[str, str] | None = None) -> str:
    """The configured format, else JSON when running on a GitHub Actions runner."""
    if config.log_format:
        return config.log_format
    environ = os.environ if environ is None else environ
    return "json" if environ.get("GITHUB_ACTIONS") == "true" else "console"


def configure_logging(config: Settings | None = None) -> None:
    """Configure structured logging for the action."""
    config = config or settings

    # Set up standard library logging
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, config.log_level),
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Configure structlog
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Add renderer based on format
    if resolve_log_format(config) == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
