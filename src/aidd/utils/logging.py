# Copyright 2024-2026 The AIDD Authors
# SPDX-License-Identifier: Apache-2.0

"""structlog setup for the CLI and embedding applications."""

from __future__ import annotations

import logging
import sys

import structlog

DEFAULT_LEVEL = logging.WARNING


def configure_logging(level: int = DEFAULT_LEVEL, *, json_output: bool = False) -> None:
    """
    Configure structlog to write to stderr at ``level``.

    Args:
        level: Minimum stdlib logging level (e.g. ``logging.DEBUG``).
        json_output: Render events as JSON lines instead of the console format.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def silence_logging() -> None:
    """Drop everything below CRITICAL."""
    configure_logging(logging.CRITICAL)
