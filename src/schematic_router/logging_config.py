"""Logging infrastructure for the schematic router.

Provides structured logging with configurable levels and per-layout-pass
correlation, so every record emitted while routing one diagram carries the
same ``layout_id``.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from contextvars import ContextVar
from typing import Any

# Layout pass ID tracking for pass-level correlation
layout_id_ctx: ContextVar[str | None] = ContextVar("layout_id", default=None)


def get_layout_id() -> str | None:
    """Get the current layout pass ID if available."""
    return layout_id_ctx.get()


def new_layout_id() -> str:
    """Start a new layout pass and return its ID."""
    layout_id = uuid.uuid4().hex[:8]
    layout_id_ctx.set(layout_id)
    return layout_id


class _LayoutIdFilter(logging.Filter):
    """Default ``layout_id`` to ``-`` for records emitted outside a pass."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "layout_id"):
            record.layout_id = get_layout_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] [%(name)s] [layout=%(layout_id)s] %(message)s"

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout is the MCP transport, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(_LayoutIdFilter())
    logger.addHandler(console_handler)

    # Disable noisy third-party loggers
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("asyncio").propagate = False

    return logger


class LayoutLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds the layout pass ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        layout_id = get_layout_id()
        if layout_id is not None:
            extra["layout_id"] = layout_id
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> LayoutLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).

    Returns:
        A logger that tags records with the current layout pass.
    """
    return LayoutLoggerAdapter(logging.getLogger(name), {})
