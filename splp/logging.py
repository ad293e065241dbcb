"""Central logging helpers"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

import structlog
import structlog.stdlib

from splp.config import settings

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Handlers attached by the last setup_logging() call
_installed: List[logging.Handler] = []


def _build_file_handler(component: str) -> RotatingFileHandler:
    log_dir: Path = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{component}.log"
    handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    return handler


def _install_handlers(handlers: List[logging.Handler], level: int) -> None:
    """
    Attach handlers to the root logger.

    basicConfig() is a no-op once the root logger has any handler (pytest,
    an embedding service), so handlers are added directly. Handlers from a
    previous call are detached and closed first.
    """
    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed[:] = handlers

    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def setup_logging(component: str = "splp", level: int = logging.INFO) -> List[logging.Handler]:
    """Configure structlog + stdlib logging for a component"""
    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    handlers: List[logging.Handler] = [stream]
    if settings.log_to_file:
        handlers.append(_build_file_handler(component))

    _install_handlers(handlers, level)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger(__name__).info("logging_initialized", extra={"component": component})
    return handlers
