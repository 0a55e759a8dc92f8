"""Logging estructurado (structlog).

`configure_logging()` se llama una vez desde la CLI (o desde la aplicación que
use el SDK). Los módulos obtienen su logger con `structlog.get_logger(__name__)`
y nunca registran credenciales ni tokens.
"""

from __future__ import annotations

import logging
import sys

import structlog

from core.config import AppSettings


def _parse_level(value: str | None) -> int:
    if not value:
        return logging.WARNING
    level = getattr(logging, value.strip().upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(settings: AppSettings | None = None, *, level: str | None = None) -> None:
    """Configura structlog y el logging estándar.

    - `log_format == "json"`: JSON apto para máquinas.
    - en otro caso: salida de consola legible.
    """

    settings = settings or AppSettings()
    log_level = _parse_level(level or settings.log_level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # httpx/websockets usan logging estándar.
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
