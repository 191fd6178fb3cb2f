"""Structlog configuration shared by the whole service."""

import json
import logging
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import ProcessorFormatter

from hotdel_refund_ms.shared.core.settings import get_settings


def get_renderer(debug: bool) -> Any:
    """Console output while debugging, JSON lines otherwise."""
    if debug:
        return ConsoleRenderer(colors=True)

    def _dumps(obj: Any, default: Any = None, **kwargs: Any) -> str:
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)

    return JSONRenderer(serializer=_dumps)


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through the same chain."""
    settings = get_settings()

    shared_pre_chain: list[Any] = [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*shared_pre_chain, ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(settings.debug),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
