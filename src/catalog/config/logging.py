"""structlog setup for the catalog service.

Everything goes to stderr through the stdlib ``logging`` tree, so records
from pymongo and from our own structlog loggers share one format. Console
rendering by default, JSON lines with ``--log-json`` for log shipping.

Each record carries the worker thread that produced it: deliveries are
handled concurrently and the thread name is what ties a consumer's log
lines together, next to the ``queue``/``delivery_tag`` context bound by
the dispatcher.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "product-catalog"

# Third-party loggers that only matter when something is wrong.
_QUIET_LOGGERS = ("pymongo", "urllib3")


def _add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _pre_chain(log_json: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            [structlog.processors.CallsiteParameter.THREAD_NAME]
        ),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_json:
        chain += [_add_service, structlog.processors.format_exc_info]
    return chain


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to one stderr handler.

    Args:
        verbose: DEBUG for the ``catalog`` loggers instead of INFO.
        log_json: Render JSON lines instead of console output.
        stream: Where to write; stderr when omitted.
    """
    stream = stream or sys.stderr
    pre_chain = _pre_chain(log_json)

    renderer: Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("catalog").setLevel(logging.DEBUG if verbose else logging.INFO)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
