"""Translation of failures into transport outcomes.

Two transports consume the same failure kinds:
  - request/response callers get an HTTP-style status and a timestamped
    error body;
  - the broker gets ACK or REJECT for a delivery. A rejection never asks
    for a requeue: redelivering a message that already failed once would
    only fail again.
"""

from __future__ import annotations

import time
from enum import Enum
from http import HTTPStatus

import structlog

from catalog.application.outcome import Failed, Outcome
from catalog.domain.exceptions import (
    AccessDenied,
    ConcurrentModification,
    DomainException,
    EntityNotFoundError,
    StoreUnavailable,
    ValidationError,
)

log = structlog.get_logger(__name__)

# Checked in order; the first matching class wins.
_STATUS_BY_KIND: list[tuple[type[Exception], HTTPStatus]] = [
    (EntityNotFoundError, HTTPStatus.NOT_FOUND),
    (AccessDenied, HTTPStatus.FORBIDDEN),
    (StoreUnavailable, HTTPStatus.SERVICE_UNAVAILABLE),
    (ConcurrentModification, HTTPStatus.CONFLICT),
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (DomainException, HTTPStatus.BAD_REQUEST),
]


class Disposition(Enum):
    ACK = "ack"
    REJECT = "reject"


def http_status_for(exc: Exception) -> HTTPStatus:
    for kind, status in _STATUS_BY_KIND:
        if isinstance(exc, kind):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def error_body(exc: Exception, status: HTTPStatus | None = None) -> dict[str, str]:
    """Build the error payload: message, status line and epoch-millis timestamp."""
    status = status or http_status_for(exc)
    log.error(
        "request_failed",
        error_type=type(exc).__name__,
        error=str(exc),
        status=status.value,
        exc_info=exc if status is HTTPStatus.INTERNAL_SERVER_ERROR else None,
    )
    return {
        "error": str(exc) or type(exc).__name__,
        "status": f"{status.value} {status.name}",
        "timestamp": str(int(time.time() * 1000)),
    }


def disposition_for(outcome: Outcome) -> Disposition:
    if isinstance(outcome, Failed):
        return Disposition.REJECT
    return Disposition.ACK
