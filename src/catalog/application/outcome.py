"""Outcomes of consuming one message.

Consumers never let an exception escape to the broker adapter. They return
one of these variants instead, and the adapter decides whether the delivery
is acknowledged or rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from catalog.application.dto import ReconciliationReport
from catalog.domain.exceptions import DomainException, StoreUnavailable


@dataclass(frozen=True)
class Completed:
    """Processed. ``reply`` is the value to send back, if the channel has one."""

    reply: Any = None


@dataclass(frozen=True)
class Dropped:
    """An expected business outcome: nothing to do and nothing to reply."""

    reason: DomainException


@dataclass(frozen=True)
class Aborted:
    """A batch stopped because the store became unavailable."""

    reason: StoreUnavailable
    report: ReconciliationReport


@dataclass(frozen=True)
class Failed:
    """Unexpected failure. The message must not be delivered again."""

    error: Exception


Outcome = Union[Completed, Dropped, Aborted, Failed]
