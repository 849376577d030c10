"""Broker adapter: routes deliveries to the consumers.

The broker client hands each delivery to :meth:`MessageDispatcher.dispatch`
and applies the returned :class:`Decision`: ACK (sending ``reply`` back to
the caller when there is one) or REJECT without requeue.

Deliveries are independent. :meth:`dispatch_all` runs them on a thread
pool, so two messages about the same product may be handled at the same
time; the consumers rely on the store's conditional update for per-item
atomicity and hold no locks of their own.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import structlog

from catalog.application.compute_total_price import ComputeTotalPriceHandler
from catalog.application.outcome import Completed, Failed, Outcome
from catalog.application.reconcile_quantities import ReconcileQuantitiesHandler
from catalog.domain.model.order_item import Direction
from catalog.infrastructure.errors import Disposition, disposition_for
from catalog.infrastructure.messaging.codec import (
    Channel,
    MalformedMessage,
    decode_body,
    encode_reply,
)

log = structlog.get_logger(__name__)

DEFAULT_QUEUES: Mapping[str, Channel] = {c.value: c for c in Channel}


@dataclass(frozen=True)
class Delivery:
    queue: str
    body: bytes | str
    tag: int = 0


@dataclass(frozen=True)
class Decision:
    tag: int
    disposition: Disposition
    reply: bytes | None = None
    requeue: bool = False


class MessageDispatcher:

    def __init__(
        self,
        pricing: ComputeTotalPriceHandler,
        reconciler: ReconcileQuantitiesHandler,
        queues: Mapping[str, Channel] = DEFAULT_QUEUES,
    ) -> None:
        self._pricing = pricing
        self._reconciler = reconciler
        self._queues = dict(queues)

    def dispatch(self, delivery: Delivery) -> Decision:
        with structlog.contextvars.bound_contextvars(
            queue=delivery.queue, delivery_tag=delivery.tag
        ):
            outcome = self._route(delivery)
            disposition = disposition_for(outcome)

            reply = None
            if isinstance(outcome, Completed) and outcome.reply is not None:
                reply = encode_reply(outcome.reply)

            log.info(
                "delivery_settled",
                outcome=type(outcome).__name__,
                disposition=disposition.value,
            )
            return Decision(tag=delivery.tag, disposition=disposition, reply=reply)

    def dispatch_all(self, deliveries: Iterable[Delivery], workers: int = 4) -> list[Decision]:
        """Handle deliveries concurrently; decisions come back in input order."""
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="consumer") as pool:
            return list(pool.map(self.dispatch, deliveries))

    # --- Internal helpers -----------------------------------------------------

    def _route(self, delivery: Delivery) -> Outcome:
        channel = self._queues.get(delivery.queue)
        if channel is None:
            log.error("unknown_queue")
            return Failed(LookupError(f"No consumer for queue {delivery.queue!r}"))

        try:
            payload = decode_body(channel, delivery.body)
        except MalformedMessage as exc:
            log.error("malformed_message", error=str(exc))
            return Failed(exc)

        if channel is Channel.TOTAL_PRICE:
            return self._pricing.consume(payload)
        if channel is Channel.FETCH_QTY:
            return self._reconciler.consume(payload, Direction.FETCH)
        return self._reconciler.consume(payload, Direction.RESTORE)
