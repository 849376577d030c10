"""Application service: Reconcile Quantities use case.

Applies the stock movements announced by the order service: FETCH takes
units out when an order is placed, RESTORE puts them back when it is
cancelled or returned.

Each item is applied on its own. There is no batch transaction:
  - an item that cannot be resolved is skipped and the batch continues;
  - if the store goes away, the rest of the batch is abandoned and what
    was already written stays written.

Every write is a compare-and-swap on the quantity that was just read, so a
concurrent writer can never be overwritten. A lost race re-reads the product
and tries again, up to ``cas_retries`` times.

Nothing here makes a delta idempotent: a redelivered message is applied
twice.
"""

from __future__ import annotations

import structlog

from catalog.application.dto import AppliedDelta, ReconciliationReport, SkippedItem
from catalog.application.outcome import Aborted, Completed, Failed, Outcome
from catalog.domain.exceptions import (
    ConcurrentModification,
    MalformedReference,
    ProductNotFound,
    StoreUnavailable,
)
from catalog.domain.model.order_item import Direction, OrderItem
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.product_lookup import parse_product_id, require_product

log = structlog.get_logger(__name__)


class ReconcileQuantitiesHandler:

    def __init__(self, product_repo: ProductRepository, cas_retries: int = 3) -> None:
        if cas_retries < 0:
            raise ValueError("cas_retries cannot be negative")
        self._product_repo = product_repo
        self._cas_retries = cas_retries

    def handle(self, items: list[OrderItem], direction: Direction) -> ReconciliationReport:
        report = ReconciliationReport(direction=direction)

        for index, item in enumerate(items):
            try:
                report.applied.append(self._apply(item, direction))
            except (MalformedReference, ProductNotFound, ConcurrentModification) as exc:
                log.warning(
                    "quantity_item_skipped",
                    product_id=item.product_id,
                    direction=direction.value,
                    reason=str(exc),
                )
                report.skipped.append(SkippedItem(item.product_id, str(exc)))
            except StoreUnavailable as exc:
                report.aborted_by = exc
                report.remaining = len(items) - index
                log.error(
                    "quantity_batch_aborted",
                    direction=direction.value,
                    applied=len(report.applied),
                    remaining=report.remaining,
                    error=str(exc),
                )
                break

        return report

    def consume(self, items: list[OrderItem], direction: Direction) -> Outcome:
        log.info("quantity_batch_received", direction=direction.value, items=len(items))
        try:
            report = self.handle(items, direction)
        except Exception as exc:
            log.error("quantity_batch_failed", direction=direction.value, exc_info=True)
            return Failed(exc)

        if report.aborted_by is not None:
            return Aborted(report.aborted_by, report)
        return Completed()

    # --- Internal helpers -----------------------------------------------------

    def _apply(self, item: OrderItem, direction: Direction) -> AppliedDelta:
        product_id = parse_product_id(item.product_id)
        attempts = self._cas_retries + 1

        for _ in range(attempts):
            product = require_product(self._product_repo, product_id)
            new_qty = direction.apply(product.qty, item.qty)
            if self._product_repo.update_quantity(product_id, new_qty, expected_qty=product.qty):
                log.info(
                    "quantity_updated",
                    product_id=str(product_id),
                    direction=direction.value,
                    previous=product.qty,
                    new=new_qty,
                )
                return AppliedDelta(str(product_id), product.qty, new_qty)
            log.info("quantity_changed_concurrently", product_id=str(product_id))

        raise ConcurrentModification(product_id, attempts)
