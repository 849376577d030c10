"""Application service: Compute Total Price use case.

Answers the order service's question "what would this order line cost?"
against the current stock. A line for an unknown product or for more units
than are in stock is an expected answer, not an error: the message is
acknowledged and no price is sent back.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from catalog.application.outcome import Completed, Dropped, Failed, Outcome
from catalog.domain.exceptions import InsufficientQuantity, ProductNotFound
from catalog.domain.model.order_item import OrderItem
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.product_lookup import parse_product_id, require_product

log = structlog.get_logger(__name__)


class ComputeTotalPriceHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, item: OrderItem) -> Decimal:
        """Return ``price * qty`` for the line, exactly.

        Raises MalformedReference, ProductNotFound or InsufficientQuantity.
        Stock is only read, never changed.
        """
        product_id = parse_product_id(item.product_id)
        product = require_product(self._product_repo, product_id)

        if item.qty > product.qty:
            log.warning(
                "insufficient_quantity",
                product_id=str(product_id),
                available=product.qty,
                requested=item.qty,
            )
            raise InsufficientQuantity(product_id, product.qty, item.qty)

        total = product.total_price(item.qty)
        log.info(
            "total_price_computed",
            product_id=str(product_id),
            qty=item.qty,
            total=str(total),
        )
        return total

    def consume(self, item: OrderItem) -> Outcome:
        log.info("total_price_requested", product_id=item.product_id, qty=item.qty)
        try:
            return Completed(self.handle(item))
        except (ProductNotFound, InsufficientQuantity) as exc:
            log.warning("total_price_dropped", product_id=item.product_id, reason=str(exc))
            return Dropped(exc)
        except Exception as exc:
            log.error("total_price_failed", product_id=item.product_id, exc_info=True)
            return Failed(exc)
