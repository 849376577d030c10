"""Application service: Show Product use case (query)."""

from __future__ import annotations

import structlog

from catalog.application.dto import ProductView
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.product_lookup import parse_product_id, require_product

log = structlog.get_logger(__name__)


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductView:
        log.info("product_fetch", product_id=product_id)
        product = require_product(self._product_repo, parse_product_id(product_id))
        return ProductView.of(product)
