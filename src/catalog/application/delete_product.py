"""Application service: Delete Product use case."""

from __future__ import annotations

import structlog

from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.product_lookup import parse_product_id, product_not_found

log = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        oid = parse_product_id(product_id)
        if not self._product_repo.exists_by_id(oid):
            raise product_not_found(oid)

        self._product_repo.delete_by_id(oid)
        log.info("product_deleted", product_id=product_id)
