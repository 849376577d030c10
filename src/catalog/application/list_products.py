"""Application service: List Products use case (query)."""

from __future__ import annotations

import structlog

from catalog.application.dto import ProductView
from catalog.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[ProductView]:
        return [view for _, view in self.handle_with_ids()]

    def handle_with_ids(self) -> list[tuple[str, ProductView]]:
        """Views keyed by product ID, for callers that go on to edit them."""
        entries = [(str(p.id), ProductView.of(p)) for p in self._product_repo.list_all()]
        log.info("products_fetched", count=len(entries))
        return entries
