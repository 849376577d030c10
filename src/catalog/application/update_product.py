"""Application service: Update Product use case.

Updates are partial merges: absent fields are kept, and zero or negative
price and quantity values are ignored rather than rejected.
"""

from __future__ import annotations

import structlog

from catalog.application.dto import ProductView
from catalog.domain.exceptions import ProductNameConflict
from catalog.domain.model.product import ProductPatch, merge_patch
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.product_lookup import parse_product_id, require_product

log = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, patch: ProductPatch) -> ProductView:
        oid = parse_product_id(product_id)
        product = require_product(self._product_repo, oid)

        merged, changed = merge_patch(product, patch)
        if "name" in changed:
            holder = self._product_repo.get_by_name(merged.name)
            if holder is not None and holder.id != oid:
                raise ProductNameConflict(merged.name)

        if changed:
            merged.check_invariants()
            self._product_repo.save(merged)
        log.info("product_updated", product_id=product_id, changed=changed)
        return ProductView.of(merged)
