"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from catalog.domain.exceptions import ProductNameConflict, ValidationError
from catalog.domain.model.product import Product, ProductCategory
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductRepository

log = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, category: str, price: str, qty: int) -> Product:
        """Add a new product to the catalog.

        The ID is assigned here; names are unique across the catalog.
        Nothing is saved unless every field is valid.
        """
        if not name or not name.strip():
            raise ValidationError("Name is required")

        if self._product_repo.exists_by_name(name.strip()):
            raise ProductNameConflict(name.strip())

        product = Product.create(
            name=name,
            category=ProductCategory.parse(category),
            price=Money.of(price),
            qty=qty,
        )
        self._product_repo.save(product)
        log.info("product_added", product_id=str(product.id), name=product.name)
        return product
