"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (MongoDB, JSON file, in-memory)
live in the infrastructure layer.

Implementations raise ``StoreUnavailable`` for transport-level failures;
"not found" is expressed through return values, never exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bson import ObjectId

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: ObjectId) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete_by_id(self, product_id: ObjectId) -> None:
        """Remove a product. Deleting an absent product is a no-op."""

    @abstractmethod
    def update_quantity(
        self,
        product_id: ObjectId,
        new_qty: int,
        expected_qty: int | None = None,
    ) -> bool:
        """Atomically set the stored quantity of one product.

        When ``expected_qty`` is given the write only happens if the stored
        quantity still equals it (compare-and-swap). Returns True if a
        record was updated, False if the product is absent or the stored
        quantity no longer matches.
        """

    def exists_by_id(self, product_id: ObjectId) -> bool:
        return self.get_by_id(product_id) is not None

    def exists_by_name(self, name: str) -> bool:
        return self.get_by_name(name) is not None
