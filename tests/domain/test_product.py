"""Unit tests for the Product aggregate and the partial-update merge."""

from decimal import Decimal

import pytest
from bson import ObjectId

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import (
    Product,
    ProductCategory,
    ProductPatch,
    merge_patch,
)
from catalog.domain.model.value_objects import Money


def _product(**overrides) -> Product:
    fields = dict(
        id=ObjectId(),
        name="Laptop",
        category=ProductCategory.ELECTRONICS,
        price=Money.of("999.99"),
        qty=10,
    )
    fields.update(overrides)
    return Product(**fields)


class TestProductCreate:

    def test_assigns_id(self):
        p = Product.create("Laptop", ProductCategory.ELECTRONICS, Money.of("1"), 1)
        assert isinstance(p.id, ObjectId)

    def test_keeps_given_id(self):
        oid = ObjectId()
        p = Product.create("Laptop", ProductCategory.ELECTRONICS, Money.of("1"), 1, oid)
        assert p.id == oid

    def test_strips_name(self):
        p = Product.create("  Laptop ", ProductCategory.ELECTRONICS, Money.of("1"), 1)
        assert p.name == "Laptop"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Name is required"):
            Product.create("   ", ProductCategory.TOYS, Money.of("1"), 1)

    def test_negative_qty_rejected(self):
        with pytest.raises(ValidationError, match="Quantity cannot be negative"):
            Product.create("Ball", ProductCategory.TOYS, Money.of("1"), -1)

    def test_zero_qty_and_price_allowed(self):
        p = Product.create("Ball", ProductCategory.TOYS, Money.of("0"), 0)
        assert p.qty == 0

    def test_reconstitution_allows_negative_stock(self):
        # Reconciliation may have driven the stored quantity below zero.
        p = _product(qty=-3)
        assert p.qty == -3


class TestProductCategory:

    def test_parse_is_case_insensitive(self):
        assert ProductCategory.parse("pet_supplies") is ProductCategory.PET_SUPPLIES

    def test_parse_unknown_rejected(self):
        with pytest.raises(ValidationError, match="Unknown category"):
            ProductCategory.parse("FOOD")


class TestTotalPrice:

    def test_price_times_qty(self):
        assert _product(price=Money.of("10.00")).total_price(3) == Decimal("30.00")

    def test_no_float_drift(self):
        assert _product(price=Money.of("0.1")).total_price(3) == Decimal("0.3")

    def test_negative_qty_gives_negative_total(self):
        assert _product(price=Money.of("10.00")).total_price(-2) == Decimal("-20.00")


class TestMergePatch:

    def test_empty_patch_changes_nothing(self):
        p = _product()
        merged, changed = merge_patch(p, ProductPatch())
        assert merged == p
        assert changed == []

    def test_present_fields_overwrite(self):
        p = _product()
        merged, changed = merge_patch(
            p,
            ProductPatch(
                name="Notebook",
                category=ProductCategory.HEALTH,
                price=Decimal("5.00"),
                qty=7,
            ),
        )
        assert merged.name == "Notebook"
        assert merged.category is ProductCategory.HEALTH
        assert merged.price == Money.of("5.00")
        assert merged.qty == 7
        assert sorted(changed) == ["category", "name", "price", "qty"]

    def test_negative_price_ignored(self):
        p = _product(price=Money.of("20.00"))
        merged, changed = merge_patch(p, ProductPatch(price=Decimal("-1")))
        assert merged.price == Money.of("20.00")
        assert changed == []

    def test_zero_price_and_qty_ignored(self):
        p = _product(price=Money.of("20.00"), qty=4)
        merged, _ = merge_patch(p, ProductPatch(price=Decimal("0"), qty=0))
        assert merged.price == Money.of("20.00")
        assert merged.qty == 4

    def test_blank_name_ignored(self):
        p = _product(name="Laptop")
        merged, _ = merge_patch(p, ProductPatch(name="  "))
        assert merged.name == "Laptop"

    def test_original_untouched(self):
        p = _product(qty=10)
        merge_patch(p, ProductPatch(qty=99))
        assert p.qty == 10

    def test_same_value_not_reported_as_change(self):
        p = _product(qty=10)
        _, changed = merge_patch(p, ProductPatch(qty=10))
        assert changed == []

    def test_is_empty(self):
        assert ProductPatch().is_empty()
        assert not ProductPatch(qty=1).is_empty()
