"""Unit tests for the Product aggregate."""

import pytest

from procure.domain.exceptions import ErrorKind, InsufficientStockError, ValidationError
from procure.domain.model.product import Product
from procure.domain.model.value_objects import Money


def _make_product(stock: int = 0, min_stock: int = 0, max_stock: int | None = None) -> Product:
    product = Product.create(
        code="P1",
        name="Widget",
        unit_price=Money.of("10.00"),
        min_stock=min_stock,
        max_stock=max_stock,
    )
    product.id = 1
    if stock:
        product.post_inbound(stock)
    return product


class TestProductCreation:

    def test_happy_path(self):
        product = Product.create("  P1 ", "Widget", Money.of("10.00"))
        assert product.code == "P1"
        assert product.current_stock == 0
        assert product.active
        assert product.id is None  # assigned by repository

    def test_blank_code_rejected(self):
        with pytest.raises(ValidationError, match="code is required"):
            Product.create("  ", "Widget", Money.of("10.00"))

    def test_long_code_rejected(self):
        with pytest.raises(ValidationError, match="at most 50"):
            Product.create("X" * 51, "Widget", Money.of("10.00"))

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Product.create("P1", "Widget", Money.zero())

    def test_negative_min_stock_rejected(self):
        with pytest.raises(ValidationError, match="Minimum stock"):
            Product.create("P1", "Widget", Money.of("1"), min_stock=-1)


class TestProductStock:

    def test_post_inbound_adds(self):
        product = _make_product(stock=5)
        product.post_inbound(3)
        assert product.current_stock == 8

    def test_post_outbound_subtracts(self):
        product = _make_product(stock=5)
        product.post_outbound(5)
        assert product.current_stock == 0

    def test_post_outbound_beyond_stock_leaves_product_untouched(self):
        product = _make_product(stock=10)
        with pytest.raises(InsufficientStockError) as info:
            product.post_outbound(15)
        assert info.value.kind == ErrorKind.INSUFFICIENT_STOCK
        assert info.value.available == 10
        assert info.value.requested == 15
        assert product.current_stock == 10

    def test_zero_quantity_rejected(self):
        product = _make_product(stock=5)
        with pytest.raises(ValidationError):
            product.post_inbound(0)
        with pytest.raises(ValidationError):
            product.post_outbound(0)


class TestStockSignals:

    def test_low_stock_at_threshold(self):
        assert _make_product(stock=5, min_stock=5).is_low_stock
        assert not _make_product(stock=6, min_stock=5).is_low_stock

    def test_out_of_stock(self):
        assert _make_product(stock=0).is_out_of_stock

    def test_over_stock_only_with_max(self):
        assert not _make_product(stock=500).is_over_stock
        assert _make_product(stock=11, max_stock=10).is_over_stock


class TestDeactivate:

    def test_deactivate(self):
        product = _make_product()
        product.deactivate()
        assert not product.active

    def test_deactivate_twice_rejected(self):
        product = _make_product()
        product.deactivate()
        with pytest.raises(ValidationError, match="already inactive"):
            product.deactivate()
