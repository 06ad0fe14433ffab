"""Tests for the Product aggregate — creation, edits and stock."""

import pytest
from protean.exceptions import ValidationError
from storefront.exceptions import ConflictError
from storefront.product.events import ProductCreated, ProductDetailsUpdated, StockDecremented
from storefront.product.product import Product


def _product(**overrides):
    defaults = {
        "name": "Espresso Grinder",
        "description": "Conical burr grinder",
        "price": 129.0,
        "category": "kitchen",
        "stock": 5,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_sets_fields(self):
        product = _product()
        assert product.name == "Espresso Grinder"
        assert product.price == 129.0
        assert product.stock == 5
        assert product.rating == 0.0
        assert product.num_reviews == 0

    def test_create_sets_timestamps(self):
        product = _product()
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_create_raises_event(self):
        product = _product()
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert len(events) == 1
        assert events[0].stock == 5

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-1.0)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(stock=-1)


class TestProductDetails:
    def test_partial_update_keeps_other_fields(self):
        product = _product()
        product.update_details(price=99.0)
        assert product.price == 99.0
        assert product.name == "Espresso Grinder"
        assert product.stock == 5

    def test_update_raises_event(self):
        product = _product()
        product.update_details(name="Burr Grinder")
        assert any(isinstance(e, ProductDetailsUpdated) for e in product._events)


class TestStock:
    def test_has_stock_for(self):
        product = _product(stock=2)
        assert product.has_stock_for(2)
        assert not product.has_stock_for(3)

    def test_decrement_stock(self):
        product = _product(stock=5)
        product.decrement_stock(2)
        assert product.stock == 3
        assert any(isinstance(e, StockDecremented) for e in product._events)

    def test_decrement_to_zero(self):
        product = _product(stock=2)
        product.decrement_stock(2)
        assert product.stock == 0

    def test_decrement_beyond_stock_is_a_conflict(self):
        product = _product(stock=1)
        with pytest.raises(ConflictError) as exc:
            product.decrement_stock(2)
        assert "Not enough stock" in str(exc.value)
        assert product.stock == 1

    def test_decrement_must_be_positive(self):
        product = _product(stock=1)
        with pytest.raises(ValidationError):
            product.decrement_stock(0)
