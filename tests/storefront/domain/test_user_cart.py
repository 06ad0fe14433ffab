"""Tests for the cart held on the User aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.exceptions import ConflictError
from storefront.product.product import Product
from storefront.user.events import CartItemAdded, CartItemRemoved, UserRegistered
from storefront.user.user import Role, User


def _user(**overrides):
    defaults = {"name": "Ada", "email": "ada@example.com", "password_hash": "x", "balance": 100.0}
    defaults.update(overrides)
    return User.register(**defaults)


def _product(name="Widget", price=30.0, stock=5):
    return Product.create(name=name, description="A product", price=price, category="misc", stock=stock)


class TestRegistration:
    def test_defaults_to_buyer(self):
        user = _user()
        assert user.role == Role.BUYER.value
        assert user.has_role(Role.BUYER)
        assert not user.has_role(Role.SELLER, Role.ADMIN)

    def test_starts_with_empty_cart(self):
        assert len(_user().cart) == 0

    def test_raises_registered_event(self):
        user = _user()
        assert any(isinstance(e, UserRegistered) for e in user._events)

    def test_negative_balance_is_rejected(self):
        with pytest.raises(ValidationError):
            _user(balance=-5.0)


class TestAddToCart:
    def test_adds_new_line(self):
        user, product = _user(), _product()
        user.add_to_cart(product, 2)
        line = user.cart_line_for(product.id)
        assert line.quantity == 2

    def test_merges_with_existing_line(self):
        user, product = _user(), _product(stock=5)
        user.add_to_cart(product, 2)
        user.add_to_cart(product, 3)
        assert len(user.cart) == 1
        assert user.cart_line_for(product.id).quantity == 5

    def test_raises_event_with_line_quantity(self):
        user, product = _user(), _product()
        user.add_to_cart(product, 1)
        user.add_to_cart(product, 2)
        event = [e for e in user._events if isinstance(e, CartItemAdded)][-1]
        assert event.quantity == 2
        assert event.line_quantity == 3

    def test_zero_quantity_is_rejected(self):
        user, product = _user(), _product()
        with pytest.raises(ValidationError) as exc:
            user.add_to_cart(product, 0)
        assert "Quantity must be at least 1" in str(exc.value)

    def test_more_than_stock_is_a_conflict(self):
        user, product = _user(), _product(stock=1)
        with pytest.raises(ConflictError) as exc:
            user.add_to_cart(product, 2)
        assert "Not enough stock available" in str(exc.value)
        assert len(user.cart) == 0

    def test_combined_quantity_over_stock_is_a_conflict(self):
        user, product = _user(), _product(stock=3)
        user.add_to_cart(product, 2)
        with pytest.raises(ConflictError):
            user.add_to_cart(product, 2)
        assert user.cart_line_for(product.id).quantity == 2

    def test_lines_keep_insertion_order(self):
        user = _user()
        first, second = _product(name="First"), _product(name="Second")
        user.add_to_cart(first, 1)
        user.add_to_cart(second, 1)
        assert [str(line.product_id) for line in user.cart_lines] == [str(first.id), str(second.id)]


class TestRemoveFromCart:
    def test_removes_only_that_line(self):
        user = _user()
        keep, drop = _product(name="Keep"), _product(name="Drop")
        user.add_to_cart(keep, 1)
        user.add_to_cart(drop, 1)

        user.remove_from_cart(drop.id)

        assert [str(line.product_id) for line in user.cart_lines] == [str(keep.id)]
        assert any(isinstance(e, CartItemRemoved) for e in user._events)

    def test_absent_product_is_rejected(self):
        user, product = _user(), _product()
        user.add_to_cart(product, 1)
        with pytest.raises(ValidationError) as exc:
            user.remove_from_cart("no-such-product")
        assert "Item not found in cart" in str(exc.value)
        assert len(user.cart) == 1
