"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.product.management import CreateProduct
from storefront.product.product import Product
from storefront.user.cart import AddToCart
from storefront.user.user import User


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Holds the result of the When step, or the error it raised."""
    return {}


@given(parsers.cfparse("a buyer with a balance of {balance:f}"), target_fixture="buyer_id")
def buyer_with_balance(balance):
    user = User.register(name="Ada", email="ada@example.com", password_hash="x", balance=balance)
    current_domain.repository_for(User).add(user)
    return str(user.id)


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_stock(products, name, price, stock):
    command = CreateProduct(name=name, description=f"Product {name}", price=price, category="misc", stock=stock)
    products[name] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('the buyer has {quantity:d} of "{name}" in their cart'))
def buyer_has_in_cart(buyer_id, products, quantity, name):
    command = AddToCart(user_id=buyer_id, product_id=products[name], quantity=quantity)
    current_domain.process(command, asynchronous=False)


@then(parsers.cfparse("the buyer's balance is {balance:f}"))
def buyer_balance_is(buyer_id, balance):
    assert current_domain.repository_for(User).get(buyer_id).balance == pytest.approx(balance)


@then(parsers.cfparse('the stock of "{name}" is {stock:d}'))
def stock_is(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).stock == stock


@then(parsers.cfparse('the buyer\'s cart holds {quantity:d} of "{name}"'))
def cart_holds(buyer_id, products, quantity, name):
    line = current_domain.repository_for(User).get(buyer_id).cart_line_for(products[name])
    assert line is not None
    assert line.quantity == quantity
