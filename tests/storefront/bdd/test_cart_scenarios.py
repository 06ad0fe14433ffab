"""BDD tests for the cart held on the user."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when
from storefront.user.cart import AddToCart, RemoveFromCart

scenarios("features/cart.feature")


@when(parsers.cfparse('the buyer adds {quantity:d} of "{name}"'))
def buyer_adds(buyer_id, products, outcome, quantity, name):
    command = AddToCart(user_id=buyer_id, product_id=products[name], quantity=quantity)
    try:
        current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        outcome["error"] = exc


@when(parsers.cfparse('the buyer removes "{name}"'))
def buyer_removes(buyer_id, products, outcome, name):
    command = RemoveFromCart(user_id=buyer_id, product_id=products[name])
    try:
        current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        outcome["error"] = exc


@then(parsers.cfparse('the cart change is refused with "{message}"'))
def cart_change_refused(outcome, message):
    assert "error" in outcome
    assert message in str(outcome["error"])
