"""Embedded cart management — commands and handler.

Adding checks the requested quantity against the product's current stock
but does not reserve anything; stock only moves at checkout.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.user.user import User


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="User")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        product = current_domain.repository_for(Product).get(command.product_id)

        user.add_to_cart(product, command.quantity)
        repo.add(user)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_from_cart(command.product_id)
        repo.add(user)


def resolve_cart(user):
    """Pair each cart line with its current product, or None if it is gone."""
    products = current_domain.repository_for(Product)
    resolved = []
    for line in user.cart_lines:
        try:
            product = products.get(line.product_id)
        except ObjectNotFoundError:
            product = None
        resolved.append((line, product))
    return resolved
