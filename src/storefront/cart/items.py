"""Saved cart item management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=2048)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)

        cart.add_item(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            quantity=command.quantity,
            image=command.image,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveCartItem)
    def remove_item(self, command):
        """Remove an item; returns the cart id, or None once the cart is deleted."""
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError({"_entity": "Cart not found"})

        cart.remove_item(command.product_id)
        if cart.is_empty:
            repo._dao.delete(cart)
            logger.info("Saved cart emptied and deleted", user_id=str(command.user_id))
            return None

        repo.add(cart)
        return str(cart.id)
