"""Domain events for the standalone Cart aggregate."""

from protean.fields import Float, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartUpdated:
    """An item was added to or removed from a saved cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_price = Float(required=True)


@storefront.event(part_of="Cart")
class CartEmptied:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
