"""Domain events for the User aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)


@storefront.event(part_of="User")
class CartItemAdded:
    """A product was put in the user's cart, or its line quantity raised."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    """A product's line was taken out of the user's cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class CheckoutCompleted:
    """The user's cart was paid for from their balance and emptied."""

    __version__ = 1

    user_id = Identifier(required=True)
    total_price = Float(required=True)
    balance = Float(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    completed_at = DateTime(required=True)
