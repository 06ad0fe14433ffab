"""Cart aggregate — a saved cart that carries its own copy of product details.

Unlike the cart embedded in the User, items here hold the name, price and
image they were added with and are not checked against the catalog. The
total is recomputed from the items after every change.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartEmptied, CartUpdated
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=2048)


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    total_price = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_matches_items(self):
        if abs((self.total_price or 0.0) - self.computed_total()) > 1e-9:
            raise ValidationError({"total_price": ["Cart total is out of date"]})

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, total_price=0.0, created_at=now, updated_at=now)

    def computed_total(self):
        return sum(item.price * item.quantity for item in self.items)

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def is_empty(self):
        return not self.items

    def add_item(self, product_id, name, price, quantity, image=None):
        """Add an item, or raise the quantity of the item already held.

        An existing item keeps the name and price it was first added with.
        """
        existing = self.item_for(product_id)
        with atomic_change(self):
            if existing is not None:
                existing.quantity += quantity
            else:
                self.add_items(
                    CartItem(product_id=product_id, name=name, price=price, quantity=quantity, image=image)
                )
            self.total_price = self.computed_total()
        self.updated_at = datetime.now(UTC)
        self._raise_updated(product_id)

    def remove_item(self, product_id):
        """Drop the item for ``product_id``. Removing an absent item is a no-op."""
        existing = self.item_for(product_id)
        with atomic_change(self):
            if existing is not None:
                self.remove_items(existing)
            self.total_price = self.computed_total()
        self.updated_at = datetime.now(UTC)

        if self.is_empty:
            self.raise_(CartEmptied(cart_id=str(self.id), user_id=str(self.user_id)))
        else:
            self._raise_updated(product_id)

    def _raise_updated(self, product_id):
        self.raise_(
            CartUpdated(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                item_count=len(self.items),
                total_price=self.total_price,
            )
        )


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> Cart | None:
        results = self._dao.query.filter(user_id=str(user_id)).all()
        return results.items[0] if results.items else None
