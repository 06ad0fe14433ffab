"""Order aggregate with OrderItem entities.

An order is a record of what a user asked for and the total they agreed to.
Its items and total never change after placement; only the payment and
delivery flags do, and each can be set once.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer

from storefront.domain import storefront
from storefront.order.events import OrderDelivered, OrderPaid, OrderPlaced


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_price = Float(required=True, min_value=0.0)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    created_at = DateTime()

    @classmethod
    def place(cls, user_id, items, total_price):
        """Create an order from ``items``, a list of (product_id, quantity) pairs."""
        if not items:
            raise ValidationError({"order_items": ["No order items"]})

        now = datetime.now(UTC)
        order = cls(user_id=user_id, total_price=total_price, created_at=now)
        for product_id, quantity in items:
            order.add_items(OrderItem(product_id=product_id, quantity=quantity))

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                item_count=len(items),
                total_price=total_price,
                placed_at=now,
            )
        )
        return order

    def is_owned_by(self, user_id):
        return str(self.user_id) == str(user_id)

    def mark_paid(self):
        if self.is_paid:
            raise ValidationError({"is_paid": ["Order is already paid"]})

        self.is_paid = True
        self.paid_at = datetime.now(UTC)
        self.raise_(OrderPaid(order_id=self.id, paid_at=self.paid_at))

    def mark_delivered(self):
        if self.is_delivered:
            raise ValidationError({"is_delivered": ["Order is already delivered"]})

        self.is_delivered = True
        self.delivered_at = datetime.now(UTC)
        self.raise_(OrderDelivered(order_id=self.id, delivered_at=self.delivered_at))


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id) -> list[Order]:
        return list(self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items)
