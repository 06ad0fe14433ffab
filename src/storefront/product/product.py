"""Product aggregate — a sellable catalog entry with price and stock on hand.

Stock is only ever lowered by checkout, through ``decrement_stock``, and the
decrement is refused when it would take stock below zero.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.product.events import ProductCreated, ProductDetailsUpdated, StockDecremented

# Fields that catalog listings may be sorted by
SORTABLE_FIELDS = ("created_at", "price", "name", "rating", "stock")


@storefront.aggregate
class Product:
    """A product listed by a seller."""

    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=100)
    stock = Integer(default=0, min_value=0)
    image = String(max_length=500)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def create(cls, name, description, price, category, stock=0, image=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            stock=stock or 0,
            image=image,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=product.price,
                category=category,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category=None, stock=None, image=None):
        """Apply a partial edit; fields left as ``None`` keep their current value."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if stock is not None:
            self.stock = stock
        if image is not None:
            self.image = image

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category=self.category,
                stock=self.stock,
            )
        )

    def has_stock_for(self, quantity):
        return quantity <= self.stock

    def decrement_stock(self, quantity):
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise ConflictError({"stock": [f"Not enough stock for {self.name}"]})

        previous_stock = self.stock
        self.stock = previous_stock - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )
