"""User aggregate with the embedded CartLine entity.

The user owns its cart: lines are added and removed here, and checkout
debits the balance and clears the cart in one step. Stock is only checked
as a ceiling when adding; it is taken at checkout.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.user.events import (
    CartItemAdded,
    CartItemRemoved,
    CheckoutCompleted,
    ProfileUpdated,
    UserRegistered,
)


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


@storefront.entity(part_of="User")
class CartLine:
    """A product reference and the quantity the user wants of it."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.BUYER.value)
    balance = Float(default=0.0, min_value=0.0)
    cart = HasMany(CartLine)
    registered_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def balance_cannot_be_negative(self):
        if self.balance is not None and self.balance < 0:
            raise ValidationError({"balance": ["Balance cannot be negative"]})

    @invariant.post
    def one_cart_line_per_product(self):
        product_ids = [str(line.product_id) for line in self.cart]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart": ["A product can only appear once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, password_hash, role=Role.BUYER.value, balance=0.0):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            balance=balance,
            registered_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email,
                role=role,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def update_profile(self, name=None, email=None, password_hash=None):
        if name:
            self.name = name
        if email:
            self.email = email
        if password_hash:
            self.password_hash = password_hash
        self.updated_at = datetime.now(UTC)

        self.raise_(ProfileUpdated(user_id=self.id, name=self.name, email=self.email))

    def has_role(self, *roles):
        return self.role in {r.value if isinstance(r, Role) else r for r in roles}

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    @property
    def cart_lines(self):
        """Cart lines in the order they were first added."""
        return sorted(self.cart, key=lambda line: line.added_at or datetime.min.replace(tzinfo=UTC))

    def cart_line_for(self, product_id):
        return next((line for line in self.cart if str(line.product_id) == str(product_id)), None)

    def add_to_cart(self, product, quantity):
        """Add ``quantity`` of ``product``, merging with an existing line.

        ``product`` is the current Product record; its stock is the ceiling
        for the combined quantity.
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be at least 1."]})

        if quantity > product.stock:
            raise ConflictError({"quantity": ["Not enough stock available."]})

        line = self.cart_line_for(product.id)
        if line is not None:
            if line.quantity + quantity > product.stock:
                raise ConflictError({"quantity": ["Adding this many exceeds available stock."]})
            line.quantity += quantity
        else:
            line = CartLine(product_id=product.id, quantity=quantity, added_at=datetime.now(UTC))
            self.add_cart(line)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                user_id=self.id,
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=line.quantity,
            )
        )

    def remove_from_cart(self, product_id):
        line = self.cart_line_for(product_id)
        if line is None:
            raise ValidationError({"product_id": ["Item not found in cart."]})

        self.remove_cart(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(user_id=self.id, product_id=str(product_id)))

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def complete_checkout(self, plan):
        """Debit the planned total and empty the cart.

        ``plan`` comes from ``plan_checkout`` and has already been validated
        against this user's balance and the current stock.
        """
        if self.balance < plan.total_price:
            raise ConflictError({"balance": ["Insufficient balance."]})

        items = [{"product_id": str(line.product_id), "quantity": line.quantity} for line in self.cart_lines]

        self.balance = self.balance - plan.total_price
        for line in list(self.cart):
            self.remove_cart(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CheckoutCompleted(
                user_id=self.id,
                total_price=plan.total_price,
                balance=self.balance,
                items=json.dumps(items),
                completed_at=self.updated_at,
            )
        )
