"""Checkout — pay for the user's cart from their balance.

Runs in two phases. ``plan_checkout`` reads the user and the current product
records and either rejects the checkout or returns a ``CheckoutPlan``; it
changes nothing. The handler then applies the plan: stock decrements on each
product and the balance debit on the user, all added to the command's unit
of work so they commit together.

There is no version check between planning and commit. Two checkouts racing
on the same product can both pass validation and oversell it.
"""

from dataclasses import dataclass

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.product.product import Product
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockDecrement:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class CheckoutPlan:
    """What a validated checkout will change."""

    user_id: str
    decrements: tuple[StockDecrement, ...]
    total_price: float

    @property
    def balance_delta(self) -> float:
        return -self.total_price


def plan_checkout(user: User, products: dict) -> CheckoutPlan:
    """Validate the user's cart against current stock and balance.

    Args:
        user: the user whose cart is checked out.
        products: product id -> current Product, or None when the product
            no longer exists.
    """
    decrements = []
    total_price = 0.0

    for line in user.cart_lines:
        product = products.get(str(line.product_id))
        if product is None:
            raise ConflictError({"cart": ["Some products in cart are no longer available."]})
        if not product.has_stock_for(line.quantity):
            raise ConflictError({"stock": [f"Not enough stock for {product.name}."]})

        total_price += product.price * line.quantity
        decrements.append(StockDecrement(product_id=str(product.id), quantity=line.quantity))

    if user.balance < total_price:
        raise ConflictError({"balance": ["Insufficient balance."]})

    return CheckoutPlan(user_id=str(user.id), decrements=tuple(decrements), total_price=total_price)


def _load_cart_products(user: User) -> dict:
    repo = current_domain.repository_for(Product)
    products = {}
    for line in user.cart:
        try:
            products[str(line.product_id)] = repo.get(line.product_id)
        except ObjectNotFoundError:
            products[str(line.product_id)] = None
    return products


@storefront.command(part_of="User")
class Checkout:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        user_repo = current_domain.repository_for(User)
        user = user_repo.get(command.user_id)
        products = _load_cart_products(user)

        plan = plan_checkout(user, products)

        product_repo = current_domain.repository_for(Product)
        for decrement in plan.decrements:
            product = products[decrement.product_id]
            product.decrement_stock(decrement.quantity)
            product_repo.add(product)

        user.complete_checkout(plan)
        user_repo.add(user)

        logger.info(
            "Checkout completed",
            user_id=str(user.id),
            total_price=plan.total_price,
            balance=user.balance,
            lines=len(plan.decrements),
        )
        return user.balance
