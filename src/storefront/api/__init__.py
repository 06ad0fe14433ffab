"""Storefront API package."""

from storefront.api.errors import register_exception_handlers
from storefront.api.routes import (
    cart_router,
    order_router,
    product_router,
    saved_cart_router,
    user_router,
    webhook_router,
)

routers = [user_router, cart_router, saved_cart_router, product_router, order_router, webhook_router]

__all__ = [
    "cart_router",
    "order_router",
    "product_router",
    "register_exception_handlers",
    "routers",
    "saved_cart_router",
    "user_router",
    "webhook_router",
]
