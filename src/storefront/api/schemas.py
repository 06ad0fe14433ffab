"""Pydantic request/response schemas for the Storefront API.

Request and response bodies use camelCase keys on the wire; fields are
snake_case in Python and either spelling is accepted on input.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- User Request Schemas ---


class RegisterUserRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Ada Buyer",
                    "email": "ada@example.com",
                    "password": "s3cret-pass",
                    "isSeller": False,
                }
            ]
        }
    )

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=255)
    is_seller: bool = False


class LoginRequest(CamelModel):
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, max_length=255)


# --- Cart Request Schemas ---


class AddToCartRequest(CamelModel):
    model_config = ConfigDict(json_schema_extra={"examples": [{"productId": "prod-001", "quantity": 2}]})

    product_id: str
    quantity: int


class SavedCartItemRequest(CamelModel):
    user_id: str
    product_id: str
    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str | None = Field(None, max_length=2048)


# --- Product Request Schemas ---


class CreateProductRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Espresso Grinder",
                    "description": "Conical burr grinder with 40 settings.",
                    "price": 129.0,
                    "category": "kitchen",
                    "stock": 12,
                    "image": "https://cdn.example.com/grinder.jpg",
                }
            ]
        }
    )

    name: str = Field(..., max_length=255)
    description: str
    price: float = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    stock: int = Field(0, ge=0)
    image: str | None = Field(None, max_length=500)


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    stock: int | None = Field(None, ge=0)
    image: str | None = Field(None, max_length=500)


# --- Coupon Request Schemas ---


class ApplyCouponRequest(CamelModel):
    code: str
    total_amount: float


class CreateCouponRequest(CamelModel):
    code: str = Field(..., max_length=100)
    discount: float = Field(..., ge=0, le=100)
    expiry: datetime


# --- Order Request Schemas ---


class OrderItemRequest(CamelModel):
    product: str
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(CamelModel):
    order_items: list[OrderItemRequest] = Field(default_factory=list)
    total_price: float = Field(..., ge=0)


# --- Webhook Request Schemas ---


class RegisterWebhookRequest(CamelModel):
    url: str = Field(..., max_length=2048)


# --- Response Schemas ---


class MessageResponse(CamelModel):
    message: str


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    balance: float


class AuthResponse(UserResponse):
    token: str


class CartLineResponse(CamelModel):
    product_id: str
    quantity: int
    added_at: datetime | None = None


class ProductResponse(CamelModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    image: str | None = None
    rating: float = 0.0
    num_reviews: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartViewLineResponse(CamelModel):
    product_id: str
    quantity: int
    added_at: datetime | None = None
    product: ProductResponse | None = None


class CheckoutResponse(CamelModel):
    message: str
    balance: float


class ProductPageResponse(CamelModel):
    products: list[ProductResponse]
    current_page: int
    total_pages: int
    total_products: int


class CouponQuoteResponse(CamelModel):
    success: bool = True
    discount: float
    final_price: float


class CouponResponse(CamelModel):
    id: str
    code: str
    discount: float
    expiry: datetime


class CouponCreatedResponse(CamelModel):
    message: str
    coupon: CouponResponse


class SavedCartItemResponse(CamelModel):
    product_id: str
    name: str
    price: float
    quantity: int
    image: str | None = None


class SavedCartResponse(CamelModel):
    id: str
    user_id: str
    cart_items: list[SavedCartItemResponse]
    total_price: float


class OrderItemResponse(CamelModel):
    product: str
    quantity: int


class OrderResponse(CamelModel):
    id: str
    user_id: str
    order_items: list[OrderItemResponse]
    total_price: float
    is_paid: bool
    paid_at: datetime | None = None
    is_delivered: bool
    delivered_at: datetime | None = None
    created_at: datetime | None = None


class WebhookResponse(CamelModel):
    id: str
    user_id: str
    url: str
    created_at: datetime | None = None
