"""FastAPI endpoints for the Storefront — users, carts, catalog, orders and webhooks."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.auth import current_user, ensure_owner_or_admin, require_roles
from storefront.api.schemas import (
    AddToCartRequest,
    ApplyCouponRequest,
    AuthResponse,
    CartLineResponse,
    CartViewLineResponse,
    CheckoutResponse,
    CouponCreatedResponse,
    CouponQuoteResponse,
    CouponResponse,
    CreateCouponRequest,
    CreateProductRequest,
    LoginRequest,
    MessageResponse,
    OrderItemResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductPageResponse,
    ProductResponse,
    RegisterUserRequest,
    RegisterWebhookRequest,
    SavedCartItemRequest,
    SavedCartItemResponse,
    SavedCartResponse,
    UpdateProductRequest,
    UpdateProfileRequest,
    UserResponse,
    WebhookResponse,
)
from storefront.auth.login import LogIn, OpenSession
from storefront.cart.cart import Cart
from storefront.cart.items import AddCartItem, RemoveCartItem
from storefront.checkout.checkout import Checkout
from storefront.config import get_settings
from storefront.coupon.coupon import Coupon
from storefront.coupon.evaluation import apply_coupon
from storefront.coupon.management import CreateCoupon
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.progress import MarkOrderDelivered, MarkOrderPaid
from storefront.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.product.product import Product
from storefront.user.cart import AddToCart, RemoveFromCart, resolve_cart
from storefront.user.profile import UpdateProfile
from storefront.user.registration import RegisterUser
from storefront.user.removal import DeleteUser
from storefront.user.user import Role, User
from storefront.webhook.registration import RegisterWebhook, RemoveWebhook
from storefront.webhook.webhook import Webhook

user_router = APIRouter(prefix="/users", tags=["users"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
saved_cart_router = APIRouter(prefix="/carts", tags=["carts"])
product_router = APIRouter(prefix="/products", tags=["products"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
webhook_router = APIRouter(prefix="/webhooks", tags=["webhooks"])

buyer = require_roles(Role.BUYER)
seller_or_admin = require_roles(Role.SELLER, Role.ADMIN)
admin = require_roles(Role.ADMIN)


# --- Response builders ---


def _user_out(user: User) -> UserResponse:
    return UserResponse(id=str(user.id), name=user.name, email=user.email, role=user.role, balance=user.balance)


def _auth_out(user: User, token: str) -> AuthResponse:
    return AuthResponse(**_user_out(user).model_dump(), token=token)


def _cart_lines_out(user: User) -> list[CartLineResponse]:
    return [
        CartLineResponse(product_id=str(line.product_id), quantity=line.quantity, added_at=line.added_at)
        for line in user.cart_lines
    ]


def _product_out(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        category=product.category,
        stock=product.stock,
        image=product.image,
        rating=product.rating or 0.0,
        num_reviews=product.num_reviews or 0,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _coupon_out(coupon: Coupon) -> CouponResponse:
    return CouponResponse(id=str(coupon.id), code=coupon.code, discount=coupon.discount, expiry=coupon.expiry)


def _saved_cart_out(cart: Cart) -> SavedCartResponse:
    return SavedCartResponse(
        id=str(cart.id),
        user_id=str(cart.user_id),
        cart_items=[
            SavedCartItemResponse(
                product_id=str(item.product_id),
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image=item.image,
            )
            for item in cart.items
        ],
        total_price=cart.total_price,
    )


def _order_out(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        order_items=[OrderItemResponse(product=str(item.product_id), quantity=item.quantity) for item in order.items],
        total_price=order.total_price,
        is_paid=bool(order.is_paid),
        paid_at=order.paid_at,
        is_delivered=bool(order.is_delivered),
        delivered_at=order.delivered_at,
        created_at=order.created_at,
    )


def _webhook_out(webhook: Webhook) -> WebhookResponse:
    return WebhookResponse(
        id=str(webhook.id), user_id=str(webhook.user_id), url=webhook.url, created_at=webhook.created_at
    )


def _reload_user(user_id) -> User:
    return current_domain.repository_for(User).get(user_id)


# --- User endpoints ---


@user_router.post("/register", status_code=201, response_model=AuthResponse)
async def register_user(body: RegisterUserRequest) -> AuthResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        is_seller=body.is_seller,
    )
    user_id = current_domain.process(command, asynchronous=False)
    token = current_domain.process(OpenSession(user_id=user_id), asynchronous=False)
    return _auth_out(_reload_user(user_id), token)


@user_router.post("/login", response_model=AuthResponse)
async def log_in(body: LoginRequest) -> AuthResponse:
    token = current_domain.process(LogIn(email=body.email, password=body.password), asynchronous=False)
    user = current_domain.repository_for(User).find_by_email(body.email)
    return _auth_out(user, token)


@user_router.get("", response_model=list[UserResponse])
async def list_users(user: User = Depends(admin)) -> list[UserResponse]:
    return [_user_out(u) for u in current_domain.repository_for(User).find_all()]


@user_router.get("/profile", response_model=UserResponse)
async def get_profile(user: User = Depends(current_user)) -> UserResponse:
    return _user_out(user)


@user_router.put("/profile", response_model=AuthResponse)
async def update_profile(body: UpdateProfileRequest, user: User = Depends(current_user)) -> AuthResponse:
    command = UpdateProfile(
        user_id=str(user.id),
        name=body.name,
        email=body.email,
        password=body.password,
    )
    current_domain.process(command, asynchronous=False)
    token = current_domain.process(OpenSession(user_id=str(user.id)), asynchronous=False)
    return _auth_out(_reload_user(user.id), token)


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, user: User = Depends(admin)) -> MessageResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message="User removed")


# --- Cart endpoints (the cart held on the user) ---


@cart_router.post("/add", response_model=list[CartLineResponse])
async def add_to_cart(body: AddToCartRequest, user: User = Depends(buyer)) -> list[CartLineResponse]:
    command = AddToCart(user_id=str(user.id), product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_lines_out(_reload_user(user.id))


@cart_router.get("", response_model=list[CartViewLineResponse])
async def view_cart(user: User = Depends(buyer)) -> list[CartViewLineResponse]:
    return [
        CartViewLineResponse(
            product_id=str(line.product_id),
            quantity=line.quantity,
            added_at=line.added_at,
            product=_product_out(product) if product is not None else None,
        )
        for line, product in resolve_cart(user)
    ]


@cart_router.delete("/remove/{product_id}", response_model=list[CartLineResponse])
async def remove_from_cart(product_id: str, user: User = Depends(buyer)) -> list[CartLineResponse]:
    current_domain.process(RemoveFromCart(user_id=str(user.id), product_id=product_id), asynchronous=False)
    return _cart_lines_out(_reload_user(user.id))


@cart_router.post("/checkout", response_model=CheckoutResponse)
def checkout(user: User = Depends(buyer)) -> CheckoutResponse:
    # Sync so the blocking webhook post runs in the threadpool, not on the event loop
    balance = current_domain.process(Checkout(user_id=str(user.id)), asynchronous=False)
    return CheckoutResponse(message="Checkout successful", balance=balance)


# --- Saved cart endpoints ---


@saved_cart_router.get("/{user_id}", response_model=SavedCartResponse)
async def get_saved_cart(user_id: str, user: User = Depends(current_user)) -> SavedCartResponse:
    ensure_owner_or_admin(user, user_id)
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    if cart is None or cart.is_empty:
        raise ObjectNotFoundError({"_entity": "Cart is empty"})
    return _saved_cart_out(cart)


@saved_cart_router.post("", status_code=201, response_model=SavedCartResponse)
async def add_saved_cart_item(body: SavedCartItemRequest, user: User = Depends(current_user)) -> SavedCartResponse:
    ensure_owner_or_admin(user, body.user_id)
    command = AddCartItem(
        user_id=body.user_id,
        product_id=body.product_id,
        name=body.name,
        price=body.price,
        quantity=body.quantity,
        image=body.image,
    )
    cart_id = current_domain.process(command, asynchronous=False)
    return _saved_cart_out(current_domain.repository_for(Cart).get(cart_id))


@saved_cart_router.delete("/{user_id}/{product_id}", response_model=SavedCartResponse | MessageResponse)
async def remove_saved_cart_item(
    user_id: str, product_id: str, user: User = Depends(current_user)
) -> SavedCartResponse | MessageResponse:
    ensure_owner_or_admin(user, user_id)
    cart_id = current_domain.process(RemoveCartItem(user_id=user_id, product_id=product_id), asynchronous=False)
    if cart_id is None:
        return MessageResponse(message="Cart is empty now")
    return _saved_cart_out(current_domain.repository_for(Cart).get(cart_id))


# --- Product endpoints ---
# Fixed paths are declared before /{product_id} so they are matched first.


@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    category: str | None = None,
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    sort_by: str = Query("created_at", alias="sortBy"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = 1,
    limit: int | None = None,
) -> ProductPageResponse:
    settings = get_settings()
    if limit is None:
        limit = settings.default_page_size
    if limit > settings.max_page_size:
        raise ValidationError({"limit": [f"Limit cannot exceed {settings.max_page_size}"]})

    result = current_domain.repository_for(Product).find_page(
        category=category,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
    )
    return ProductPageResponse(
        products=[_product_out(p) for p in result.items],
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_products=result.total_count,
    )


@product_router.get("/top", response_model=list[ProductResponse])
async def top_products() -> list[ProductResponse]:
    return [_product_out(p) for p in current_domain.repository_for(Product).top_rated()]


@product_router.get("/search/{query}", response_model=list[ProductResponse])
async def search_products(query: str) -> list[ProductResponse]:
    return [_product_out(p) for p in current_domain.repository_for(Product).search_by_name(query)]


@product_router.post("/apply-coupon", response_model=CouponQuoteResponse)
async def apply_coupon_code(body: ApplyCouponRequest, user: User = Depends(current_user)) -> CouponQuoteResponse:
    quote = apply_coupon(body.code, body.total_amount)
    return CouponQuoteResponse(success=True, discount=quote.discount, final_price=quote.final_price)


@product_router.post("/create-coupon", status_code=201, response_model=CouponCreatedResponse)
async def create_coupon(body: CreateCouponRequest, user: User = Depends(seller_or_admin)) -> CouponCreatedResponse:
    command = CreateCoupon(code=body.code, discount=body.discount, expiry=body.expiry)
    coupon_id = current_domain.process(command, asynchronous=False)
    coupon = current_domain.repository_for(Coupon).get(coupon_id)
    return CouponCreatedResponse(message="Coupon created successfully", coupon=_coupon_out(coupon))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, user: User = Depends(seller_or_admin)) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
        image=body.image,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product_out(current_domain.repository_for(Product).get(product_id))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_out(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, user: User = Depends(seller_or_admin)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
        image=body.image,
    )
    current_domain.process(command, asynchronous=False)
    return _product_out(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, user: User = Depends(admin)) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product removed")


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, user: User = Depends(current_user)) -> OrderResponse:
    command = PlaceOrder(
        user_id=str(user.id),
        items=json.dumps([{"product_id": item.product, "quantity": item.quantity} for item in body.order_items]),
        total_price=body.total_price,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_out(current_domain.repository_for(Order).get(order_id))


@order_router.get("/mine", response_model=list[OrderResponse])
async def my_orders(user: User = Depends(current_user)) -> list[OrderResponse]:
    return [_order_out(o) for o in current_domain.repository_for(Order).find_for_user(user.id)]


def _owned_order(order_id: str, user: User) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    ensure_owner_or_admin(user, order.user_id)
    return order


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    return _order_out(_owned_order(order_id, user))


@order_router.put("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    _owned_order(order_id, user)
    current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)
    return _order_out(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/deliver", response_model=OrderResponse)
async def deliver_order(order_id: str, user: User = Depends(admin)) -> OrderResponse:
    current_domain.process(MarkOrderDelivered(order_id=order_id), asynchronous=False)
    return _order_out(current_domain.repository_for(Order).get(order_id))


# --- Webhook endpoints ---


@webhook_router.post("", status_code=201, response_model=WebhookResponse)
async def register_webhook(body: RegisterWebhookRequest, user: User = Depends(current_user)) -> WebhookResponse:
    webhook_id = current_domain.process(RegisterWebhook(user_id=str(user.id), url=body.url), asynchronous=False)
    return _webhook_out(current_domain.repository_for(Webhook).get(webhook_id))


@webhook_router.get("/mine", response_model=WebhookResponse)
async def my_webhook(user: User = Depends(current_user)) -> WebhookResponse:
    webhook = current_domain.repository_for(Webhook).find_for_user(user.id)
    if webhook is None:
        raise ObjectNotFoundError({"_entity": "No webhook registered"})
    return _webhook_out(webhook)


@webhook_router.delete("/mine", response_model=MessageResponse)
async def remove_webhook(user: User = Depends(current_user)) -> MessageResponse:
    current_domain.process(RemoveWebhook(user_id=str(user.id)), asynchronous=False)
    return MessageResponse(message="Webhook removed")
