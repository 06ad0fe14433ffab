import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean import current_domain
from storefront.api import register_exception_handlers, routers
from storefront.auth.login import OpenSession
from storefront.auth.passwords import hash_password
from storefront.user.user import Role, User


@pytest.fixture()
def client():
    from storefront.domain import storefront

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    for router in routers:
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


def make_user(role=Role.BUYER, balance=0.0, email=None):
    """Persist a user with the given role and return (user_id, auth headers)."""
    user = User.register(
        name=f"{role.value.title()} User",
        email=email or f"{role.value}@example.com",
        password_hash=hash_password("s3cret"),
        role=role.value,
        balance=balance,
    )
    current_domain.repository_for(User).add(user)
    token = current_domain.process(OpenSession(user_id=str(user.id)), asynchronous=False)
    return str(user.id), {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user_factory():
    return make_user


@pytest.fixture()
def buyer():
    return make_user(Role.BUYER, balance=100.0)


@pytest.fixture()
def seller():
    return make_user(Role.SELLER)


@pytest.fixture()
def admin():
    return make_user(Role.ADMIN)


@pytest.fixture()
def product_factory(client, seller):
    _, headers = seller

    def create(name="Mug", price=30.0, stock=5, category="kitchen"):
        response = client.post(
            "/products",
            json={"name": name, "description": "A product", "price": price, "category": category, "stock": stock},
            headers=headers,
        )
        assert response.status_code == 201
        return response.json()["id"]

    return create
