"""Request authentication and role gates for the Storefront API."""

from fastapi import Depends, Header, HTTPException

from storefront.auth.login import resolve_user
from storefront.exceptions import AuthenticationError
from storefront.user.user import Role, User


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def current_user(authorization: str | None = Header(None)) -> User:
    try:
        return resolve_user(bearer_token(authorization))
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=exc.message) from exc


def require_roles(*roles: Role):
    """Dependency that admits only users holding one of ``roles``."""

    async def dependency(user: User = Depends(current_user)) -> User:
        if not user.has_role(*roles):
            raise HTTPException(status_code=403, detail="Access denied: insufficient permissions")
        return user

    return dependency


def ensure_owner_or_admin(user: User, owner_id) -> None:
    if str(user.id) != str(owner_id) and not user.has_role(Role.ADMIN):
        raise HTTPException(status_code=403, detail="Access denied: insufficient permissions")
