"""Login — verify credentials and open a session.

``resolve_user`` is the read side: it turns a bearer token back into the
user it was issued to.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.auth.passwords import verify_password
from storefront.auth.session import Session
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.exceptions import AuthenticationError
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Session")
class LogIn:
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=255)


@storefront.command(part_of="Session")
class OpenSession:
    """Issue a token for a user who has just registered or changed credentials."""

    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Session)
class SessionHandler:
    @handle(LogIn)
    def log_in(self, command):
        user = current_domain.repository_for(User).find_by_email(command.email)
        if user is None or not verify_password(command.password, user.password_hash):
            logger.info("Login rejected", email=command.email)
            raise AuthenticationError("Invalid email or password")

        return _issue(user.id)

    @handle(OpenSession)
    def open_session(self, command):
        current_domain.repository_for(User).get(command.user_id)
        return _issue(command.user_id)


def _issue(user_id):
    session = Session.issue(user_id, get_settings().session_ttl_hours)
    current_domain.repository_for(Session).add(session)
    return session.token


def resolve_user(token: str) -> User:
    """Return the user a live session token belongs to."""
    if not token:
        raise AuthenticationError("Not authorized, no token")

    session = current_domain.repository_for(Session).find_by_token(token)
    if session is None or session.is_expired():
        raise AuthenticationError("Not authorized, token failed")

    try:
        return current_domain.repository_for(User).get(session.user_id)
    except ObjectNotFoundError:
        raise AuthenticationError("Not authorized, token failed") from None
