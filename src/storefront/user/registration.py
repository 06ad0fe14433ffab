"""User registration — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from storefront.auth.passwords import hash_password
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.user.user import Role, User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Open a buyer account, or a seller account when ``is_seller`` is set."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=255)
    is_seller = Boolean(default=False)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["User already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password),
            role=Role.SELLER.value if command.is_seller else Role.BUYER.value,
            balance=get_settings().starting_balance,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
