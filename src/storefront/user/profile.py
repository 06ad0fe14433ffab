"""Profile management — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.auth.passwords import hash_password
from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class UpdateProfile:
    """Change name, email or password. Empty fields are left untouched."""

    user_id = Identifier(required=True)
    name = String(max_length=100)
    email = String(max_length=254)
    password = String(max_length=255)


@storefront.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email and command.email != user.email:
            if repo.find_by_email(command.email) is not None:
                raise ValidationError({"email": ["User already exists"]})

        user.update_profile(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password) if command.password else None,
        )
        repo.add(user)
