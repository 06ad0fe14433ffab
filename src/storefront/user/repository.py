"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.user.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Find a user by email address."""
        results = self._dao.query.filter(email=email).all()
        return results.items[0] if results.items else None

    def find_all(self) -> list[User]:
        return list(self._dao.query.order_by("registered_at").all().items)
