"""Webhook aggregate — a user's checkout notification endpoint."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.aggregate
class Webhook:
    """The URL notified after the user's checkouts. One per user."""

    user_id = Identifier(required=True, unique=True)
    url = String(required=True, max_length=2048)
    created_at = DateTime()

    @classmethod
    def register(cls, user_id, url):
        return cls(user_id=user_id, url=url, created_at=datetime.now(UTC))

    def change_url(self, url):
        self.url = url


@storefront.repository(part_of=Webhook)
class WebhookRepository:
    def find_for_user(self, user_id) -> Webhook | None:
        results = self._dao.query.filter(user_id=str(user_id)).all()
        return results.items[0] if results.items else None
