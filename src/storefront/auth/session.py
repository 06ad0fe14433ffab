"""Session aggregate — an issued bearer token bound to a user."""

import secrets
from datetime import UTC, datetime, timedelta

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.aggregate
class Session:
    token = String(required=True, max_length=128, unique=True)
    user_id = Identifier(required=True)
    issued_at = DateTime(required=True)
    expires_at = DateTime(required=True)

    @classmethod
    def issue(cls, user_id, ttl_hours):
        now = datetime.now(UTC)
        return cls(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            issued_at=now,
            expires_at=now + timedelta(hours=ttl_hours),
        )

    def is_expired(self, now=None):
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return now >= expires_at


@storefront.repository(part_of=Session)
class SessionRepository:
    def find_by_token(self, token: str) -> Session | None:
        results = self._dao.query.filter(token=token).all()
        return results.items[0] if results.items else None

    def find_for_user(self, user_id) -> list[Session]:
        return list(self._dao.query.filter(user_id=str(user_id)).all().items)
