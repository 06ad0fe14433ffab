"""Coupon aggregate — a percentage discount code with an expiry date.

Coupons are read-only at use time. Any authenticated user may use any code
until it expires; redemptions are not tracked.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String

from storefront.coupon.events import CouponCreated
from storefront.domain import storefront


@dataclass(frozen=True)
class CouponQuote:
    """Outcome of applying a coupon to an amount."""

    code: str
    discount: float
    final_price: float


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


@storefront.aggregate
class Coupon:
    code = String(required=True, max_length=100, unique=True)
    discount = Float(required=True, min_value=0.0, max_value=100.0)
    expiry = DateTime(required=True)
    created_at = DateTime()

    @classmethod
    def create(cls, code, discount, expiry):
        now = datetime.now(UTC)
        coupon = cls(code=code, discount=discount, expiry=expiry, created_at=now)
        coupon.raise_(
            CouponCreated(
                coupon_id=coupon.id,
                code=code,
                discount=coupon.discount,
                expiry=coupon.expiry,
            )
        )
        return coupon

    def is_expired(self, now=None):
        now = _as_utc(now or datetime.now(UTC))
        return now > _as_utc(self.expiry)

    def quote(self, total_amount, now=None):
        """Price ``total_amount`` after this coupon's percentage discount."""
        if self.is_expired(now):
            raise ValidationError({"code": ["Coupon has expired"]})

        discount = total_amount * self.discount / 100
        return CouponQuote(
            code=self.code,
            discount=discount,
            final_price=total_amount - discount,
        )
