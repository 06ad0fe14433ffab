"""Coupon evaluation — price an amount against a discount code.

A read: nothing is persisted and the coupon is not consumed.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon, CouponQuote


def apply_coupon(code: str, total_amount: float, now=None) -> CouponQuote:
    if total_amount < 0:
        raise ValidationError({"total_amount": ["Total amount cannot be negative"]})

    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None:
        raise ValidationError({"code": ["Invalid coupon code"]})

    return coupon.quote(total_amount, now=now)
