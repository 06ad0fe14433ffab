"""Repository for the Coupon aggregate."""

from storefront.coupon.coupon import Coupon
from storefront.domain import storefront


@storefront.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code: str) -> Coupon | None:
        """Find a coupon by its exact code."""
        results = self._dao.query.filter(code=code).all()
        return results.items[0] if results.items else None
