"""Domain events for the Coupon aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponCreated:
    """A seller published a new discount code."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    discount = Float(required=True)
    expiry = DateTime(required=True)
