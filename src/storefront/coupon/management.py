"""Coupon publishing — command and handler."""

import structlog
from protean import handle
from protean.fields import DateTime, Float, String
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon
from storefront.domain import storefront
from storefront.exceptions import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=100)
    discount = Float(required=True, min_value=0.0, max_value=100.0)
    expiry = DateTime(required=True)


@storefront.command_handler(part_of=Coupon)
class CreateCouponHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.find_by_code(command.code) is not None:
            raise ConflictError({"code": ["Coupon code already exists"]})

        coupon = Coupon.create(
            code=command.code,
            discount=command.discount,
            expiry=command.expiry,
        )
        repo.add(coupon)
        logger.info("Coupon created", code=coupon.code, discount=coupon.discount)
        return str(coupon.id)
