"""Application tests for coupon creation and evaluation."""

from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.coupon.coupon import Coupon
from storefront.coupon.evaluation import apply_coupon
from storefront.coupon.management import CreateCoupon
from storefront.exceptions import ConflictError


def _create(code="SAVE10", discount=10.0, expiry=None):
    expiry = expiry or datetime.now(UTC) + timedelta(days=30)
    return current_domain.process(CreateCoupon(code=code, discount=discount, expiry=expiry), asynchronous=False)


class TestCreateCoupon:
    def test_create_persists(self):
        coupon = current_domain.repository_for(Coupon).get(_create())
        assert coupon.code == "SAVE10"
        assert coupon.discount == 10.0

    def test_duplicate_code_is_a_conflict(self):
        _create()
        with pytest.raises(ConflictError) as exc:
            _create()
        assert "Coupon code already exists" in str(exc.value)


class TestApplyCoupon:
    def test_quote(self):
        _create(discount=25.0)
        quote = apply_coupon("SAVE10", 80.0)
        assert quote.discount == pytest.approx(20.0)
        assert quote.final_price == pytest.approx(60.0)

    def test_unknown_code(self):
        with pytest.raises(ValidationError) as exc:
            apply_coupon("NOPE", 80.0)
        assert "Invalid coupon code" in str(exc.value)

    def test_expired_code(self):
        _create(expiry=datetime.now(UTC) - timedelta(days=1))
        with pytest.raises(ValidationError) as exc:
            apply_coupon("SAVE10", 80.0)
        assert "Coupon has expired" in str(exc.value)

    def test_applying_does_not_consume_coupon(self):
        _create()
        apply_coupon("SAVE10", 10.0)
        assert apply_coupon("SAVE10", 10.0).final_price == pytest.approx(9.0)
