"""Application tests for order placement and progress."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.progress import MarkOrderDelivered, MarkOrderPaid


def _place(user_id="user-001", items=None, total_price=30.0):
    items = [{"product_id": "prod-001", "quantity": 2}] if items is None else items
    command = PlaceOrder(user_id=user_id, items=json.dumps(items), total_price=total_price)
    return current_domain.process(command, asynchronous=False)


class TestPlaceOrder:
    def test_place_persists(self):
        order = current_domain.repository_for(Order).get(_place())
        assert str(order.user_id) == "user-001"
        assert [(str(i.product_id), i.quantity) for i in order.items] == [("prod-001", 2)]
        assert order.total_price == 30.0

    def test_no_items(self):
        with pytest.raises(ValidationError) as exc:
            _place(items=[])
        assert "No order items" in str(exc.value)

    def test_find_for_user(self):
        _place(user_id="user-001")
        _place(user_id="user-001")
        _place(user_id="user-002")
        assert len(current_domain.repository_for(Order).find_for_user("user-001")) == 2


class TestOrderProgressCommands:
    def test_mark_paid(self):
        order_id = _place()
        current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)
        assert current_domain.repository_for(Order).get(order_id).is_paid is True

    def test_mark_paid_twice(self):
        order_id = _place()
        current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)
        with pytest.raises(ValidationError):
            current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)

    def test_mark_delivered(self):
        order_id = _place()
        current_domain.process(MarkOrderDelivered(order_id=order_id), asynchronous=False)
        order = current_domain.repository_for(Order).get(order_id)
        assert order.is_delivered is True
        assert order.delivered_at is not None

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(MarkOrderPaid(order_id="missing"), asynchronous=False)
