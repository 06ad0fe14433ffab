"""Integration tests for /orders endpoints."""

from storefront.user.user import Role


def _place(client, headers, items=None, total_price=30.0):
    items = [{"product": "prod-001", "quantity": 2}] if items is None else items
    return client.post("/orders", json={"orderItems": items, "totalPrice": total_price}, headers=headers)


class TestOrderEndpoints:
    def test_place_order(self, client, buyer):
        user_id, headers = buyer
        response = _place(client, headers)
        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == user_id
        assert data["orderItems"] == [{"product": "prod-001", "quantity": 2}]
        assert data["isPaid"] is False

    def test_no_items(self, client, buyer):
        _, headers = buyer
        response = _place(client, headers, items=[])
        assert response.status_code == 400
        assert response.json()["message"] == "No order items"

    def test_my_orders(self, client, buyer, seller):
        _, headers = buyer
        _, other = seller
        _place(client, headers)
        _place(client, other)
        assert len(client.get("/orders/mine", headers=headers).json()) == 1

    def test_get_order_owner_only(self, client, buyer, user_factory):
        _, headers = buyer
        order_id = _place(client, headers).json()["id"]
        _, stranger = user_factory(Role.BUYER, email="stranger@example.com")

        assert client.get(f"/orders/{order_id}", headers=headers).status_code == 200
        assert client.get(f"/orders/{order_id}", headers=stranger).status_code == 403

    def test_get_unknown_order(self, client, buyer):
        _, headers = buyer
        assert client.get("/orders/missing", headers=headers).status_code == 404

    def test_pay_then_deliver(self, client, buyer, admin):
        _, headers = buyer
        _, admin_headers = admin
        order_id = _place(client, headers).json()["id"]

        paid = client.put(f"/orders/{order_id}/pay", headers=headers)
        assert paid.status_code == 200
        assert paid.json()["isPaid"] is True

        assert client.put(f"/orders/{order_id}/deliver", headers=headers).status_code == 403
        delivered = client.put(f"/orders/{order_id}/deliver", headers=admin_headers)
        assert delivered.json()["isDelivered"] is True

    def test_pay_twice(self, client, buyer):
        _, headers = buyer
        order_id = _place(client, headers).json()["id"]
        client.put(f"/orders/{order_id}/pay", headers=headers)
        assert client.put(f"/orders/{order_id}/pay", headers=headers).status_code == 400
