"""Integration tests for the customer-facing API via TestClient."""

CUSTOMER = {"Authorization": "Bearer customer-token"}
OTHER_CUSTOMER = {"Authorization": "Bearer other-token"}
ADMIN = {"Authorization": "Bearer admin-token"}

BILLING = {
    "customer_name": "Asha Rao",
    "phone": "9876543210",
    "address": "12 MG Road, Bengaluru",
    "payment_method": "COD",
}


def _add(client, product_id, quantity=1, headers=CUSTOMER):
    response = client.post("/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers)
    assert response.status_code == 201
    return response


def _checkout(client, body=None, headers=CUSTOMER):
    response = client.post("/checkout", json=body or {}, headers=headers)
    assert response.status_code == 201
    return response.json()


def _order(client):
    _add(client, "prod-phone")
    checkout = _checkout(client)
    response = client.post(f"/checkout/{checkout['checkout_id']}/complete", json=BILLING, headers=CUSTOMER)
    assert response.status_code == 201
    return response.json()["order_id"]


class TestAuth:
    def test_missing_token(self, client):
        assert client.get("/cart").status_code == 401

    def test_unknown_token(self, client):
        assert client.get("/cart", headers={"Authorization": "Bearer nope"}).status_code == 401


class TestCartAPI:
    def test_add_snapshots_catalogue_product(self, client):
        _add(client, "prod-phone")

        body = client.get("/cart", headers=CUSTOMER).json()
        assert body["items"][0]["name"] == "Pixel 8"
        assert body["items"][0]["discount_price"] == 800.0
        assert body["total"] == 800.0

    def test_unknown_product(self, client):
        response = client.post("/cart/items", json={"product_id": "prod-ghost"}, headers=CUSTOMER)
        assert response.status_code == 404
        assert "prod-ghost" in response.json()["error"]["product_id"][0]

    def test_invalid_discount_is_ignored_in_total(self, client):
        _add(client, "prod-cable", quantity=2)
        assert client.get("/cart", headers=CUSTOMER).json()["total"] == 600.0

    def test_quantity_controls(self, client):
        _add(client, "prod-case")
        client.post("/cart/items/prod-case/increment", headers=CUSTOMER)
        response = client.post("/cart/items/prod-case/increment", headers=CUSTOMER)
        assert response.json()["items"][0]["quantity"] == 3

        response = client.put("/cart/items/prod-case", json={"quantity": 1}, headers=CUSTOMER)
        assert response.json()["items"][0]["quantity"] == 1

        response = client.post("/cart/items/prod-case/decrement", headers=CUSTOMER)
        assert response.json()["items"][0]["quantity"] == 1

    def test_zero_quantity_is_rejected(self, client):
        _add(client, "prod-case")
        response = client.put("/cart/items/prod-case", json={"quantity": 0}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_remove(self, client):
        _add(client, "prod-case")
        response = client.delete("/cart/items/prod-case", headers=CUSTOMER)
        assert response.json()["items"] == []

    def test_carts_are_private(self, client):
        _add(client, "prod-case")
        assert client.get("/cart", headers=OTHER_CUSTOMER).json()["items"] == []


class TestWishlistAPI:
    def test_add_and_move_to_cart(self, client):
        response = client.post("/wishlist/items", json={"product_id": "prod-phone"}, headers=CUSTOMER)
        assert response.status_code == 201
        assert client.get("/wishlist", headers=CUSTOMER).json()["items"][0]["product_id"] == "prod-phone"

        client.post("/wishlist/items/prod-phone/move-to-cart", headers=CUSTOMER)

        assert client.get("/wishlist", headers=CUSTOMER).json()["items"] == []
        assert client.get("/cart", headers=CUSTOMER).json()["items"][0]["product_id"] == "prod-phone"


class TestCheckoutAPI:
    def test_checkout_summarises_cart(self, client):
        _add(client, "prod-phone")
        _add(client, "prod-case", quantity=2)

        checkout = _checkout(client)

        assert checkout["source"] == "Cart"
        assert checkout["subtotal"] == 1300.0
        assert checkout["total"] == 1300.0

    def test_coupon_once_per_checkout(self, client):
        client.post("/admin/coupons", json={"code": "SAVE10", "discount": 10}, headers=ADMIN)
        _add(client, "prod-phone")
        checkout = _checkout(client)
        url = f"/checkout/{checkout['checkout_id']}/coupon"

        first = client.post(url, json={"code": "save10"}, headers=CUSTOMER)
        assert first.status_code == 200
        assert first.json()["new_total"] == 720.0

        second = client.post(url, json={"code": "SAVE10"}, headers=CUSTOMER)
        assert second.status_code == 400

    def test_unknown_coupon(self, client):
        _add(client, "prod-phone")
        checkout = _checkout(client)
        response = client.post(
            f"/checkout/{checkout['checkout_id']}/coupon", json={"code": "XYZ123"}, headers=CUSTOMER
        )
        assert response.status_code == 404
        assert "XYZ123" in response.json()["error"]["coupon_code"][0]

    def test_buy_now_quantity(self, client):
        checkout = _checkout(client, {"buy_now": {"product_id": "prod-case", "quantity": 1}})
        assert checkout["source"] == "BuyNow"

        response = client.put(f"/checkout/{checkout['checkout_id']}/quantity", json={"quantity": 3}, headers=CUSTOMER)
        assert response.json()["total"] == 750.0

        response = client.put(f"/checkout/{checkout['checkout_id']}/quantity", json={"quantity": 0}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_complete_places_order_and_clears_cart(self, client):
        order_id = _order(client)

        orders = client.get("/orders", headers=CUSTOMER).json()
        assert [o["id"] for o in orders] == [order_id]
        assert orders[0]["status"] == "Placed"
        assert client.get("/cart", headers=CUSTOMER).json()["items"] == []

    def test_missing_billing(self, client):
        _add(client, "prod-phone")
        checkout = _checkout(client)
        response = client.post(
            f"/checkout/{checkout['checkout_id']}/complete",
            json={**BILLING, "address": "  "},
            headers=CUSTOMER,
        )
        assert response.status_code == 400
        assert len(client.get("/cart", headers=CUSTOMER).json()["items"]) == 1


class TestOrdersAPI:
    def test_request_cancellation(self, client):
        order_id = _order(client)
        response = client.post(f"/orders/{order_id}/cancel", json={"reason": "Changed my mind"}, headers=CUSTOMER)
        assert response.status_code == 200
        assert client.get(f"/orders/{order_id}", headers=CUSTOMER).json()["status"] == "Cancel Requested"

    def test_return_before_delivery_is_rejected(self, client):
        order_id = _order(client)
        response = client.post(f"/orders/{order_id}/return", json={"reason": "Other"}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_orders_are_private(self, client):
        order_id = _order(client)
        assert client.get(f"/orders/{order_id}", headers=OTHER_CUSTOMER).status_code == 404
        assert client.get("/orders", headers=OTHER_CUSTOMER).json() == []


class TestNotificationsAPI:
    def test_admin_decision_reaches_inbox(self, client):
        order_id = _order(client)
        client.post(f"/orders/{order_id}/cancel", json={"reason": "Other"}, headers=CUSTOMER)
        client.put(f"/admin/orders/{order_id}/status", json={"status": "Cancelled"}, headers=ADMIN)

        inbox = client.get("/notifications", headers=CUSTOMER).json()
        assert inbox["unread"] == 1
        assert inbox["notifications"][0]["title"] == "Order Cancelled"

        client.post("/notifications/read-all", headers=CUSTOMER)
        assert client.get("/notifications", headers=CUSTOMER).json()["unread"] == 0


class TestAddressAPI:
    HOME = {
        "name": "Asha Rao",
        "phone": "9876543210",
        "address": "12 MG Road",
        "pincode": "560001",
        "city": "Bengaluru",
        "state": "Karnataka",
    }

    def _save(self, client, headers=CUSTOMER):
        response = client.post("/addresses", json=self.HOME, headers=headers)
        assert response.status_code == 201
        return response.json()["address_id"]

    def test_crud(self, client):
        address_id = self._save(client)
        assert [a["address_id"] for a in client.get("/addresses", headers=CUSTOMER).json()] == [address_id]

        response = client.put(f"/addresses/{address_id}", json={**self.HOME, "city": "Mysuru"}, headers=CUSTOMER)
        assert response.status_code == 200
        assert client.get("/addresses", headers=CUSTOMER).json()[0]["city"] == "Mysuru"

        assert client.delete(f"/addresses/{address_id}", headers=CUSTOMER).status_code == 200
        assert client.get("/addresses", headers=CUSTOMER).json() == []

    def test_missing_field(self, client):
        response = client.post("/addresses", json={**self.HOME, "state": ""}, headers=CUSTOMER)
        assert response.status_code == 400
        assert "state" in response.json()["error"]

    def test_addresses_are_private(self, client):
        address_id = self._save(client)
        assert client.get("/addresses", headers=OTHER_CUSTOMER).json() == []
        assert client.delete(f"/addresses/{address_id}", headers=OTHER_CUSTOMER).status_code == 404

    def test_checkout_bills_to_saved_address(self, client):
        address_id = self._save(client)
        _add(client, "prod-phone")
        checkout = _checkout(client)

        response = client.post(
            f"/checkout/{checkout['checkout_id']}/complete",
            json={"address_id": address_id, "payment_method": "COD"},
            headers=CUSTOMER,
        )
        assert response.status_code == 201

        order = client.get(f"/orders/{response.json()['order_id']}", headers=CUSTOMER).json()
        assert order["address"] == "12 MG Road, Bengaluru, Karnataka - 560001"
