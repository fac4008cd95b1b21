from datetime import datetime, timedelta
from decimal import Decimal

from freshbox.crud import catalog as crud_catalog


def test_submit_order_from_cart(client, order_payload):
    response = client.post("/api/orders", json=order_payload())
    assert response.status_code == 201

    order = response.json()
    assert order["totalAmount"] == "540.00"
    assert order["orderStatus"] == "processing"
    assert order["paymentStatus"] == "pending"
    assert order["paymentMethod"] == "easypaisa"
    assert order["specialInstructions"] == "Ring the bell twice"

    detail = client.get(f"/api/orders/{order['id']}").json()
    assert [item["unitPrice"] for item in detail["orderItems"]] == ["150.00", "80.00"]
    assert [item["quantity"] for item in detail["orderItems"]] == ["2.00", "3.00"]
    assert detail["customer"]["email"] == "ayesha@example.com"
    # Box price is metadata only
    assert detail["boxType"]["name"] == "Small Box"
    assert detail["boxType"]["price"] == "799.00"


def test_matching_client_total_is_accepted(client, order_payload):
    response = client.post("/api/orders", json=order_payload(totalAmount="540.00"))
    assert response.status_code == 201
    assert response.json()["totalAmount"] == "540.00"


def test_mismatched_client_total_is_rejected(client, order_payload):
    response = client.post("/api/orders", json=order_payload(totalAmount="1339.00"))
    assert response.status_code == 400
    assert client.get("/api/orders").json() == []


def test_new_email_creates_one_customer_and_reuses_it(client, order_payload):
    first = client.post("/api/orders", json=order_payload()).json()
    assert client.get("/api/stats").json()["totalCustomers"] == 1

    second = client.post("/api/orders", json=order_payload()).json()
    assert second["customerId"] == first["customerId"]
    assert client.get("/api/stats").json()["totalCustomers"] == 1

    other = client.post("/api/orders", json=order_payload(email="bilal@example.com")).json()
    assert other["customerId"] != first["customerId"]
    assert client.get("/api/stats").json()["totalCustomers"] == 2


def test_unit_price_is_not_recomputed_after_catalog_change(client, order_payload, catalog):
    order = client.post("/api/orders", json=order_payload()).json()

    apples_id = catalog["products"]["Fresh Apples"]
    assert client.put(f"/api/products/{apples_id}", json={"price": "175.00"}).status_code == 200

    detail = client.get(f"/api/orders/{order['id']}").json()
    assert detail["orderItems"][0]["unitPrice"] == "150.00"
    assert detail["orderItems"][0]["product"]["price"] == "175.00"
    assert detail["totalAmount"] == "540.00"


def test_submitted_unit_price_is_stored_verbatim(client, order_payload, catalog):
    items = [{"productId": catalog["products"]["Mangoes"], "quantity": "1.5", "unitPrice": "190.00"}]
    order = client.post("/api/orders", json=order_payload(items=items)).json()

    assert order["totalAmount"] == "285.00"
    detail = client.get(f"/api/orders/{order['id']}").json()
    assert detail["orderItems"][0]["unitPrice"] == "190.00"
    assert detail["orderItems"][0]["quantity"] == "1.50"


def test_empty_items_are_rejected(client, order_payload):
    response = client.post("/api/orders", json=order_payload(items=[]))
    assert response.status_code == 422


def test_unknown_payment_method_is_rejected(client, order_payload):
    response = client.post("/api/orders", json=order_payload(paymentMethod="cash"))
    assert response.status_code == 422


def test_invalid_customer_fields_are_rejected(client, order_payload):
    payload = order_payload()
    payload["customer"]["email"] = "not-an-email"
    assert client.post("/api/orders", json=payload).status_code == 422

    payload = order_payload()
    payload["customer"]["phone"] = "0300"
    assert client.post("/api/orders", json=payload).status_code == 422

    payload = order_payload()
    payload["customer"]["firstName"] = "   "
    assert client.post("/api/orders", json=payload).status_code == 422

    payload = order_payload()
    del payload["customer"]["city"]
    assert client.post("/api/orders", json=payload).status_code == 422


def test_non_positive_quantity_is_rejected(client, order_payload, catalog):
    items = [{"productId": catalog["products"]["Bananas"], "quantity": "0", "unitPrice": "80.00"}]
    assert client.post("/api/orders", json=order_payload(items=items)).status_code == 422


def test_unknown_box_type_leaves_nothing_behind(client, order_payload):
    response = client.post("/api/orders", json=order_payload(boxTypeId=999))

    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to create order"
    stats = client.get("/api/stats").json()
    assert stats["totalOrders"] == 0
    assert stats["totalCustomers"] == 0


def test_unknown_product_leaves_nothing_behind(client, order_payload, catalog):
    items = [
        {"productId": catalog["products"]["Bananas"], "quantity": "1", "unitPrice": "80.00"},
        {"productId": 4242, "quantity": "1", "unitPrice": "10.00"},
    ]
    response = client.post("/api/orders", json=order_payload(items=items))

    assert response.status_code == 400
    stats = client.get("/api/stats").json()
    assert stats["totalOrders"] == 0
    assert stats["totalCustomers"] == 0


def test_list_orders_newest_first_with_filters(client, order_payload):
    first = client.post("/api/orders", json=order_payload()).json()
    second = client.post("/api/orders", json=order_payload(paymentMethod="jazzcash")).json()
    client.put(f"/api/orders/{first['id']}/status", json={"status": "delivered"})

    orders = client.get("/api/orders").json()
    assert [order["id"] for order in orders] == [second["id"], first["id"]]
    assert len(orders[0]["orderItems"]) == 2

    delivered = client.get("/api/orders", params={"orderStatus": "delivered"}).json()
    assert [order["id"] for order in delivered] == [first["id"]]

    pending = client.get("/api/orders", params={"paymentStatus": "pending"}).json()
    assert len(pending) == 2


def test_get_missing_order(client):
    assert client.get("/api/orders/123").status_code == 404
    assert client.get("/api/orders/123/receipt").status_code == 404


def test_receipt(client, order_payload):
    order = client.post("/api/orders", json=order_payload()).json()

    receipt = client.get(f"/api/orders/{order['id']}/receipt").json()

    assert receipt["orderNumber"] == f"FB{order['id']:06d}"
    assert receipt["subtotal"] == "540.00"
    assert receipt["boxPrice"] == "0.00"
    assert receipt["total"] == "540.00"
    assert receipt["paymentMethod"] == "easypaisa"
    assert receipt["customer"]["firstName"] == "Ayesha"
    assert [line["lineTotal"] for line in receipt["items"]] == ["300.00", "240.00"]
    assert receipt["items"][1]["productName"] == "Bananas"
    assert receipt["items"][1]["unit"] == "dozen"

    order_date = datetime.fromisoformat(receipt["orderDate"])
    delivery_date = datetime.fromisoformat(receipt["deliveryDate"])
    assert delivery_date - order_date == timedelta(days=2)


def test_more_than_two_decimal_places_are_rejected(client, order_payload, catalog):
    mangoes = catalog["products"]["Mangoes"]

    quantity = [{"productId": mangoes, "quantity": "1.555", "unitPrice": "100.00"}]
    assert client.post("/api/orders", json=order_payload(items=quantity)).status_code == 422

    price = [{"productId": mangoes, "quantity": "1", "unitPrice": "100.005"}]
    assert client.post("/api/orders", json=order_payload(items=price)).status_code == 422

    assert client.get("/api/stats").json()["totalOrders"] == 0


def test_total_matches_stored_lines(client, order_payload, catalog):
    items = [
        {"productId": catalog["products"]["Mangoes"], "quantity": "1.55", "unitPrice": "100.00"},
        {"productId": catalog["products"]["Spinach"], "quantity": "3", "unitPrice": "30.25"},
    ]
    order = client.post("/api/orders", json=order_payload(items=items)).json()

    detail = client.get(f"/api/orders/{order['id']}").json()
    stored = sum(
        Decimal(item["quantity"]) * Decimal(item["unitPrice"]) for item in detail["orderItems"]
    )
    assert Decimal(detail["totalAmount"]) == stored == Decimal("245.75")


def test_item_insert_failure_rolls_back_order_and_customer(client, order_payload, catalog, monkeypatch):
    # Let an unknown product through to the insert so the foreign key rejects the item row
    monkeypatch.setattr(crud_catalog, "get_existing_product_ids", lambda db, ids: set(ids))
    items = [
        {"productId": catalog["products"]["Bananas"], "quantity": "1", "unitPrice": "80.00"},
        {"productId": 4242, "quantity": "1", "unitPrice": "10.00"},
    ]

    response = client.post("/api/orders", json=order_payload(items=items))

    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to create order"
    stats = client.get("/api/stats").json()
    assert stats["totalOrders"] == 0
    assert stats["totalCustomers"] == 0
    assert client.get("/api/orders").json() == []
