from sqlalchemy.exc import OperationalError

from freshbox.crud import catalog as crud_catalog


def test_box_types_active_only_sorted_by_price(client, catalog):
    client.post("/api/box-types", json={"name": "Mini Box", "price": "499.00", "itemsLimit": 2, "isActive": False})
    client.post("/api/box-types", json={"name": "Family Box", "price": "1599.00", "itemsLimit": 8})

    box_types = client.get("/api/box-types").json()

    assert [box["name"] for box in box_types] == ["Small Box", "Medium Box", "Family Box", "Large Box"]
    assert box_types[0] == {
        "id": catalog["box_types"]["Small Box"],
        "name": "Small Box",
        "price": "799.00",
        "itemsLimit": 3,
        "description": "Perfect for 1-2 people, 2-3 premium items",
        "isActive": True,
    }


def test_update_box_type(client, catalog):
    box_id = catalog["box_types"]["Large Box"]
    response = client.put(f"/api/box-types/{box_id}", json={"isActive": False})

    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert response.json()["price"] == "1999.00"
    assert "Large Box" not in [box["name"] for box in client.get("/api/box-types").json()]

    assert client.put("/api/box-types/999", json={"name": "Ghost"}).status_code == 404


def test_products_sorted_by_category_then_name(client, catalog):
    products = client.get("/api/products").json()

    names = [(product["category"], product["name"]) for product in products]
    assert names == sorted(names)
    assert names[0] == ("fruit", "Bananas")
    assert names[-1] == ("vegetable", "Tomatoes")


def test_products_filtered_by_category_and_availability(client, catalog):
    client.put(f"/api/products/{catalog['products']['Mangoes']}", json={"isAvailable": False})

    fruits = client.get("/api/products", params={"category": "fruit"}).json()
    assert [product["name"] for product in fruits] == ["Bananas", "Fresh Apples", "Grapes", "Mangoes", "Oranges"]

    available = client.get("/api/products", params={"available": "true"}).json()
    assert len(available) == 11
    assert "Mangoes" not in [product["name"] for product in available]

    available_fruit = client.get("/api/products", params={"category": "fruit", "available": "true"}).json()
    assert len(available_fruit) == 4

    assert client.get("/api/products", params={"category": "meat"}).status_code == 422


def test_create_and_fetch_product(client):
    response = client.post("/api/products", json={
        "name": "Guava",
        "category": "fruit",
        "price": "110",
        "unit": "kg",
        "nutritionInfo": {"vitaminC": "228mg"},
    })

    assert response.status_code == 201
    product = response.json()
    assert product["price"] == "110.00"
    assert product["isAvailable"] is True
    assert client.get(f"/api/products/{product['id']}").json()["nutritionInfo"] == {"vitaminC": "228mg"}


def test_create_product_validation(client):
    bad_category = {"name": "Chicken", "category": "meat", "price": "500.00", "unit": "kg"}
    assert client.post("/api/products", json=bad_category).status_code == 422

    negative_price = {"name": "Kiwi", "category": "fruit", "price": "-1", "unit": "kg"}
    assert client.post("/api/products", json=negative_price).status_code == 422


def test_update_missing_product(client):
    assert client.put("/api/products/999", json={"price": "10.00"}).status_code == 404
    assert client.get("/api/products/999").status_code == 404


def test_delete_product(client, catalog):
    product_id = catalog["products"]["Lettuce"]

    response = client.delete(f"/api/products/{product_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}
    assert client.delete(f"/api/products/{product_id}").status_code == 404


def test_delete_product_on_an_order_fails(client, order_payload, catalog):
    client.post("/api/orders", json=order_payload())

    response = client.delete(f"/api/products/{catalog['products']['Bananas']}")

    assert response.status_code == 400
    assert client.get(f"/api/products/{catalog['products']['Bananas']}").status_code == 200


def storage_down(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("database is unavailable"))


def test_create_reports_storage_failure(client, monkeypatch):
    monkeypatch.setattr(crud_catalog, "create_product", storage_down)
    monkeypatch.setattr(crud_catalog, "create_box_type", storage_down)

    product = {"name": "Guava", "category": "fruit", "price": "110.00", "unit": "kg"}
    response = client.post("/api/products", json=product)
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to create product"}

    box = {"name": "Family Box", "price": "1599.00", "itemsLimit": 8}
    response = client.post("/api/box-types", json=box)
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to create box type"}


def test_catalog_prices_limited_to_two_places(client):
    product = {"name": "Guava", "category": "fruit", "price": "110.005", "unit": "kg"}
    assert client.post("/api/products", json=product).status_code == 422
