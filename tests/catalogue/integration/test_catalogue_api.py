"""Integration tests for the catalogue endpoints."""


def _create_category(client, headers, name="Apparel"):
    return client.post("/api/products/categories", json={"name": name}, headers=headers).json()["id"]


def _create_product(client, headers, category_id, **overrides):
    body = {"name": "Black T-Shirt", "price": 19.99, "stock": 10, "category_id": category_id}
    body.update(overrides)
    return client.post("/api/products", json=body, headers=headers)


class TestBackOffice:
    def test_create_product(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        response = _create_product(client, admin_headers, category_id)
        assert response.status_code == 201

        product = client.get(f"/api/products/{response.json()['id']}").json()
        assert product["slug"] == "black-t-shirt"
        assert product["in_stock"] is True

    def test_shoppers_cannot_create_products(self, client, register_user):
        shopper_id = register_user()
        response = client.post(
            "/api/products/categories",
            json={"name": "Apparel"},
            headers={"X-User-Id": shopper_id},
        )
        assert response.status_code == 403

    def test_anonymous_cannot_create_products(self, client):
        response = client.post("/api/products/categories", json={"name": "Apparel"})
        assert response.status_code == 401

    def test_invalid_price(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        response = _create_product(client, admin_headers, category_id, price=0)
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "price" in response.json()["errors"]

    def test_stock_update(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        product_id = _create_product(client, admin_headers, category_id, stock=10).json()["id"]

        response = client.put(
            f"/api/products/{product_id}/stock",
            json={"quantity": 3, "operation": "subtract"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["stock"] == 7

    def test_negative_stock_rejected(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        product_id = _create_product(client, admin_headers, category_id, stock=2).json()["id"]

        response = client.put(
            f"/api/products/{product_id}/stock",
            json={"quantity": 3, "operation": "subtract"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Stock cannot be negative"

    def test_low_stock_report(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        _create_product(client, admin_headers, category_id, name="Plenty", stock=50)
        _create_product(client, admin_headers, category_id, name="Few", stock=2)

        response = client.get("/api/products/low-stock", headers=admin_headers)

        assert [p["name"] for p in response.json()] == ["Few"]


class TestBrowsing:
    def test_list_with_filters(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        _create_product(client, admin_headers, category_id, name="Mug", price=8.0)
        _create_product(client, admin_headers, category_id, name="Shirt", price=20.0)

        response = client.get("/api/products", params={"max_price": 10})

        data = response.json()
        assert data["total"] == 1
        assert data["pages"] == 1
        assert data["products"][0]["name"] == "Mug"

    def test_deactivated_product_is_404(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        product_id = _create_product(client, admin_headers, category_id).json()["id"]
        client.post(f"/api/products/{product_id}/toggle-active", headers=admin_headers)

        response = client.get(f"/api/products/{product_id}")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": f"Product {product_id} not found",
            "errors": {"_entity": [f"Product {product_id} not found"]},
        }

    def test_unknown_product_is_404(self, client):
        response = client.get("/api/products/missing")
        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert "missing" in data["message"]
        assert "_entity" in data["errors"]

    def test_availability(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        product_id = _create_product(client, admin_headers, category_id, stock=1).json()["id"]

        response = client.get(f"/api/products/{product_id}/availability", params={"quantity": 2})

        assert response.json()["available"] is False

    def test_categories(self, client, admin_headers):
        _create_category(client, admin_headers, "Books")
        _create_category(client, admin_headers, "Apparel")
        assert [c["name"] for c in client.get("/api/products/categories").json()] == ["Apparel", "Books"]

    def test_featured(self, client, admin_headers):
        category_id = _create_category(client, admin_headers)
        _create_product(client, admin_headers, category_id, name="Star", is_featured=True)
        _create_product(client, admin_headers, category_id, name="Plain")
        assert [p["name"] for p in client.get("/api/products/featured").json()] == ["Star"]

    def test_similar_products(self, client, admin_headers):
        apparel = _create_category(client, admin_headers)
        books = _create_category(client, admin_headers, "Books")
        shirt = _create_product(client, admin_headers, apparel, name="Shirt").json()["id"]
        _create_product(client, admin_headers, apparel, name="Hoodie")
        _create_product(client, admin_headers, books, name="Novel")

        response = client.get(f"/api/products/{shirt}/similar")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Hoodie"]

    def test_similar_for_unknown_product_is_404(self, client):
        assert client.get("/api/products/missing/similar").status_code == 404
