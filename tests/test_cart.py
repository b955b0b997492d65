"""Cart endpoints: add, remove, retrieve."""

from helpers import auth, fetch

from app.models.cart import Cart
from app.repositories.cart_repo import CartRepository


class TestRetrieveCart:
    def test_missing_cart_is_empty(self, client):
        response = client.get("/api/cart", headers=auth("buyer-1"))
        assert response.status_code == 200
        assert response.json() == {"items": []}

    def test_retrieve_alias(self, client):
        response = client.get("/api/cart/retrieve", headers=auth("buyer-1"))
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_requires_token(self, client):
        response = client.get("/api/cart")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_rejects_bad_token(self, client):
        response = client.get("/api/cart", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"


class TestAddItem:
    def test_add_creates_line_from_product(self, client, product_factory):
        product = product_factory(name="Mug", price=12.5)

        response = client.post(
            "/api/cart/add",
            json={"productId": product.id},
            headers=auth("buyer-1"),
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Item added to cart"}

        items = client.get("/api/cart", headers=auth("buyer-1")).json()["items"]
        assert items == [
            {
                "product_id": product.id,
                "name": "Mug",
                "price": 12.5,
                "image": None,
                "seller": "Craft Corner",
                "quantity": 1,
            }
        ]

    def test_repeated_add_accumulates_quantity(self, client, product_factory):
        product = product_factory()

        for _ in range(3):
            client.post("/api/cart/add", json={"id": product.id}, headers=auth("buyer-1"))

        cart = fetch(Cart, "buyer-1")
        assert len(cart.items) == 1
        assert cart.items[0]["quantity"] == 3

    def test_lines_keep_insertion_order(self, client, product_factory):
        first = product_factory(name="First")
        second = product_factory(name="Second")

        client.post("/api/cart/add", json={"product_id": first.id}, headers=auth("buyer-1"))
        client.post("/api/cart/add", json={"product_id": second.id}, headers=auth("buyer-1"))
        client.post("/api/cart/add", json={"product_id": first.id}, headers=auth("buyer-1"))

        cart = fetch(Cart, "buyer-1")
        assert [line["name"] for line in cart.items] == ["First", "Second"]
        assert [line["quantity"] for line in cart.items] == [2, 1]

    def test_unknown_product_is_404(self, client):
        response = client.post(
            "/api/cart/add", json={"productId": "missing"}, headers=auth("buyer-1")
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"
        assert fetch(Cart, "buyer-1") is None

    def test_missing_product_id_is_400(self, client):
        response = client.post("/api/cart/add", json={"name": "x"}, headers=auth("buyer-1"))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_carts_are_per_user(self, client, product_factory):
        product = product_factory()

        client.post("/api/cart/add", json={"id": product.id}, headers=auth("buyer-1"))
        client.post("/api/cart/add", json={"id": product.id}, headers=auth("buyer-2"))

        assert fetch(Cart, "buyer-1").items[0]["quantity"] == 1
        assert fetch(Cart, "buyer-2").items[0]["quantity"] == 1


class TestRemoveItem:
    def test_remove_existing_line(self, client, product_factory):
        keep = product_factory(name="Keep")
        drop = product_factory(name="Drop")
        client.post("/api/cart/add", json={"id": keep.id}, headers=auth("buyer-1"))
        client.post("/api/cart/add", json={"id": drop.id}, headers=auth("buyer-1"))

        response = client.post(
            "/api/cart/remove", json={"productId": drop.id}, headers=auth("buyer-1")
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item removed from cart"
        assert [line["product_id"] for line in body["updated_items"]] == [keep.id]

    def test_remove_unknown_line_is_noop(self, client, product_factory):
        product = product_factory()
        client.post("/api/cart/add", json={"id": product.id}, headers=auth("buyer-1"))
        before = fetch(Cart, "buyer-1").items

        response = client.post(
            "/api/cart/remove", json={"productId": "other"}, headers=auth("buyer-1")
        )
        assert response.status_code == 200
        assert fetch(Cart, "buyer-1").items == before

    def test_remove_without_cart(self, client):
        response = client.post(
            "/api/cart/remove", json={"productId": "anything"}, headers=auth("buyer-1")
        )
        assert response.status_code == 200
        assert response.json()["updated_items"] == []
        assert fetch(Cart, "buyer-1") is None


class TestCartRow:
    def test_ensure_is_idempotent_and_keeps_lines(self, session):
        repo = CartRepository()
        session.add(Cart(user_id="buyer-1", items=[{"product_id": "p1", "quantity": 2}]))
        session.commit()

        # Another request already created the row
        repo.ensure(session, "buyer-1")
        repo.ensure(session, "buyer-2")
        repo.ensure(session, "buyer-2")
        session.commit()

        assert fetch(Cart, "buyer-1").items == [{"product_id": "p1", "quantity": 2}]
        assert fetch(Cart, "buyer-2").items == []

    def test_add_after_row_created_elsewhere(self, client, session, product_factory):
        product = product_factory()
        session.add(Cart(user_id="buyer-1", items=[]))
        session.commit()

        response = client.post(
            "/api/cart/add", json={"product_id": product.id}, headers=auth("buyer-1")
        )
        assert response.status_code == 200
        assert [line["quantity"] for line in fetch(Cart, "buyer-1").items] == [1]

    def test_unknown_product_creates_no_cart(self, client):
        client.post("/api/cart/add", json={"product_id": "missing"}, headers=auth("buyer-1"))
        assert fetch(Cart, "buyer-1") is None
