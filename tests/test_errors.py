"""Error envelope rendered for every failure type."""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from helpers import auth
from jose import jwt
from sqlalchemy.exc import OperationalError

from app.repositories.cart_repo import CartRepository


def test_health(client):
    assert client.get("/").json() == {"status": "ok", "service": "marketplace-api"}


def test_store_failure_is_upstream_error(client):
    with patch.object(
        CartRepository,
        "get",
        side_effect=OperationalError("SELECT carts", {}, Exception("connection lost")),
    ):
        response = client.get("/api/cart", headers=auth("buyer-1"))

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Document store operation failed"
    assert "connection lost" in body["details"]


def test_validation_error_is_400(client):
    response = client.post("/api/users", json={"name": "x"}, headers=auth("ann"))
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert "email" in body["details"]


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_expired_token(client):
    token = jwt.encode(
        {"sub": "ann", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        os.environ["SUPABASE_JWT_SECRET"],
        algorithm="HS256",
    )
    response = client.get("/api/cart", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"
