# app/services/cart_service.py
import logging
from typing import Any

from sqlmodel import Session

from app.core.errors import NotFound
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartAddPayload

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence before adding
      - keep at most one line per product, accumulating quantity
      - serialize writes to one user's cart through a row lock
      - treat a missing cart as an empty one
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- public operations ----

    def retrieve(self, session: Session, user_id: str) -> list[dict[str, Any]]:
        """Return the cart lines, or [] when the user has no cart yet."""
        cart = self.cart_repo.get(session, user_id)
        if cart is None:
            return []
        return list(cart.items)

    def add_item(
        self,
        session: Session,
        user_id: str,
        payload: CartAddPayload,
    ) -> list[dict[str, Any]]:
        """
        Add one unit of a product to the user's cart.

        Rules:
          - product must exist (404 otherwise)
          - an existing line for the product gets quantity + 1
          - otherwise a new line with quantity 1 is appended
        """
        product = self.product_repo.get_by_id(session, payload.product_id)
        if product is None:
            raise NotFound("Product not found", details=payload.product_id)

        # Product values win over whatever the client showed
        line = {
            "product_id": product.id,
            "name": product.name,
            "price": product.price,
            "image": product.image or payload.image,
            "seller": product.seller or payload.seller,
        }

        # Row must exist before it can be locked
        self.cart_repo.ensure(session, user_id)
        cart = self.cart_repo.get_for_update(session, user_id)

        items = [dict(it) for it in cart.items]
        for existing in items:
            if existing.get("product_id") == product.id:
                existing["quantity"] = int(existing.get("quantity") or 0) + 1
                break
        else:
            items.append({**line, "quantity": 1})

        cart = self.cart_repo.save_items(session, cart, items)
        return list(cart.items)

    def remove_item(
        self,
        session: Session,
        user_id: str,
        product_id: str,
    ) -> list[dict[str, Any]]:
        """
        Drop the line for `product_id` and return the remaining lines.

        No cart, or no such line, leaves everything untouched.
        """
        cart = self.cart_repo.get_for_update(session, user_id)
        if cart is None:
            return []

        remaining = [it for it in cart.items if it.get("product_id") != product_id]
        if len(remaining) == len(cart.items):
            return list(cart.items)

        cart = self.cart_repo.save_items(session, cart, remaining)
        return list(cart.items)

    def clear(self, session: Session, user_id: str) -> None:
        """Empty the cart's line list; the cart row itself is kept."""
        cart = self.cart_repo.get_for_update(session, user_id)
        if cart is None:
            return
        self.cart_repo.save_items(session, cart, [])
