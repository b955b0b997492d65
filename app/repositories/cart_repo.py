# app/repositories/cart_repo.py
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from app.models.cart import Cart

# Dialect-specific INSERT supporting ON CONFLICT DO NOTHING
_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepository:

    def get(self, session: Session, user_id: str) -> Cart | None:
        return session.get(Cart, user_id)

    def ensure(self, session: Session, user_id: str) -> None:
        """
        Create an empty cart row for the user unless one already exists.

        A concurrent request inserting the same row first is not an error;
        the later insert is skipped and both go on to lock the same row.
        """
        insert = _INSERTS[session.get_bind().dialect.name]
        stmt = (
            insert(Cart)
            .values(user_id=user_id, items=[], updated_at=datetime.now(timezone.utc))
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        session.execute(stmt)

    def get_for_update(self, session: Session, user_id: str) -> Cart | None:
        """Load the cart row locked until the surrounding transaction ends."""
        stmt = select(Cart).where(Cart.user_id == user_id).with_for_update()
        return session.exec(stmt).first()

    def save_items(
        self,
        session: Session,
        cart: Cart,
        items: list[dict[str, Any]],
    ) -> Cart:
        # Assign a new list so the JSON column is flagged dirty
        cart.items = list(items)
        cart.updated_at = datetime.now(timezone.utc)
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart
