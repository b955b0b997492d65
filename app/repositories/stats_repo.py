# app/repositories/stats_repo.py
from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

from app.models.cart import Cart
from app.models.order import Order
from app.models.product import Product
from app.models.seller import Seller
from app.models.user import User

# Collection names accepted by the size endpoint (case-insensitive)
COLLECTIONS: dict[str, type[SQLModel]] = {
    "users": User,
    "sellers": Seller,
    "products": Product,
    "carts": Cart,
    "orders": Order,
}


class StatsRepository:
    """
    Read-only queries for reporting.
    """

    def count_collection(self, session: Session, model: type[SQLModel]) -> int:
        stmt = select(func.count()).select_from(model)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    def all_orders(self, session: Session) -> list[Order]:
        return list(session.exec(select(Order)).all())
