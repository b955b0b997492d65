# app/repositories/order_repo.py
from sqlmodel import Session, select

from app.models.order import Order


class OrderRepository:
    """
    Data access layer for orders.
    """

    def list_for_user(
        self,
        session: Session,
        user_id: str,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int | None = 50,
    ) -> list[Order]:
        stmt = select(Order).order_by(Order.created_at.desc()).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return session.exec(stmt).all()

    def get_by_id(self, session: Session, order_id: str) -> Order | None:
        return session.get(Order, order_id)

    def create(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order
