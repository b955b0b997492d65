# app/repositories/seller_repo.py
from sqlmodel import Session, select

from app.models.seller import Seller


class SellerRepository:
    """
    Data access layer for seller cards.

    No commits here; card changes travel in the same transaction as the
    product propagation. The service commits.
    """

    def get_by_id(self, session: Session, seller_id: str) -> Seller | None:
        return session.get(Seller, seller_id)

    def get_for_update(self, session: Session, seller_id: str) -> Seller | None:
        stmt = select(Seller).where(Seller.id == seller_id).with_for_update()
        return session.exec(stmt).first()

    def list_sellers(self, session: Session, skip: int = 0, limit: int = 50) -> list[Seller]:
        stmt = select(Seller).order_by(Seller.title).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def latest(self, session: Session, limit: int = 5) -> list[Seller]:
        stmt = select(Seller).order_by(Seller.created_at.desc()).limit(limit)
        return session.exec(stmt).all()

    def add(self, session: Session, seller: Seller) -> Seller:
        session.add(seller)
        session.flush()
        return seller

    def delete(self, session: Session, seller: Seller) -> None:
        session.delete(seller)
