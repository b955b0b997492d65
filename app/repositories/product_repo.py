# app/repositories/product_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete, update
from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - Counter and bulk writes are single UPDATE/DELETE statements so they
      stay atomic under concurrent requests.
    """

    def get_by_id(self, session: Session, product_id: str) -> Product | None:
        return session.get(Product, product_id)

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        seller_id: str | None = None,
        genre: str | None = None,
    ) -> list[Product]:
        stmt = select(Product)
        if seller_id is not None:
            stmt = stmt.where(Product.seller_id == seller_id)
        if genre is not None:
            stmt = stmt.where(Product.genre == genre)
        stmt = stmt.order_by(Product.created_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def list_for_seller(self, session: Session, seller_id: str) -> list[Product]:
        stmt = select(Product).where(Product.seller_id == seller_id)
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        product.updated_at = datetime.now(timezone.utc)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()

    # ----- Atomic / bulk writes (no commit) -----

    def record_sale(self, session: Session, product_id: str, track_stock: bool) -> int:
        """
        Increment `sales` by one and, when stock is tracked, decrement
        `stock` by one, in a single UPDATE. Returns affected row count.
        """
        values = {"sales": Product.sales + 1}
        if track_stock:
            values["stock"] = Product.stock - 1
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return session.execute(stmt).rowcount

    def set_seller_profile(
        self,
        session: Session,
        seller_id: str,
        seller_name: str,
        genre: str,
    ) -> int:
        """Overwrite the denormalized seller fields on every product of a seller."""
        stmt = (
            update(Product)
            .where(Product.seller_id == seller_id)
            .values(
                seller=seller_name,
                genre=genre,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return session.execute(stmt).rowcount

    def delete_for_seller(self, session: Session, seller_id: str) -> int:
        stmt = (
            delete(Product)
            .where(Product.seller_id == seller_id)
            .execution_options(synchronize_session=False)
        )
        return session.execute(stmt).rowcount
