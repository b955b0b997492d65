import os

import pytest

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-secret")
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from app.database import engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.product import Product  # noqa: E402
from app.models.seller import Seller  # noqa: E402
from app.models.user import User  # noqa: E402


@pytest.fixture(autouse=True)
def setup_db():
    SQLModel.metadata.create_all(engine)

    yield

    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture()
def seller_card(session):
    def _create(uid: str = "seller-1", title: str = "Craft Corner", genre: str = "Crafts"):
        seller = Seller(
            id=uid,
            user_id=uid,
            title=title,
            genre=genre,
            description="Handmade things",
            color="#ffffff",
            text_color="#000000",
            image=f"sellers/{uid}/card.png",
        )
        session.add(seller)
        session.commit()
        session.refresh(seller)
        return seller

    return _create


@pytest.fixture()
def product_factory(session):
    def _create(
        name: str = "Mug",
        price: float = 10.0,
        stock: int | None = 5,
        seller_id: str = "seller-1",
        seller: str = "Craft Corner",
        genre: str | None = "Crafts",
    ):
        product = Product(
            name=name,
            price=price,
            stock=stock,
            seller=seller,
            seller_id=seller_id,
            genre=genre,
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _create


@pytest.fixture()
def user_factory(session):
    def _create(uid: str, role: str = "buyer", name: str = "Someone"):
        user = User(id=uid, email=f"{uid}@example.com", name=name, role=role)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _create

