# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product listed by a seller.

    `seller` and `genre` are denormalized from the owner's Seller card.
    `stock` is NULL when inventory is not tracked; `sales` counts order
    lines that referenced the product.
    """

    __tablename__ = "products"

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=200,
        index=True,
        description="Display name of the product",
    )

    price: float = Field(
        ge=0,
        description="Unit price",
    )

    image: str | None = Field(
        default=None,
        description="Blob store path of the product image",
    )

    seller: str = Field(
        description="Seller display name (copied from Seller.title)",
    )

    seller_id: str = Field(
        index=True,
        description="Owning seller / user id",
    )

    genre: str | None = Field(
        default=None,
        index=True,
        description="Copied from Seller.genre",
    )

    stock: int | None = Field(
        default=None,
        description="Units in stock; NULL means untracked",
    )

    sales: int = Field(
        default=0,
        description="Number of order lines settled against this product",
    )

    total: float = Field(
        default=0,
        description="Freeform accumulator maintained by the seller",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
