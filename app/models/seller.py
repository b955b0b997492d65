# app/models/seller.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Seller(SQLModel, table=True):
    """
    Storefront card of a seller.

    Keyed by the owning user's id (one card per user). `title` and `genre`
    are copied onto every product the seller owns; see SellerService.
    """

    __tablename__ = "sellers"

    id: str = Field(
        primary_key=True,
        index=True,
        description="Same value as user_id",
    )

    user_id: str = Field(
        index=True,
        description="Owning user id",
    )

    title: str = Field(description="Storefront display name")
    genre: str = Field(index=True, description="Storefront category")
    description: str
    color: str = Field(description="Card background color")
    text_color: str = Field(description="Card text color")
    image: str = Field(description="Blob store path of the card image")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update timestamp (UTC)",
    )
