# app/models/cart.py
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class Cart(SQLModel, table=True):
    """
    Shopping cart of a user, one row per user.

    `items` holds the cart lines as a JSON list:
        {product_id, name, price, image, seller, quantity}
    At most one line per product_id.
    """

    __tablename__ = "carts"

    user_id: str = Field(
        primary_key=True,
        index=True,
    )

    items: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
