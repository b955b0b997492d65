# app/schemas/seller.py
from datetime import datetime
from typing import Any

from pydantic import model_validator
from sqlmodel import SQLModel


class SellerCardPayload(SQLModel):
    """
    Upsert payload for a seller card.

    Every field is optional at the schema level so the service can
    report all missing ones at once. `textColor` is accepted for
    `text_color`.
    """

    color: str | None = None
    description: str | None = None
    genre: str | None = None
    image: str | None = None
    text_color: str | None = None
    title: str | None = None

    @model_validator(mode="before")
    @classmethod
    def pick_text_color(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("text_color") and "textColor" in data:
            data = dict(data)
            data["text_color"] = data["textColor"]
        return data


class SellerRead(SQLModel):
    id: str
    user_id: str
    title: str
    genre: str
    description: str
    color: str
    text_color: str
    image: str
    created_at: datetime
    updated_at: datetime


class SellerCardResult(SQLModel):
    """Outcome of an upsert, including how many products were refreshed."""

    message: str
    seller: SellerRead
    products_updated: int = 0
