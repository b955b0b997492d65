# app/schemas/product.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ProductCreate(SQLModel):
    """
    Payload for listing a new product.

    Seller display name and genre are taken from the caller's seller card.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=200)
    price: float = Field(ge=0)
    image: str | None = None
    stock: int | None = Field(default=None, ge=0)
    total: float = 0

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductUpdate(SQLModel):
    """
    Partial update. `seller` and `genre` are derived and cannot be set here.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=200)
    price: float | None = Field(default=None, ge=0)
    image: str | None = None
    stock: int | None = Field(default=None, ge=0)
    total: float | None = None


class ProductRead(SQLModel):
    id: str
    name: str
    price: float
    image: str | None
    seller: str
    seller_id: str
    genre: str | None
    stock: int | None
    sales: int
    total: float
    created_at: datetime
    updated_at: datetime
