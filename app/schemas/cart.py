# app/schemas/cart.py
from typing import Any

from pydantic import ConfigDict, model_validator
from sqlmodel import SQLModel, Field


class CartLine(SQLModel):
    """
    A single cart line. Price is kept as given, numeric or a currency string.
    """

    product_id: str
    name: str | None = None
    price: float | str | None = None
    image: str | None = None
    seller: str | None = None
    quantity: int = Field(default=1, ge=1)


class CartAddPayload(SQLModel):
    """
    Payload for adding to cart.

    Accepts the product id as `product_id`, `productId` or `id`; the other
    fields are the line snapshot shown in the cart.
    """

    model_config = ConfigDict(extra="ignore")

    product_id: str
    name: str | None = None
    price: float | str | None = None
    image: str | None = None
    seller: str | None = None

    @model_validator(mode="before")
    @classmethod
    def pick_product_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("product_id"):
            data = dict(data)
            data["product_id"] = data.get("productId") or data.get("id")
        return data


class CartRemovePayload(CartAddPayload):
    """Payload for removing a line; only the product id is used."""


class CartRead(SQLModel):
    items: list[CartLine]


class CartAddResult(SQLModel):
    message: str


class CartRemoveResult(SQLModel):
    message: str
    updated_items: list[CartLine]
