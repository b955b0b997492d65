# app/schemas/order.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from app.schemas.cart import CartLine

# Keys owned by the order itself; caller details cannot overwrite them
RESERVED_ORDER_KEYS = frozenset({"id", "user_id", "items", "status", "created_at"})


class OrderCreate(BaseModel):
    """
    Payload for placing an order from the current cart.

    Any fields are accepted (shipping address, phone, notes...) and stored
    with the order. Items, status and timestamps are derived server-side.
    """

    model_config = ConfigDict(extra="allow")

    def order_details(self) -> dict[str, Any]:
        extra = self.model_extra or {}
        return {k: v for k, v in extra.items() if k not in RESERVED_ORDER_KEYS}


class OrderRead(BaseModel):
    """
    Full order view: stored fields plus the caller-supplied details,
    flattened into the same object.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    user_id: str
    items: list[CartLine]
    status: str
    created_at: datetime
