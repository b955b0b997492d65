# app/schemas/stats.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class TotalSales(SQLModel):
    model_config = ConfigDict(extra="forbid")

    total_sales: float
    order_count: int


class MonthlyPerformance(SQLModel):
    """
    Revenue bucket for one calendar month.
    """
    model_config = ConfigDict(extra="forbid")

    year: int
    month: int
    label: str
    total_sales: float
    order_count: int


class TopSeller(SQLModel):
    """
    Number of order lines sold under a seller display name.
    """
    model_config = ConfigDict(extra="forbid")

    seller: str
    items_sold: int


class LatestOrderSummary(SQLModel):
    """
    Lightweight info for last N orders.
    """
    model_config = ConfigDict(extra="forbid")

    id: str
    user_id: str
    created_at: datetime
    status: str
    item_count: int
    total: float


class LatestSellerSummary(SQLModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    genre: str
    created_at: datetime
