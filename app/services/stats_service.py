# app/services/stats_service.py
"""
Reporting over orders and sellers.

The reductions are plain functions over order rows so they can run on
whatever the repository returns; StatsService wires them to the session.
"""
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Iterable

from sqlmodel import Session

from app.core.errors import NotFound
from app.models.order import Order
from app.repositories.seller_repo import SellerRepository
from app.repositories.stats_repo import COLLECTIONS, StatsRepository
from app.schemas.stats import (
    LatestOrderSummary,
    LatestSellerSummary,
    MonthlyPerformance,
    TopSeller,
    TotalSales,
)

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_price(value: Any) -> float:
    """
    Read a price that may be a number or a currency string like "R12.50".
    Anything unparseable counts as 0.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(_NON_NUMERIC.sub("", str(value)))
    except ValueError:
        return 0.0


def _quantity(line: dict[str, Any]) -> int:
    try:
        return int(line.get("quantity", 1))
    except (TypeError, ValueError):
        return 1


def order_revenue(order: Order) -> float:
    """Sum of price x quantity over the order's lines."""
    return sum(parse_price(line.get("price")) * _quantity(line) for line in order.items)


def total_sales(orders: Iterable[Order]) -> float:
    return sum(order_revenue(o) for o in orders)


def _last_months(now: datetime, count: int) -> list[tuple[int, int]]:
    """(year, month) pairs for the `count` months ending with `now`'s, oldest first."""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def monthly_performance(
    orders: Iterable[Order],
    now: datetime | None = None,
    months: int = 12,
) -> list[MonthlyPerformance]:
    """
    Revenue per calendar month for the last `months` months (current
    month included), zero-filled, oldest first.
    """
    now = now or datetime.now(timezone.utc)
    window = _last_months(now, months)
    revenue = {key: 0.0 for key in window}
    counts = {key: 0 for key in window}

    for order in orders:
        key = (order.created_at.year, order.created_at.month)
        if key in revenue:
            revenue[key] += order_revenue(order)
            counts[key] += 1

    return [
        MonthlyPerformance(
            year=year,
            month=month,
            label=f"{MONTH_LABELS[month - 1]} {year}",
            total_sales=round(revenue[(year, month)], 2),
            order_count=counts[(year, month)],
        )
        for year, month in window
    ]


def top_sellers(orders: Iterable[Order], limit: int = 5) -> list[TopSeller]:
    """
    Count order lines per seller display name, most lines first.
    Lines without a seller are ignored.
    """
    tally: Counter[str] = Counter()
    for order in orders:
        for line in order.items:
            seller = line.get("seller")
            if seller:
                tally[seller] += 1
    return [TopSeller(seller=name, items_sold=n) for name, n in tally.most_common(limit)]


def latest_orders(orders: Iterable[Order], limit: int = 5) -> list[LatestOrderSummary]:
    newest = sorted(orders, key=lambda o: o.created_at, reverse=True)[:limit]
    return [
        LatestOrderSummary(
            id=o.id,
            user_id=o.user_id,
            created_at=o.created_at,
            status=o.status,
            item_count=len(o.items),
            total=round(order_revenue(o), 2),
        )
        for o in newest
    ]


class StatsService:
    """
    Orchestrates reporting queries for the admin dashboard.
    """

    def __init__(self, repo: StatsRepository, seller_repo: SellerRepository):
        self.repo = repo
        self.seller_repo = seller_repo

    def total_sales(self, session: Session) -> TotalSales:
        orders = self.repo.all_orders(session)
        return TotalSales(total_sales=round(total_sales(orders), 2), order_count=len(orders))

    def monthly_performance(self, session: Session) -> list[MonthlyPerformance]:
        return monthly_performance(self.repo.all_orders(session))

    def top_sellers(self, session: Session, limit: int = 5) -> list[TopSeller]:
        return top_sellers(self.repo.all_orders(session), limit=limit)

    def latest_orders(self, session: Session, limit: int = 5) -> list[LatestOrderSummary]:
        return latest_orders(self.repo.all_orders(session), limit=limit)

    def latest_sellers(self, session: Session, limit: int = 5) -> list[LatestSellerSummary]:
        return [
            LatestSellerSummary(
                id=s.id, title=s.title, genre=s.genre, created_at=s.created_at
            )
            for s in self.seller_repo.latest(session, limit=limit)
        ]

    def collection_size(self, session: Session, name: str) -> int:
        model = COLLECTIONS.get(name.lower())
        if model is None:
            raise NotFound("Unknown collection", details=name)
        return self.repo.count_collection(session, model)
