"""Reporting reductions and admin report endpoints."""

from datetime import datetime, timezone

import pytest
from helpers import auth

from app.models.order import Order
from app.services.stats_service import (
    latest_orders,
    monthly_performance,
    order_revenue,
    parse_price,
    top_sellers,
    total_sales,
)


def _order(created_at, *lines, order_id="o"):
    return Order(id=order_id, user_id="buyer-1", items=list(lines), created_at=created_at)


def _line(price, quantity=1, seller="Shop"):
    return {"product_id": "p", "price": price, "quantity": quantity, "seller": seller}


class TestParsePrice:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (10, 10.0),
            (12.5, 12.5),
            ("R12.50", 12.5),
            ("$1,299.99", 1299.99),
            ("-3.5", -3.5),
            ("free", 0.0),
            (None, 0.0),
            ("1.2.3", 0.0),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_price(raw) == expected


class TestReductions:
    def test_revenue_mixes_strings_and_numbers(self):
        order = _order(datetime(2026, 1, 5), _line("R12.50", 2), _line(5, 1))
        assert order_revenue(order) == 30.0

    def test_total_sales(self):
        orders = [
            _order(datetime(2026, 1, 5), _line(10, 2)),
            _order(datetime(2026, 2, 5), _line("R1.50", 4)),
        ]
        assert total_sales(orders) == 26.0

    def test_monthly_zero_fills_last_twelve_months(self):
        now = datetime(2026, 3, 15, tzinfo=timezone.utc)
        orders = [
            _order(datetime(2026, 3, 1), _line("R12.50", 2)),
            _order(datetime(2026, 3, 9), _line(5, 1)),
            _order(datetime(2025, 11, 20), _line(7, 3)),
            # Outside the window
            _order(datetime(2025, 3, 31), _line(100, 1)),
        ]

        buckets = monthly_performance(orders, now=now)

        assert len(buckets) == 12
        assert (buckets[0].year, buckets[0].month) == (2025, 4)
        assert (buckets[-1].year, buckets[-1].month) == (2026, 3)
        assert buckets[-1].label == "Mar 2026"
        by_month = {(b.year, b.month): b for b in buckets}
        assert by_month[(2026, 3)].total_sales == 30.0
        assert by_month[(2026, 3)].order_count == 2
        assert by_month[(2025, 11)].total_sales == 21.0
        assert by_month[(2026, 1)].total_sales == 0
        assert by_month[(2026, 1)].order_count == 0
        assert sum(b.order_count for b in buckets) == 3

    def test_top_sellers_counts_lines(self):
        orders = [
            _order(datetime(2026, 1, 1), _line(1, 5, "A"), _line(1, 1, "B")),
            _order(datetime(2026, 1, 2), _line(1, 1, "B"), _line(1, 1, "C")),
            _order(datetime(2026, 1, 3), _line(1, 1, "B")),
        ]
        result = top_sellers(orders)
        assert [(t.seller, t.items_sold) for t in result] == [("B", 3), ("A", 1), ("C", 1)]

    def test_top_sellers_keeps_five(self):
        lines = [_line(1, 1, f"S{i}") for i in range(8)]
        assert len(top_sellers([_order(datetime(2026, 1, 1), *lines)])) == 5

    def test_latest_orders_newest_first(self):
        orders = [
            _order(datetime(2026, 1, 1), _line(1), order_id="old"),
            _order(datetime(2026, 3, 1), _line(2), order_id="new"),
            _order(datetime(2026, 2, 1), _line(3), order_id="mid"),
        ]
        assert [o.id for o in latest_orders(orders, limit=2)] == ["new", "mid"]


class TestReportEndpoints:
    def test_admin_only(self, client):
        response = client.get("/api/reports/sales/total", headers=auth("buyer-1"))
        assert response.status_code == 403

    def test_total_and_top_sellers(self, client, product_factory):
        mug = product_factory(name="Mug", price=10, seller="Clay")
        for _ in range(2):
            client.post("/api/cart/add", json={"id": mug.id}, headers=auth("buyer-1"))
        client.post("/api/orders", json={}, headers=auth("buyer-1"))

        admin = auth("root", "admin")
        total = client.get("/api/reports/sales/total", headers=admin).json()
        assert total == {"total_sales": 20.0, "order_count": 1}

        top = client.get("/api/reports/sellers/top", headers=admin).json()
        assert top == [{"seller": "Clay", "items_sold": 1}]

        monthly = client.get("/api/reports/sales/monthly", headers=admin).json()
        assert len(monthly) == 12
        assert monthly[-1]["total_sales"] == 20.0

        latest = client.get("/api/reports/orders/latest", headers=admin).json()
        assert latest[0]["total"] == 20.0

    def test_latest_sellers(self, client, seller_card):
        seller_card("seller-1", title="First")
        response = client.get("/api/reports/sellers/latest", headers=auth("root", "admin"))
        assert [s["title"] for s in response.json()] == ["First"]


class TestCounts:
    def test_role_size(self, client, user_factory):
        user_factory("a", role="buyer")
        user_factory("b", role="buyer")
        user_factory("c", role="seller")

        admin = auth("root", "admin")
        assert client.get("/api/roles/buyer/size", headers=admin).json() == {"count": 2}
        assert client.get("/api/roles/seller/size", headers=admin).json() == {"count": 1}
        assert client.get("/api/roles/wizard/size", headers=admin).json() == {"count": 0}

    def test_collection_size(self, client, product_factory):
        product_factory()
        admin = auth("root", "admin")
        assert client.get("/api/collections/Products/size", headers=admin).json() == {"count": 1}
        assert client.get("/api/collections/orders/size", headers=admin).json() == {"count": 0}
        assert client.get("/api/collections/secrets/size", headers=admin).status_code == 404
