"""Tests for the business analytics aggregator."""

from __future__ import annotations

from restgate.backend.client import RestClient
from restgate.tools.analytics import (
    AnalyticsSnapshot,
    compute_analytics,
    summarize,
    transactions_path,
)
from tests.fixtures.backend import FakeBackend

TRANSACTIONS = [
    {"id": 1, "total_amount": 100},
    {"id": 2, "total_amount": 50.5},
    {"id": 3},
    {"id": 4, "total_amount": None},
]

PRODUCTS = [
    {"quantity": 5, "buying_price_per_base_unit": 2.0, "min_stock_level": 3},
    {"quantity": 4, "buying_price_per_base_unit": 10},
    {"quantity": 20, "min_stock_level": 25},
    {"buying_price_per_base_unit": 7},
    {"quantity": 3, "min_stock_level": 0},
]


class TestSummarize:
    def test_totals(self) -> None:
        snap = summarize(TRANSACTIONS, PRODUCTS, "2024-01-01", "2024-01-31")
        assert snap.total_transactions == 4
        assert snap.total_revenue == 150.5
        assert snap.total_products == 5
        # 5*2 + 4*10 + 20*0 + 0*7 + 3*0
        assert snap.total_inventory_value == 50

    def test_low_stock_uses_min_level_or_ten(self) -> None:
        snap = summarize([], PRODUCTS)
        # 5<3 no; 4<10 yes; 20<25 yes; 0<10 yes; 3<(0 or 10) yes
        assert snap.low_stock_products == 4

    def test_non_list_responses_count_as_empty(self) -> None:
        snap = summarize({"message": "oops"}, None)
        assert snap.total_transactions == 0
        assert snap.total_revenue == 0
        assert snap.total_products == 0
        assert snap.low_stock_products == 0

    def test_numeric_strings_accepted(self) -> None:
        snap = summarize(
            [{"total_amount": "12.5"}],
            [{"quantity": "2", "buying_price_per_base_unit": "3"}],
        )
        assert snap.total_revenue == 12.5
        assert snap.total_inventory_value == 6

    def test_to_dict_shape(self) -> None:
        snap = AnalyticsSnapshot("2024-01-01", None, 1, 2.0, 3, 4.0, 5)
        assert snap.to_dict() == {
            "date_range": {"from": "2024-01-01", "to": None},
            "total_transactions": 1,
            "total_revenue": 2.0,
            "total_products": 3,
            "total_inventory_value": 4.0,
            "low_stock_products": 5,
        }


class TestTransactionsPath:
    def test_unbounded(self) -> None:
        assert transactions_path() == "/rest/v1/transactions?select=*"

    def test_bounded(self) -> None:
        assert transactions_path("2024-01-01", "2024-01-31") == (
            "/rest/v1/transactions?select=*"
            "&created_at=gte.2024-01-01&created_at=lte.2024-01-31"
        )

    def test_only_upper_bound(self) -> None:
        assert transactions_path(None, "2024-01-31") == (
            "/rest/v1/transactions?select=*&created_at=lte.2024-01-31"
        )


class TestComputeAnalytics:
    async def test_two_reads(self, rest_client: RestClient, backend: FakeBackend) -> None:
        backend.on("GET", "/rest/v1/transactions", json=TRANSACTIONS)
        backend.on("GET", "/rest/v1/products", json=PRODUCTS)

        snap = await compute_analytics(rest_client, "2024-01-01", "2024-01-31")

        assert sorted(backend.paths()) == ["/rest/v1/products", "/rest/v1/transactions"]
        sales_request = next(r for r in backend.requests if r.url.path.endswith("transactions"))
        assert sales_request.url.params.get_list("created_at") == [
            "gte.2024-01-01",
            "lte.2024-01-31",
        ]
        products_request = next(r for r in backend.requests if r.url.path.endswith("products"))
        assert "created_at" not in products_request.url.params
        assert snap.total_revenue == 150.5
        assert snap.date_from == "2024-01-01"
