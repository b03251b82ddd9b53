"""Business analytics over the transactions and products tables.

Both collections are fetched whole, in one unpaginated request each, so
the figures only cover what the backing service returns for a single
read (PostgREST's ``max-rows`` setting, if any, caps them silently).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from restgate.backend.query import select_path

if TYPE_CHECKING:
    from restgate.backend.client import RestClient

TRANSACTIONS_TABLE = "transactions"
PRODUCTS_TABLE = "products"
DEFAULT_MIN_STOCK_LEVEL = 10


@dataclass(frozen=True, slots=True)
class AnalyticsSnapshot:
    """Aggregate figures for one date range."""

    date_from: str | None
    date_to: str | None
    total_transactions: int
    total_revenue: float
    total_products: int
    total_inventory_value: float
    low_stock_products: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date_range": {"from": self.date_from, "to": self.date_to},
            "total_transactions": self.total_transactions,
            "total_revenue": self.total_revenue,
            "total_products": self.total_products,
            "total_inventory_value": self.total_inventory_value,
            "low_stock_products": self.low_stock_products,
        }


def transactions_path(date_from: str | None = None, date_to: str | None = None) -> str:
    filters = []
    if date_from:
        filters.append(f"created_at=gte.{date_from}")
    if date_to:
        filters.append(f"created_at=lte.{date_to}")
    return select_path(TRANSACTIONS_TABLE, where="&".join(filters) or None)


def _number(value: Any) -> float:
    """Numeric value of a row field; absent, null or non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _rows(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [row for row in value if isinstance(row, dict)]


def summarize(
    transactions: Any,
    products: Any,
    date_from: str | None = None,
    date_to: str | None = None,
) -> AnalyticsSnapshot:
    """Reduce the two collections into an :class:`AnalyticsSnapshot`."""
    sales = _rows(transactions)
    stock = _rows(products)

    revenue: float = 0
    for sale in sales:
        revenue += _number(sale.get("total_amount"))

    inventory_value: float = 0
    low_stock = 0
    for product in stock:
        quantity = _number(product.get("quantity"))
        inventory_value += quantity * _number(product.get("buying_price_per_base_unit"))
        threshold = _number(product.get("min_stock_level")) or DEFAULT_MIN_STOCK_LEVEL
        if quantity < threshold:
            low_stock += 1

    return AnalyticsSnapshot(
        date_from=date_from,
        date_to=date_to,
        total_transactions=len(sales),
        total_revenue=revenue,
        total_products=len(stock),
        total_inventory_value=inventory_value,
        low_stock_products=low_stock,
    )


async def compute_analytics(
    client: RestClient,
    date_from: str | None = None,
    date_to: str | None = None,
) -> AnalyticsSnapshot:
    """Fetch transactions and products concurrently and summarise them."""
    transactions, products = await asyncio.gather(
        client.request(transactions_path(date_from, date_to)),
        client.request(select_path(PRODUCTS_TABLE)),
    )
    return summarize(transactions, products, date_from, date_to)
