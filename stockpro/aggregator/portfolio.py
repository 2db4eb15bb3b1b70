"""
Portfolio summary and low-stock listing.

Recomputed from scratch on every call; nothing is cached.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping

from stockpro.aggregator.status import SEVERITY, classify, needs_restock
from stockpro.aggregator.valuation import ZERO, EntryPriceStats, to_decimal
from stockpro.models.enums import StockStatus


@dataclass(frozen=True)
class PortfolioSummary:
    """Figures for the summary cards."""

    total_products: int = 0
    total_value_at_cost: Decimal = ZERO
    total_value_at_sale: Decimal = ZERO
    low_stock_count: int = 0
    out_of_stock_count: int = 0

    def as_dict(self) -> dict:
        return {
            'total_products': self.total_products,
            'total_value_at_cost': str(self.total_value_at_cost),
            'total_value_at_sale': str(self.total_value_at_sale),
            'low_stock_count': self.low_stock_count,
            'out_of_stock_count': self.out_of_stock_count,
        }


@dataclass(frozen=True)
class LowStockRow:
    """A product that needs attention."""

    product: object
    status: StockStatus
    current_stock: int
    min_stock: int

    @property
    def shortage(self) -> int:
        """Units missing to reach the minimum."""
        return max(self.min_stock - self.current_stock, 0)


def unit_cost(product, average_prices: Mapping | None = None) -> Decimal:
    """
    Cost basis of one unit: the weighted average entry price when known,
    else the product's cost_price, else 0.
    """
    if average_prices:
        value = average_prices.get(product.pk)
        if isinstance(value, EntryPriceStats):
            value = value.average_price
        if value is not None:
            return to_decimal(value)
    return to_decimal(product.cost_price)


def summarize(products: Iterable, average_prices: Mapping | None = None) -> PortfolioSummary:
    """
    Portfolio-level statistics in a single pass.

    Args:
        products: Products already scoped to the owner
        average_prices: Dict[product.pk, Decimal | EntryPriceStats]

    Returns:
        PortfolioSummary
    """
    total_products = 0
    at_cost = ZERO
    at_sale = ZERO
    low = 0
    out = 0

    for product in products:
        total_products += 1
        stock = Decimal(product.current_stock or 0)
        at_cost += stock * unit_cost(product, average_prices)
        at_sale += stock * to_decimal(product.sale_price)

        status = classify(product.current_stock, product.min_stock)
        if status == StockStatus.OUT_OF_STOCK:
            out += 1
        elif needs_restock(status):
            low += 1

    return PortfolioSummary(
        total_products=total_products,
        total_value_at_cost=at_cost,
        total_value_at_sale=at_sale,
        low_stock_count=low,
        out_of_stock_count=out,
    )


def _fill_ratio(row: LowStockRow) -> Decimal:
    if row.min_stock <= 0:
        return ZERO
    return Decimal(row.current_stock) / Decimal(row.min_stock)


def low_stock_products(products: Iterable, include_out_of_stock: bool = True) -> list[LowStockRow]:
    """
    Products that are out of stock, critical or low.

    Sorted by severity, then by how full they are relative to the minimum,
    then by name.
    """
    rows = []
    for product in products:
        status = classify(product.current_stock, product.min_stock)
        if status == StockStatus.NORMAL:
            continue
        if status == StockStatus.OUT_OF_STOCK and not include_out_of_stock:
            continue
        rows.append(LowStockRow(
            product=product,
            status=status,
            current_stock=product.current_stock or 0,
            min_stock=product.min_stock or 0,
        ))

    rows.sort(key=lambda r: (SEVERITY[r.status], _fill_ratio(r), r.product.name or ''))
    return rows
