"""
Inventory aggregator — pure calculations over loaded records.

Nothing here touches the database: every function takes products and
movements already in memory (model instances or any object with the same
attributes) and returns new values.

    from stockpro.aggregator import classify, entry_prices_by_product, summarize

    prices = entry_prices_by_product(products, movements)
    summary = summarize(products, prices)
"""

from stockpro.aggregator.portfolio import (
    LowStockRow,
    PortfolioSummary,
    low_stock_products,
    summarize,
    unit_cost,
)
from stockpro.aggregator.status import classify, needs_restock
from stockpro.aggregator.valuation import (
    EntryPriceStats,
    average_entry_price,
    entry_price_stats,
    entry_prices_by_product,
)
from stockpro.aggregator.windows import MovementWindow, movement_window

__all__ = [
    'classify',
    'needs_restock',
    'EntryPriceStats',
    'entry_price_stats',
    'average_entry_price',
    'entry_prices_by_product',
    'PortfolioSummary',
    'LowStockRow',
    'summarize',
    'unit_cost',
    'low_stock_products',
    'MovementWindow',
    'movement_window',
]
