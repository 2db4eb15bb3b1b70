"""
Stock status classification — the single rule used everywhere.

    out_of_stock  current ≤ 0
    critical      min > 0 and current ≤ min × CRITICAL_STOCK_RATIO
    low           min > 0 and current ≤ min
    normal        otherwise

Both boundaries are inclusive. A product with no minimum configured
(min_stock 0 or None) is never low or critical.
"""

from decimal import Decimal

from stockpro.conf import stockpro_settings
from stockpro.models.enums import StockStatus

SEVERITY = {
    StockStatus.OUT_OF_STOCK: 0,
    StockStatus.CRITICAL: 1,
    StockStatus.LOW: 2,
    StockStatus.NORMAL: 3,
}


def classify(current_stock, min_stock, critical_ratio=None) -> StockStatus:
    """
    Classify a (current_stock, min_stock) pair.

    Args:
        current_stock: Units on hand (None = 0)
        min_stock: Configured minimum (None = 0)
        critical_ratio: Fraction of min_stock for the critical tier
            (None = STOCKPRO['CRITICAL_STOCK_RATIO'])

    Returns:
        StockStatus
    """
    current = current_stock or 0
    minimum = min_stock or 0

    if current <= 0:
        return StockStatus.OUT_OF_STOCK
    if minimum <= 0:
        return StockStatus.NORMAL

    if critical_ratio is None:
        critical_ratio = stockpro_settings.CRITICAL_STOCK_RATIO
    ratio = Decimal(str(critical_ratio))

    if Decimal(current) <= Decimal(minimum) * ratio:
        return StockStatus.CRITICAL
    if current <= minimum:
        return StockStatus.LOW
    return StockStatus.NORMAL


def needs_restock(status) -> bool:
    """Low or critical (counted together as "estoque baixo")."""
    return status in (StockStatus.LOW, StockStatus.CRITICAL)
