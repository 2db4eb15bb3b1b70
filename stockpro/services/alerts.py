"""
Stock alerts — products below their configured minimum.

Usage:
    from stockpro.services.alerts import check_alerts

    # After stock changes, or periodically
    rows = check_alerts(session)
"""

import logging

from stockpro.aggregator import LowStockRow, low_stock_products
from stockpro.services.queries import InventoryQueries, fetch

logger = logging.getLogger('stockpro')


def check_alerts(session, include_out_of_stock: bool = True) -> list[LowStockRow]:
    """
    Return the owner's low, critical and (optionally) out-of-stock products,
    most severe first. Each one is logged as a warning.
    """
    products = fetch('products', InventoryQueries.list_products(session))
    rows = low_stock_products(products, include_out_of_stock=include_out_of_stock)

    for row in rows:
        logger.warning(
            "stock.alert.triggered",
            extra={
                "product_id": row.product.pk,
                "status": str(row.status),
                "current_stock": row.current_stock,
                "min_stock": row.min_stock,
            },
        )

    return rows
