"""
Inventory services — modular organization of inventory operations.

Re-exports all public classes:
    from stockpro.services import InventoryQueries, CatalogService, StockMovements, StockReports
"""

from stockpro.services.alerts import check_alerts
from stockpro.services.catalog import CatalogService
from stockpro.services.movements import StockMovements, reconcile_products
from stockpro.services.queries import InventoryQueries
from stockpro.services.reports import StockReports

__all__ = [
    'InventoryQueries',
    'CatalogService',
    'StockMovements',
    'StockReports',
    'check_alerts',
    'reconcile_products',
]
