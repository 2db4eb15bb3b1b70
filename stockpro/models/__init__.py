"""
StockPro Models.

Core models for inventory management:
- Category: Display grouping for products
- Supplier / Customer: Provenance of entries and exits
- Product: Catalog item with cached current_stock
- StockMovement: Immutable ledger of entries and exits
"""

from stockpro.models.category import Category
from stockpro.models.enums import ExitReason, MovementType, StockStatus
from stockpro.models.movement import StockMovement
from stockpro.models.partner import Customer, Supplier
from stockpro.models.product import Product

__all__ = [
    'MovementType',
    'ExitReason',
    'StockStatus',
    'Category',
    'Supplier',
    'Customer',
    'Product',
    'StockMovement',
]
