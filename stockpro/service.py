"""
Inventory Service — The single public interface for all inventory operations.

Usage:
    from stockpro import inventory, Session, StockError

    session = Session(owner=request.user)
    produto = inventory.create_product(session, 'MSE001', 'Mouse Gamer RGB',
                                       cost_price=Decimal('45.90'))
    inventory.record_entry(session, produto, 50, unit_price=Decimal('45.90'))
    inventory.record_exit(session, produto, 12, reason='Venda')
    inventory.dashboard(session).summary.low_stock_count
"""

from stockpro.services.alerts import check_alerts
from stockpro.services.catalog import CatalogService
from stockpro.services.movements import StockMovements
from stockpro.services.queries import InventoryQueries
from stockpro.services.reports import StockReports


class Inventory(InventoryQueries, CatalogService, StockMovements, StockReports):
    """
    Single interface for all inventory operations.

    Parameter convention: (session, record, quantity, ...)
    Every method is scoped to session.owner.
    """

    check_alerts = staticmethod(check_alerts)
