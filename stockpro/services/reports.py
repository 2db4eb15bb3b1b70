"""
Stock reports — dashboard and stock report assembly.

Each call fetches the owner's records once and recomputes everything with
stockpro.aggregator. Fetch failures surface as StockError('FETCH_FAILED');
nothing is retried or cached.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from stockpro.aggregator import (
    EntryPriceStats,
    LowStockRow,
    MovementWindow,
    PortfolioSummary,
    classify,
    entry_prices_by_product,
    low_stock_products,
    movement_window,
    summarize,
)
from stockpro.conf import stockpro_settings
from stockpro.models import StockStatus
from stockpro.services.queries import InventoryQueries, fetch


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard page shows."""

    summary: PortfolioSummary
    window: MovementWindow
    supplier_count: int
    alerts: list[LowStockRow] = field(default_factory=list)
    recent_movements: list = field(default_factory=list)


@dataclass(frozen=True)
class StockReportRow:
    """One line of the stock report."""

    product: object
    status: StockStatus
    average_cost: Decimal
    total_value: Decimal
    prices: EntryPriceStats
    last_movement_at: datetime | None = None
    supplier_ids: frozenset = frozenset()


def _matches_search(product, term: str) -> bool:
    if not term:
        return True
    term = term.lower()
    category = product.category.name if product.category_id else ''
    return any(
        term in (value or '').lower()
        for value in (product.name, product.code, category)
    )


class StockReports:
    """Report assembly methods."""

    @classmethod
    def dashboard(cls, session, now: datetime | None = None) -> Dashboard:
        """
        Summary cards, today/month windows, low-stock alerts and the most
        recent movements.
        """
        now = now or timezone.now()
        products = fetch('products', InventoryQueries.list_products(session))
        movements = fetch('stock_movements', InventoryQueries.list_stock_movements(session))
        suppliers = fetch('suppliers', InventoryQueries.list_suppliers(session))

        prices = entry_prices_by_product(products, movements)
        limit = stockpro_settings.RECENT_MOVEMENTS_LIMIT

        return Dashboard(
            summary=summarize(products, prices),
            window=movement_window(movements, now, session.tz),
            supplier_count=len(suppliers),
            alerts=low_stock_products(products),
            recent_movements=movements[:limit],
        )

    @classmethod
    def stock_report(cls, session, search: str = '', category=None,
                     supplier=None, status: str | None = None) -> list[StockReportRow]:
        """
        Per-product stock report.

        Args:
            session: Session
            search: Matches name, code or category name (case-insensitive)
            category: Category instance or pk
            supplier: Supplier instance or pk (products with an entry from it)
            status: StockStatus value
        """
        products = fetch('products', InventoryQueries.list_products(session))
        movements = fetch('stock_movements', InventoryQueries.list_stock_movements(session))
        prices = entry_prices_by_product(products, movements)

        last_movement = {}
        suppliers_of = {}
        for movement in movements:
            when = movement.movement_date
            current = last_movement.get(movement.product_id)
            if when is not None and (current is None or when > current):
                last_movement[movement.product_id] = when
            if movement.supplier_id is not None:
                suppliers_of.setdefault(movement.product_id, set()).add(movement.supplier_id)

        category_id = getattr(category, 'pk', category)
        supplier_id = getattr(supplier, 'pk', supplier)

        rows = []
        for product in products:
            if not _matches_search(product, search):
                continue
            if category_id is not None and product.category_id != category_id:
                continue
            product_suppliers = frozenset(suppliers_of.get(product.pk, ()))
            if supplier_id is not None and supplier_id not in product_suppliers:
                continue

            product_status = classify(product.current_stock, product.min_stock)
            if status and product_status != status:
                continue

            stats = prices[product.pk]
            rows.append(StockReportRow(
                product=product,
                status=product_status,
                average_cost=stats.average_price,
                total_value=Decimal(product.current_stock or 0) * stats.average_price,
                prices=stats,
                last_movement_at=last_movement.get(product.pk),
                supplier_ids=product_suppliers,
            ))

        return rows

    @classmethod
    def report_summary(cls, rows: list[StockReportRow]) -> PortfolioSummary:
        """Summary cards for (possibly filtered) report rows."""
        return summarize(
            [row.product for row in rows],
            {row.product.pk: row.prices for row in rows},
        )
