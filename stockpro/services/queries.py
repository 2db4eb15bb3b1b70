"""
Inventory queries — read-only operations.

All methods are classmethod, scoped to the session owner, and return lazy
QuerySets. Callers that need a materialized list with a structured failure
use fetch().
"""

import logging

from django.db import DatabaseError

from stockpro.exceptions import StockError
from stockpro.models import Category, Customer, Product, StockMovement, Supplier

logger = logging.getLogger('stockpro')


def fetch(what: str, queryset) -> list:
    """
    Materialize a queryset.

    Raises:
        StockError('FETCH_FAILED'): On any database error (no retry)
    """
    try:
        return list(queryset)
    except DatabaseError as exc:
        logger.error(
            "stock.fetch_failed",
            extra={"what": what, "error": str(exc)},
        )
        raise StockError('FETCH_FAILED', what=what) from exc


class InventoryQueries:
    """Read-only query methods."""

    @classmethod
    def list_products(cls, session):
        """Owner's products ordered by name, with category loaded."""
        return (
            Product.objects.for_owner(session.owner)
            .select_related('category')
            .order_by('name', 'pk')
        )

    @classmethod
    def list_stock_movements(cls, session, movement_type: str | None = None, product=None):
        """
        Owner's movements, newest first.

        Args:
            session: Session
            movement_type: 'in', 'out' or None for both
            product: Product instance or pk (None = all)
        """
        qs = StockMovement.objects.for_owner(session.owner).select_related(
            'product', 'supplier', 'customer'
        )

        if movement_type is not None:
            qs = qs.filter(movement_type=movement_type)

        if product is not None:
            qs = qs.filter(product=product)

        return qs.order_by('-movement_date', '-pk')

    @classmethod
    def list_suppliers(cls, session):
        return Supplier.objects.filter(owner=session.owner).order_by('name', 'pk')

    @classmethod
    def list_customers(cls, session):
        return Customer.objects.filter(owner=session.owner).order_by('name', 'pk')

    @classmethod
    def list_categories(cls, session):
        return Category.objects.filter(owner=session.owner).order_by('name', 'pk')

    @classmethod
    def get_product(cls, session, pk) -> Product:
        """
        Raises:
            StockError('NOT_FOUND'): If the product is not the owner's
        """
        product = Product.objects.for_owner(session.owner).filter(pk=pk).first()
        if product is None:
            raise StockError('NOT_FOUND', model='Product', pk=pk)
        return product
