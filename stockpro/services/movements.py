"""
Stock movements — state-changing operations (entry, exit, reconcile).

All methods use transaction.atomic() with appropriate locking.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.db import transaction

from stockpro.conf import stockpro_settings
from stockpro.dates import business_datetime
from stockpro.exceptions import StockError
from stockpro.models import Customer, ExitReason, MovementType, Product, StockMovement, Supplier
from stockpro.models.movement import CENTS, line_total
from stockpro.services.catalog import _clean_price, _get_owned

logger = logging.getLogger('stockpro')


def _check_total(quantity: int, unit_price: Decimal | None, total_value) -> Decimal | None:
    """
    Derive total_value, or validate a supplied one.

    Raises:
        StockError('INVALID_VALUE'): If total_value is not a number
        StockError('TOTAL_VALUE_MISMATCH'): If strict and the values differ
    """
    expected = line_total(quantity, unit_price)
    if total_value is None:
        return expected

    try:
        supplied = Decimal(str(total_value)).quantize(CENTS)
    except InvalidOperation as exc:
        raise StockError('INVALID_VALUE', field='total_value', value=total_value) from exc
    if expected is not None and supplied != expected:
        if stockpro_settings.STRICT_TOTAL_VALUE:
            raise StockError(
                'TOTAL_VALUE_MISMATCH',
                total_value=supplied,
                expected=expected,
            )
        logger.warning(
            "stock.total_value_mismatch",
            extra={"total_value": str(supplied), "expected": str(expected)},
        )
    return supplied


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def record_entry(cls, session, product, quantity: int,
                     unit_price=None, supplier=None,
                     movement_date: date | datetime | None = None,
                     total_value=None, reason: str = '', notes: str = '') -> StockMovement:
        """
        Stock entry (purchase, replenishment, opening balance).

        Concurrency:
            - Runs under transaction.atomic()
            - StockMovement.save() updates current_stock with F()

        Raises:
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('INVALID_PRICE'): If unit_price < 0
            StockError('NOT_FOUND'): If product/supplier is not the owner's
        """
        if quantity is None or quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)

        unit_price = _clean_price('unit_price', unit_price)
        total = _check_total(quantity, unit_price, total_value)

        with transaction.atomic():
            product = _get_owned(Product, session, product)
            if supplier is not None:
                supplier = _get_owned(Supplier, session, supplier)

            movement = StockMovement.objects.create(
                owner=session.owner,
                product=product,
                supplier=supplier,
                movement_type=MovementType.IN,
                quantity=quantity,
                unit_price=unit_price,
                total_value=total,
                movement_date=business_datetime(movement_date, session.tz),
                reason=reason,
                notes=notes,
            )
            logger.info(
                "stock.entry",
                extra={
                    "product_id": product.pk,
                    "qty": quantity,
                    "unit_price": str(unit_price),
                    "movement_id": movement.pk,
                },
            )
            return movement

    @classmethod
    def record_exit(cls, session, product, quantity: int, reason: str,
                    customer=None, unit_price=None,
                    movement_date: date | datetime | None = None,
                    total_value=None, notes: str = '') -> StockMovement:
        """
        Stock exit (sale, loss, return, transfer, internal use, disposal).

        Raises:
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('REASON_REQUIRED'): If reason is not an ExitReason
            StockError('INSUFFICIENT_QUANTITY'): If quantity > current_stock

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on Product
            - Verifies stock after lock
        """
        if quantity is None or quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)
        if reason not in ExitReason.values:
            raise StockError('REASON_REQUIRED', reason=reason, allowed=list(ExitReason.values))

        unit_price = _clean_price('unit_price', unit_price)
        total = _check_total(quantity, unit_price, total_value)

        with transaction.atomic():
            owned = _get_owned(Product, session, product)
            locked = Product.objects.select_for_update().get(pk=owned.pk)
            if customer is not None:
                customer = _get_owned(Customer, session, customer)

            available = locked.current_stock or 0
            if available < quantity:
                raise StockError(
                    'INSUFFICIENT_QUANTITY',
                    available=available,
                    requested=quantity,
                )

            movement = StockMovement.objects.create(
                owner=session.owner,
                product=locked,
                customer=customer,
                movement_type=MovementType.OUT,
                quantity=quantity,
                unit_price=unit_price,
                total_value=total,
                movement_date=business_datetime(movement_date, session.tz),
                reason=reason,
                notes=notes,
            )
            logger.info(
                "stock.exit",
                extra={
                    "product_id": locked.pk,
                    "qty": quantity,
                    "reason": reason,
                    "movement_id": movement.pk,
                },
            )
            return movement

    @classmethod
    def reconcile(cls, session, product=None) -> dict:
        """
        Recompute current_stock from the ledger.

        Args:
            session: Session
            product: Single product (None = all of the owner's)

        Returns:
            Dict[product.pk, (old, new)] for products that drifted
        """
        if product is not None:
            products = [_get_owned(Product, session, product)]
        else:
            products = Product.objects.for_owner(session.owner).order_by('pk')

        return reconcile_products(products)


def reconcile_products(products) -> dict:
    """
    Lock each product and recompute its current_stock from the ledger.

    Shared by inventory.reconcile(), the admin action and the
    reconcile_stock command. Each product runs in its own transaction
    under select_for_update(), so a concurrent movement cannot be
    overwritten by a stale total.

    Returns:
        Dict[product.pk, (old, new)] for products that drifted
    """
    checked = 0
    drifted = {}
    for item in products:
        checked += 1
        with transaction.atomic():
            locked = Product.objects.select_for_update().get(pk=item.pk)
            old = locked.current_stock
            new = locked.recalculate()
            if old != new:
                drifted[locked.pk] = (old, new)

    logger.info(
        "stock.reconcile",
        extra={"checked": checked, "drifted": len(drifted)},
    )
    return drifted
