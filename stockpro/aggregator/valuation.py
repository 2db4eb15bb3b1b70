"""
Weighted-average entry price.

Inventory is valued at the quantity-weighted mean of every recorded
acquisition price:

    average = Σ(quantity × unit_price) / Σ quantity

over the product's ``in`` movements that carry a unit_price. With no such
movement, the product's cost_price is used (or 0).

All arithmetic is Decimal. Inputs are never mutated.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from stockpro.dates import business_datetime
from stockpro.models.enums import MovementType

logger = logging.getLogger('stockpro')

ZERO = Decimal('0')


def to_decimal(value) -> Decimal:
    """Null-safe Decimal conversion (None → 0, floats via str)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class EntryPriceStats:
    """Valuation figures for one product."""

    average_price: Decimal
    last_price: Decimal | None = None
    last_entry_at: datetime | None = None
    entries_count: int = 0
    total_quantity: int = 0

    @property
    def from_entries(self) -> bool:
        """False when average_price is the cost_price fallback."""
        return self.entries_count > 0


def is_priced_entry(movement) -> bool:
    return movement.movement_type == MovementType.IN and movement.unit_price is not None


def _recency_key(indexed):
    index, movement = indexed
    when = movement.movement_date
    if when is None:
        return (False, datetime.min, movement.pk or 0, index)
    # dates, naive and aware datetimes all become aware instants
    return (True, business_datetime(when), movement.pk or 0, index)


def entry_price_stats(movements: Iterable, cost_price=None) -> EntryPriceStats:
    """
    Entry price figures for a single product.

    Args:
        movements: The product's movements (any type, any order)
        cost_price: Fallback when there is no priced entry

    Returns:
        EntryPriceStats
    """
    qualifying = [
        (index, m) for index, m in enumerate(movements) if is_priced_entry(m)
    ]

    total_quantity = sum((m.quantity or 0) for _, m in qualifying)
    if not qualifying or total_quantity <= 0:
        return EntryPriceStats(average_price=to_decimal(cost_price))

    weighted = sum(
        (Decimal(m.quantity or 0) * to_decimal(m.unit_price) for _, m in qualifying),
        ZERO,
    )
    _, last = max(qualifying, key=_recency_key)

    return EntryPriceStats(
        average_price=weighted / Decimal(total_quantity),
        last_price=to_decimal(last.unit_price),
        last_entry_at=last.movement_date,
        entries_count=len(qualifying),
        total_quantity=total_quantity,
    )


def average_entry_price(movements: Iterable, cost_price=None) -> Decimal:
    """Shortcut for entry_price_stats(...).average_price."""
    return entry_price_stats(movements, cost_price).average_price


def entry_prices_by_product(products: Iterable, movements: Iterable) -> dict:
    """
    EntryPriceStats for every product, in one pass over the movements.

    Movements whose product is not in ``products`` are orphans: they are
    left out (and logged), never raised on.

    Returns:
        Dict[product.pk, EntryPriceStats]
    """
    products = list(products)
    grouped = {p.pk: [] for p in products}
    orphans = 0

    for movement in movements:
        bucket = grouped.get(movement.product_id)
        if bucket is None:
            orphans += 1
            continue
        bucket.append(movement)

    if orphans:
        logger.warning("stock.orphan_movements", extra={"count": orphans})

    return {
        p.pk: entry_price_stats(grouped[p.pk], p.cost_price)
        for p in products
    }
