"""
Today / this-month movement windows for the summary cards.

Days and months are business dates (see stockpro.dates): a movement at
01:00 UTC on the 1st may still belong to the previous month locally.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Iterable

from stockpro.aggregator.valuation import ZERO, to_decimal
from stockpro.dates import business_date, same_month
from stockpro.models.enums import ExitReason, MovementType


@dataclass(frozen=True)
class MovementWindow:
    """Counts and sums for today and the current month."""

    today_count: int = 0
    today_entries: int = 0
    today_exits: int = 0
    month_entry_value: Decimal = ZERO
    month_quantity: int = 0
    month_entry_quantity: int = 0
    month_exit_quantity: int = 0
    month_sales_value: Decimal = ZERO


def _line_value(movement) -> Decimal:
    return Decimal(movement.quantity or 0) * to_decimal(movement.unit_price)


def movement_window(movements: Iterable, now: datetime, tz: tzinfo | None = None) -> MovementWindow:
    """
    Classify movements into today's and this month's.

    Args:
        movements: Movements of any type
        now: Reference instant (aware or business-local naive)
        tz: Business timezone override

    Returns:
        MovementWindow
    """
    today = business_date(now, tz)

    today_entries = today_exits = 0
    month_entry_value = ZERO
    month_sales_value = ZERO
    month_entry_quantity = month_exit_quantity = 0

    for movement in movements:
        if movement.movement_date is None:
            continue
        day = business_date(movement.movement_date, tz)
        if not same_month(day, today):
            continue

        is_entry = movement.movement_type == MovementType.IN
        quantity = movement.quantity or 0

        if day == today:
            if is_entry:
                today_entries += 1
            else:
                today_exits += 1

        if is_entry:
            month_entry_quantity += quantity
            month_entry_value += _line_value(movement)
        else:
            month_exit_quantity += quantity
            if movement.reason == ExitReason.SALE:
                month_sales_value += _line_value(movement)

    return MovementWindow(
        today_count=today_entries + today_exits,
        today_entries=today_entries,
        today_exits=today_exits,
        month_entry_value=month_entry_value,
        month_quantity=month_entry_quantity + month_exit_quantity,
        month_entry_quantity=month_entry_quantity,
        month_exit_quantity=month_exit_quantity,
        month_sales_value=month_sales_value,
    )
