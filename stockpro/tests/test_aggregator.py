"""
Tests for the pure aggregation functions (no database).
"""

import random
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from stockpro.aggregator import (
    average_entry_price,
    classify,
    entry_price_stats,
    entry_prices_by_product,
    low_stock_products,
    movement_window,
    summarize,
)
from stockpro.dates import business_date, business_datetime
from stockpro.models import MovementType, Product, StockMovement, StockStatus


SP = ZoneInfo('America/Sao_Paulo')


def make_product(pk, current_stock=0, min_stock=0, cost_price=None, sale_price=None, name=None):
    return Product(
        id=pk,
        code=f'P{pk:03d}',
        name=name or f'Produto {pk}',
        current_stock=current_stock,
        min_stock=min_stock,
        cost_price=cost_price,
        sale_price=sale_price,
    )


def make_movement(product_id, quantity, unit_price=None, movement_type=MovementType.IN,
                  when=None, pk=None, reason=''):
    return StockMovement(
        id=pk,
        product_id=product_id,
        movement_type=movement_type,
        quantity=quantity,
        unit_price=None if unit_price is None else Decimal(unit_price),
        movement_date=when or datetime(2026, 3, 1, 12, 0, tzinfo=SP),
        reason=reason,
    )


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize('minimum', [0, 1, 10, 1000])
    def test_zero_stock_is_out_of_stock(self, minimum):
        assert classify(0, minimum) == StockStatus.OUT_OF_STOCK

    def test_zero_minimum_is_never_low(self):
        assert classify(5, 0) == StockStatus.NORMAL
        assert classify(1, None) == StockStatus.NORMAL

    def test_tiers(self):
        assert classify(5, 10) == StockStatus.CRITICAL   # 5 ≤ 10 × 0.5
        assert classify(8, 10) == StockStatus.LOW        # 5 < 8 ≤ 10
        assert classify(10, 10) == StockStatus.LOW       # inclusive boundary
        assert classify(11, 10) == StockStatus.NORMAL

    def test_null_stock_is_out_of_stock(self):
        assert classify(None, 10) == StockStatus.OUT_OF_STOCK

    def test_odd_minimum_uses_exact_half(self):
        assert classify(3, 7) == StockStatus.CRITICAL    # 3 ≤ 3.5
        assert classify(4, 7) == StockStatus.LOW

    def test_custom_ratio(self):
        assert classify(2, 10, critical_ratio=Decimal('0.2')) == StockStatus.CRITICAL
        assert classify(3, 10, critical_ratio=Decimal('0.2')) == StockStatus.LOW

    def test_product_property_uses_classifier(self):
        assert make_product(1, current_stock=5, min_stock=10).stock_status == StockStatus.CRITICAL


class TestEntryPrice:
    """Tests for weighted-average entry price."""

    def test_equal_quantities(self):
        movements = [make_movement(1, 10, '2.00'), make_movement(1, 10, '4.00')]
        assert average_entry_price(movements) == Decimal('3.00')

    def test_weighted_by_quantity(self):
        movements = [make_movement(1, 1, '10.00'), make_movement(1, 9, '2.00')]
        assert average_entry_price(movements) == Decimal('2.80')

    def test_ignores_exits_and_unpriced_entries(self):
        movements = [
            make_movement(1, 10, '2.00'),
            make_movement(1, 50, None),
            make_movement(1, 5, '99.00', movement_type=MovementType.OUT),
        ]
        stats = entry_price_stats(movements)
        assert stats.average_price == Decimal('2.00')
        assert stats.entries_count == 1
        assert stats.total_quantity == 10

    def test_fallback_to_cost_price(self):
        stats = entry_price_stats([], cost_price=Decimal('45.90'))
        assert stats.average_price == Decimal('45.90')
        assert not stats.from_entries
        assert stats.last_price is None

    def test_fallback_to_zero(self):
        assert average_entry_price([make_movement(1, 3, None)], cost_price=None) == Decimal('0')

    def test_no_float_drift(self):
        movements = [make_movement(1, 1, '0.10') for _ in range(10)]
        assert average_entry_price(movements) == Decimal('0.10')

    def test_last_price_by_date(self):
        movements = [
            make_movement(1, 1, '7.00', when=datetime(2026, 3, 10, tzinfo=SP)),
            make_movement(1, 1, '5.00', when=datetime(2026, 3, 12, tzinfo=SP)),
            make_movement(1, 1, '6.00', when=datetime(2026, 3, 11, tzinfo=SP)),
        ]
        stats = entry_price_stats(movements)
        assert stats.last_price == Decimal('5.00')
        assert stats.last_entry_at == datetime(2026, 3, 12, tzinfo=SP)
        assert stats.entries_count == 3

    def test_last_price_tie_broken_by_id(self):
        when = datetime(2026, 3, 10, tzinfo=SP)
        movements = [
            make_movement(1, 1, '8.00', when=when, pk=2),
            make_movement(1, 1, '9.00', when=when, pk=1),
        ]
        assert entry_price_stats(movements).last_price == Decimal('8.00')
        assert entry_price_stats(list(reversed(movements))).last_price == Decimal('8.00')

    def test_last_price_tie_broken_by_input_order_without_id(self):
        when = datetime(2026, 3, 10, tzinfo=SP)
        movements = [
            make_movement(1, 1, '8.00', when=when),
            make_movement(1, 1, '9.00', when=when),
        ]
        assert entry_price_stats(movements).last_price == Decimal('9.00')
        assert entry_price_stats(list(reversed(movements))).last_price == Decimal('8.00')

    def test_last_price_with_mixed_date_types(self):
        movements = [
            make_movement(1, 1, '7.00', when=date(2026, 3, 12)),
            make_movement(1, 1, '5.00', when=datetime(2026, 3, 11, 18, 0, tzinfo=SP)),
            make_movement(1, 1, '6.00', when=datetime(2026, 3, 12, 9, 0)),
        ]
        stats = entry_price_stats(movements)
        assert stats.last_price == Decimal('6.00')
        assert stats.entries_count == 3

    def test_by_product_groups_and_drops_orphans(self):
        products = [make_product(1, cost_price=Decimal('1.00')), make_product(2, cost_price=Decimal('7.00'))]
        movements = [
            make_movement(1, 10, '2.00'),
            make_movement(1, 10, '4.00'),
            make_movement(99, 1000, '500.00'),
        ]
        prices = entry_prices_by_product(products, movements)

        assert set(prices) == {1, 2}
        assert prices[1].average_price == Decimal('3.00')
        assert prices[2].average_price == Decimal('7.00')

    def test_does_not_mutate_inputs(self):
        movements = [make_movement(1, 10, '2.00')]
        entry_price_stats(movements)
        assert movements[0].unit_price == Decimal('2.00')
        assert movements[0].quantity == 10


class TestSummarize:
    """Tests for summarize()."""

    def test_counts(self):
        products = [
            make_product(1, current_stock=0),
            make_product(2, current_stock=5, min_stock=10),
            make_product(3, current_stock=20, min_stock=10),
        ]
        summary = summarize(products)

        assert summary.total_products == 3
        assert summary.out_of_stock_count == 1
        assert summary.low_stock_count == 1

    def test_low_count_includes_low_and_critical(self):
        products = [
            make_product(1, current_stock=5, min_stock=10),
            make_product(2, current_stock=8, min_stock=10),
        ]
        assert summarize(products).low_stock_count == 2

    def test_values_use_average_price_then_cost_price(self):
        products = [
            make_product(1, current_stock=10, cost_price=Decimal('1.00'), sale_price=Decimal('5.00')),
            make_product(2, current_stock=3, cost_price=Decimal('2.50'), sale_price=None),
        ]
        summary = summarize(products, {1: Decimal('3.00')})

        assert summary.total_value_at_cost == Decimal('37.50')   # 10×3.00 + 3×2.50
        assert summary.total_value_at_sale == Decimal('50.00')

    def test_nulls_are_zero(self):
        products = [make_product(1, current_stock=None, min_stock=None, cost_price=None, sale_price=None)]
        summary = summarize(products)

        assert summary.total_value_at_cost == Decimal('0')
        assert summary.total_value_at_sale == Decimal('0')
        assert summary.out_of_stock_count == 1

    def test_order_invariant_and_literal_sum(self):
        products = [
            make_product(i, current_stock=i * 3, cost_price=Decimal(f'{i}.33'))
            for i in range(1, 30)
        ]
        movements = [make_movement(i, i, f'{i}.17') for i in range(1, 30, 2)]
        prices = entry_prices_by_product(products, movements)

        expected = sum(
            (Decimal(p.current_stock) * prices[p.pk].average_price for p in products),
            Decimal('0'),
        )
        shuffled = list(products)
        random.Random(7).shuffle(shuffled)

        assert summarize(products, prices).total_value_at_cost == expected
        assert summarize(shuffled, prices).total_value_at_cost == expected

    def test_empty(self):
        summary = summarize([])
        assert summary.total_products == 0
        assert summary.as_dict()['total_value_at_cost'] == '0'


class TestLowStockProducts:
    """Tests for low_stock_products()."""

    def test_sorted_by_severity_then_fill(self):
        products = [
            make_product(1, current_stock=9, min_stock=10, name='Teclado'),
            make_product(2, current_stock=0, min_stock=5, name='Adaptador'),
            make_product(3, current_stock=3, min_stock=20, name='Cabo'),
            make_product(4, current_stock=50, min_stock=10, name='Monitor'),
            make_product(5, current_stock=12, min_stock=15, name='Headset'),
        ]
        rows = low_stock_products(products)

        assert [r.product.pk for r in rows] == [2, 3, 5, 1]
        assert rows[1].status == StockStatus.CRITICAL
        assert rows[1].shortage == 17

    def test_without_out_of_stock(self):
        products = [make_product(1, current_stock=0, min_stock=5), make_product(2, current_stock=1, min_stock=5)]
        rows = low_stock_products(products, include_out_of_stock=False)
        assert [r.product.pk for r in rows] == [2]


class TestMovementWindow:
    """Tests for movement_window()."""

    def test_today_and_month(self):
        now = datetime(2026, 3, 15, 10, 0, tzinfo=SP)
        movements = [
            make_movement(1, 10, '2.00', when=datetime(2026, 3, 15, 8, 0, tzinfo=SP)),
            make_movement(1, 3, '5.00', movement_type=MovementType.OUT, reason='Venda',
                          when=datetime(2026, 3, 15, 23, 30, tzinfo=SP)),
            make_movement(1, 4, '1.00', when=datetime(2026, 3, 1, 0, 30, tzinfo=SP)),
            make_movement(1, 2, None, movement_type=MovementType.OUT, reason='Perda',
                          when=datetime(2026, 3, 2, 9, 0, tzinfo=SP)),
            make_movement(1, 100, '1.00', when=datetime(2026, 2, 28, 23, 59, tzinfo=SP)),
            make_movement(1, 50, '1.00', when=datetime(2026, 3, 1, 1, 0, tzinfo=dt_timezone.utc)),
        ]
        window = movement_window(movements, now, SP)

        assert window.today_count == 2
        assert window.today_entries == 1
        assert window.today_exits == 1
        assert window.month_entry_value == Decimal('24.00')
        assert window.month_quantity == 19
        assert window.month_entry_quantity == 14
        assert window.month_exit_quantity == 5
        assert window.month_sales_value == Decimal('15.00')

    def test_previous_month_excluded_within_24_hours(self):
        now = datetime(2026, 3, 1, 0, 30, tzinfo=SP)
        movements = [make_movement(1, 7, '1.00', when=datetime(2026, 2, 28, 23, 0, tzinfo=SP))]
        window = movement_window(movements, now, SP)

        assert window.month_quantity == 0
        assert window.today_count == 0

    def test_same_month_other_year_excluded(self):
        now = datetime(2026, 3, 15, tzinfo=SP)
        movements = [make_movement(1, 7, '1.00', when=datetime(2025, 3, 15, tzinfo=SP))]
        assert movement_window(movements, now, SP).month_quantity == 0


class TestBusinessDates:
    """Tests for stockpro.dates."""

    def test_utc_instant_uses_local_day(self):
        late_utc = datetime(2026, 3, 16, 2, 30, tzinfo=dt_timezone.utc)
        assert business_date(late_utc, SP) == date(2026, 3, 15)

    def test_date_only_anchored_at_local_midnight(self):
        value = business_datetime(date(2026, 3, 15), SP)
        assert value.tzinfo is not None
        assert business_date(value, SP) == date(2026, 3, 15)
        assert (value.hour, value.minute) == (0, 0)

    def test_plain_date_passes_through(self):
        assert business_date(date(2026, 3, 15), SP) == date(2026, 3, 15)
