"""
StockPro configuration.

Usage in settings.py:
    STOCKPRO = {
        "CRITICAL_STOCK_RATIO": Decimal("0.5"),
        "BUSINESS_TIMEZONE": "America/Sao_Paulo",
        "STRICT_TOTAL_VALUE": True,
        "RECENT_MOVEMENTS_LIMIT": 10,
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class StockProSettings:
    """StockPro configuration settings."""

    # Fraction of min_stock at or below which stock is critical
    CRITICAL_STOCK_RATIO: Decimal = Decimal('0.5')

    # IANA name used to turn timestamps into business dates ("" = TIME_ZONE)
    BUSINESS_TIMEZONE: str = ""

    # Reject movements whose total_value differs from quantity × unit_price
    STRICT_TOTAL_VALUE: bool = True

    # Movements listed on the dashboard
    RECENT_MOVEMENTS_LIMIT: int = 10

    DEFAULT_UNIT_MEASURE: str = "un"


def get_stockpro_settings() -> StockProSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKPRO", {})
    return StockProSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockProSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockpro_settings(), name)


stockpro_settings = _LazySettings()
