"""
Business dates — one rule for turning timestamps into calendar days.

Movement timestamps are stored as aware datetimes. Every comparison by day or
month goes through business_date(), in a single timezone:

    1. the tzinfo passed in (usually Session.tz)
    2. STOCKPRO['BUSINESS_TIMEZONE']
    3. Django's current timezone

Date-only inputs (e.g. a form's "Data da Entrada") are anchored at local
midnight of that same timezone by business_datetime().
"""

from datetime import date, datetime, time, tzinfo
from zoneinfo import ZoneInfo

from django.utils import timezone

from stockpro.conf import stockpro_settings


def business_timezone(tz: tzinfo | None = None) -> tzinfo:
    """Resolve the timezone used for business dates."""
    if tz is not None:
        return tz
    name = stockpro_settings.BUSINESS_TIMEZONE
    if name:
        return ZoneInfo(name)
    return timezone.get_current_timezone()


def business_date(value: date | datetime, tz: tzinfo | None = None) -> date:
    """
    Calendar day of a timestamp in the business timezone.

    Naive datetimes are taken as already local to that timezone.
    """
    if not isinstance(value, datetime):
        return value
    if timezone.is_naive(value):
        return value.date()
    return timezone.localtime(value, business_timezone(tz)).date()


def business_datetime(value: date | datetime | None, tz: tzinfo | None = None) -> datetime:
    """
    Aware timestamp for a movement.

    None → now; date → local midnight; naive datetime → made aware locally.
    """
    if value is None:
        return timezone.now()
    zone = business_timezone(tz)
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if timezone.is_naive(value):
        return timezone.make_aware(value, zone)
    return value


def same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)
