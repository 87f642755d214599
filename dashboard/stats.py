"""Arithmetic and calendar helpers shared by the statistics endpoints.

Numbers may be ``Decimal`` straight from ``Numeric`` columns; dates are UTC
calendar days. The routers only deal with queries.
"""
import calendar
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Optional, Tuple

MONTH_ABBRS = [calendar.month_abbr[m] for m in range(1, 13)]
MONTH_NAMES = [calendar.month_name[m] for m in range(1, 13)]

# Fixed monthly revenue targets used by /api/analytics/sales-vs-targets
MONTHLY_TARGETS = [
    10000, 12000, 15000, 18000, 20000, 22000,
    25000, 23000, 21000, 20000, 22000, 25000,
]


def money(value, ndigits: int = 2) -> float:
    if value is None:
        return 0
    return round(float(value), ndigits)


def growth_rate(current, previous) -> float:
    """Percentage change from ``previous`` to ``current``, 0 when there is no base."""
    current = float(current or 0)
    previous = float(previous or 0)
    if previous <= 0:
        return 0
    return round((current - previous) / previous * 100, 1)


def safe_average(total, count) -> float:
    count = count or 0
    if count <= 0:
        return 0
    return round(float(total or 0) / count, 2)


def churn_rate(churned: int, base: int) -> str:
    if not base:
        return "0%"
    rate = round(churned / base * 100, 1)
    # 12.0 -> "12%", 12.5 -> "12.5%"
    return f"{rate:g}%"


def order_total(items: Iterable) -> Decimal:
    """Σ price × quantity; items may be ORM rows, pydantic models or dicts."""
    total = Decimal("0.00")
    for it in items:
        price = it["price"] if isinstance(it, dict) else it.price
        quantity = it["quantity"] if isinstance(it, dict) else it.quantity
        total += Decimal(str(price)) * Decimal(quantity)
    return total.quantize(Decimal("0.01"))


def month_bounds(day: date) -> Tuple[date, date]:
    """[first day of the month, first day of the next month)."""
    start = day.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def previous_month(day: date) -> date:
    return day.replace(day=1) - timedelta(days=1)


def subtract_month(day: date) -> date:
    """Same day one month earlier, clamped to the month's last day."""
    prev = previous_month(day)
    return prev.replace(day=min(day.day, prev.day))


def day_label(value) -> Optional[str]:
    """``date(2025, 3, 5)`` -> ``"05 Mar"``."""
    if value is None:
        return None
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime("%d ") + MONTH_ABBRS[value.month - 1]


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """UTC [midnight, next midnight) for filtering timestamp columns by calendar day."""
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()
