from datetime import date, datetime, timezone
from decimal import Decimal

from dashboard.schemas import OrderItemCreate
from dashboard.stats import (
    churn_rate, day_bounds, day_label, growth_rate, money, month_bounds,
    order_total, previous_month, safe_average, subtract_month,
)


def test_growth_rate_without_previous_revenue_is_zero():
    assert growth_rate(1500, 0) == 0
    assert growth_rate(1500, None) == 0


def test_growth_rate_rounds_to_one_decimal():
    assert growth_rate(1500, 1000) == 50.0
    assert growth_rate(900, 1000) == -10.0
    assert growth_rate(1000, 3000) == -66.7


def test_safe_average():
    assert safe_average(100, 0) == 0
    assert safe_average(Decimal("100.00"), 3) == 33.33


def test_churn_rate_formatting():
    assert churn_rate(0, 0) == "0%"
    assert churn_rate(1, 4) == "25%"
    assert churn_rate(1, 8) == "12.5%"


def test_order_total_accepts_dicts_and_models():
    items = [
        {"price": "19.99", "quantity": 2},
        OrderItemCreate(product_id=1, quantity=1, price=0.01),
    ]
    assert order_total(items) == Decimal("39.99")
    assert order_total([]) == Decimal("0.00")


def test_money_handles_none_and_decimal():
    assert money(None) == 0
    assert money(Decimal("10.50")) == 10.5


def test_month_helpers():
    assert month_bounds(date(2025, 12, 15)) == (date(2025, 12, 1), date(2026, 1, 1))
    assert previous_month(date(2025, 3, 10)) == date(2025, 2, 28)
    assert subtract_month(date(2025, 3, 31)) == date(2025, 2, 28)
    assert subtract_month(date(2025, 1, 15)) == date(2024, 12, 15)


def test_day_label():
    assert day_label(date(2025, 3, 5)) == "05 Mar"
    assert day_label("2025-11-20") == "20 Nov"
    assert day_label(None) is None


def test_day_bounds_are_utc():
    start, end = day_bounds(date(2025, 3, 5))
    assert start == datetime(2025, 3, 5, tzinfo=timezone.utc)
    assert (end - start).days == 1
