import random
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import select, func
from sqlalchemy.dialects import postgresql, sqlite

from dashboard.models import Order, OrderItem, Product, Sale, User
from dashboard.rollup import rebuild_daily_sales, utc_day
from dashboard.seed import seed, seed_sales_history


async def _user_and_product(session):
    user = User(name="Buyer", email="buyer@example.com", password="x", role="customer", status="active")
    product = Product(name="Blender", price=Decimal("50.00"), stock=5, category="Home & Kitchen")
    session.add_all([user, product])
    await session.commit()
    return user, product


def _order(user, product, status, placed, quantity=1):
    return Order(
        user_id=user.id, total_amount=product.price * quantity, status=status,
        payment_method="PayPal", shipping_address="a", billing_address="a",
        created_at=placed, updated_at=placed,
        items=[OrderItem(product_id=product.id, quantity=quantity, price=product.price)],
    )


@pytest.mark.anyio
async def test_rebuild_daily_sales(session_factory):
    day1 = datetime(2025, 3, 1, 10, tzinfo=timezone.utc)
    day2 = datetime(2025, 3, 2, 18, tzinfo=timezone.utc)
    async with session_factory() as session:
        user, product = await _user_and_product(session)
        session.add_all([
            _order(user, product, "completed", day1, 1),
            _order(user, product, "completed", day1, 3),
            _order(user, product, "completed", day2, 2),
            _order(user, product, "pending", day2, 10),
        ])
        await session.commit()

        assert await rebuild_daily_sales(session) == 2

        res = await session.execute(select(Sale).order_by(Sale.date))
        sales = res.scalars().all()
        assert [s.date for s in sales] == [date(2025, 3, 1), date(2025, 3, 2)]
        assert sales[0].total_revenue == Decimal("200.00")
        assert sales[0].orders_count == 2
        assert sales[0].average_order_value == Decimal("100.00")
        assert sales[1].orders_count == 1

        # running it again overwrites instead of duplicating
        assert await rebuild_daily_sales(session) == 2
        assert await session.scalar(select(func.count(Sale.id))) == 2


@pytest.mark.anyio
async def test_rebuild_without_completed_orders(session_factory):
    async with session_factory() as session:
        assert await rebuild_daily_sales(session) == 0


@pytest.mark.anyio
async def test_sales_history_skips_existing_days(session_factory):
    async with session_factory() as session:
        session.add(Sale(date=date(2025, 6, 1), total_revenue=1, orders_count=1, average_order_value=1))
        await session.commit()

        created = await seed_sales_history(session, random.Random(3), today=date(2026, 3, 15))

        # 2025-03-01 .. 2026-02-28 minus the existing row
        assert created == 364
        first = await session.scalar(select(func.min(Sale.date)))
        last = await session.scalar(select(func.max(Sale.date)))
        assert (first, last) == (date(2025, 3, 1), date(2026, 2, 28))


@pytest.mark.anyio
async def test_seed_runs_once(session_factory):
    async with session_factory() as session:
        await seed(session, random.Random(7))

        assert await session.scalar(select(func.count(User.id))) == 52
        assert await session.scalar(select(func.count(Product.id))) == 17
        assert await session.scalar(select(func.count(Order.id))) == 100
        orders = await session.scalar(select(func.count(OrderItem.id)))
        sales = await session.scalar(select(func.count(Sale.id)))

        await seed(session, random.Random(8))

        assert await session.scalar(select(func.count(User.id))) == 52
        assert await session.scalar(select(func.count(OrderItem.id))) == orders
        assert await session.scalar(select(func.count(Sale.id))) == sales


@pytest.mark.anyio
async def test_rebuild_drops_days_without_completed_orders(session_factory):
    day1 = datetime(2025, 3, 1, 10, tzinfo=timezone.utc)
    day2 = datetime(2025, 3, 2, 10, tzinfo=timezone.utc)
    async with session_factory() as session:
        user, product = await _user_and_product(session)
        cancelled_later = _order(user, product, "completed", day1, 2)
        session.add_all([cancelled_later, _order(user, product, "completed", day2, 1)])
        # seeded history on a day without orders
        session.add(Sale(date=date(2025, 2, 1), total_revenue=500, orders_count=5, average_order_value=100))
        await session.commit()

        assert await rebuild_daily_sales(session) == 2

        cancelled_later.status = "cancelled"
        await session.commit()
        assert await rebuild_daily_sales(session) == 1

        res = await session.execute(select(Sale.date, Sale.orders_count).order_by(Sale.date))
        assert res.all() == [(date(2025, 2, 1), 5), (date(2025, 3, 2), 1)]


def test_utc_day_converts_timestamps_on_postgres():
    pg = str(utc_day("postgresql").compile(dialect=postgresql.dialect()))
    assert "timezone(" in pg
    assert "orders.created_at" in pg

    lite = str(utc_day("sqlite").compile(dialect=sqlite.dialect()))
    assert "timezone" not in lite
    assert lite.startswith("date(orders.created_at)")


@pytest.mark.anyio
async def test_sales_history_leaves_order_days_to_the_rollup(session_factory):
    async with session_factory() as session:
        user, product = await _user_and_product(session)
        session.add(_order(user, product, "pending", datetime(2025, 6, 2, 9, tzinfo=timezone.utc)))
        await session.commit()

        created = await seed_sales_history(session, random.Random(3), today=date(2026, 3, 15))

        assert created == 364
        assert await session.scalar(select(Sale.id).where(Sale.date == date(2025, 6, 2))) is None
