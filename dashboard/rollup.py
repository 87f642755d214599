# dashboard/rollup.py
"""Daily Sale rollups.

One Sale row per calendar day (UTC) summarising that day's completed orders.
Run by the seeder (``python -m dashboard.seed``); finishing or cancelling an
order does not update the rollup on its own.
"""
from datetime import date
from decimal import Decimal

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from .logger import setup_logger
from .models import Order, Sale
from .stats import safe_average

logger = setup_logger(__name__)


def _as_date(value) -> date:
    # SQLite hands DATE() back as text
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


def utc_day(dialect_name: str):
    """Calendar day (UTC) of ``Order.created_at`` as a SQL expression."""
    created = Order.created_at
    if dialect_name == "postgresql":
        # date(timestamptz) follows the connection TimeZone
        created = func.timezone("UTC", created)
    return func.date(created).label("day")


async def completed_orders_by_day(session: AsyncSession):
    day = utc_day(session.bind.dialect.name)
    res = await session.execute(
        select(day, func.sum(Order.total_amount), func.count(Order.id))
        .where(Order.status == "completed")
        .group_by(day)
        .order_by(day)
    )
    return [(_as_date(d), Decimal(str(total or 0)), count) for d, total, count in res.all()]


async def order_days(session: AsyncSession):
    """Every day with at least one order, whatever its status."""
    day = utc_day(session.bind.dialect.name)
    res = await session.execute(select(day).group_by(day))
    return {_as_date(d) for d in res.scalars().all()}


async def rebuild_daily_sales(session: AsyncSession) -> int:
    """Rewrite the Sale rows of every day that has orders.

    Days with completed orders get their totals recomputed; days whose orders
    are no longer completed lose their Sale row. Days without any order keep
    whatever Sale row they have.
    """
    rows = await completed_orders_by_day(session)
    stale = await order_days(session) - {d for d, _, _ in rows}

    if stale:
        await session.execute(delete(Sale).where(Sale.date.in_(sorted(stale))))

    if rows:
        res = await session.execute(select(Sale).where(Sale.date.in_([d for d, _, _ in rows])))
        existing = {s.date: s for s in res.scalars().all()}

        for day, revenue, count in rows:
            sale = existing.get(day)
            if sale is None:
                sale = Sale(date=day)
                session.add(sale)
            sale.total_revenue = revenue
            sale.orders_count = count
            sale.average_order_value = safe_average(revenue, count)

    await session.commit()
    logger.info("rollup: wrote %d daily sale rows, cleared %d days without completed orders", len(rows), len(stale))
    return len(rows)
