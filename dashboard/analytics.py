# dashboard/analytics.py
from fastapi import APIRouter, Depends
from sqlalchemy import select, func, extract
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session
from .models import Order, Product, Sale, User
from .stats import MONTH_ABBRS, MONTHLY_TARGETS, day_bounds, money, utc_today

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

# Visits are not tracked yet, so traffic sources are a fixed sample
TRAFFIC_SOURCES = [
    {"source": "Direct", "count": 4200},
    {"source": "Organic Search", "count": 3800},
    {"source": "Referral", "count": 2200},
    {"source": "Social Media", "count": 1800},
    {"source": "Email", "count": 1200},
    {"source": "Paid Search", "count": 900},
]


@router.get("/dashboard")
async def get_dashboard_stats(session: AsyncSession = Depends(get_session)):
    start, end = day_bounds(utc_today())
    completed = Order.status == "completed"

    total_users = await session.scalar(select(func.count(User.id)))
    new_users_today = await session.scalar(
        select(func.count(User.id)).where(User.created_at >= start, User.created_at < end)
    )
    total_orders = await session.scalar(select(func.count(Order.id)))
    pending_orders = await session.scalar(select(func.count(Order.id)).where(Order.status == "pending"))
    total_revenue = await session.scalar(select(func.sum(Order.total_amount)).where(completed))
    revenue_today = await session.scalar(
        select(func.sum(Order.total_amount)).where(completed, Order.created_at >= start, Order.created_at < end)
    )
    total_products = await session.scalar(select(func.count(Product.id)))
    out_of_stock = await session.scalar(select(func.count(Product.id)).where(Product.stock == 0))

    return {
        "userStats": {
            "totalUsers": total_users,
            "newUsersToday": new_users_today,
        },
        "orderStats": {
            "totalOrders": total_orders,
            "pendingOrders": pending_orders,
        },
        "revenueStats": {
            "totalRevenue": money(total_revenue),
            "revenueToday": money(revenue_today),
        },
        "productStats": {
            "totalProducts": total_products,
            "outOfStockProducts": out_of_stock,
        },
    }


@router.get("/sales-vs-targets")
async def get_sales_vs_targets(session: AsyncSession = Depends(get_session)):
    year = utc_today().year
    month = extract("month", Sale.date).label("month")
    res = await session.execute(
        select(month, func.sum(Sale.total_revenue))
        .where(extract("year", Sale.date) == year)
        .group_by(month)
    )
    actual = {int(m): money(total) for m, total in res.all()}

    return [
        {"month": MONTH_ABBRS[i], "target": MONTHLY_TARGETS[i], "actual": actual.get(i + 1, 0)}
        for i in range(12)
    ]


@router.get("/traffic-sources")
async def get_traffic_sources():
    return TRAFFIC_SOURCES
