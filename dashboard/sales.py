# dashboard/sales.py
import random
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func, extract
from sqlalchemy.ext.asyncio import AsyncSession

from .database import commit, get_session
from .models import Order, OrderItem, Product, Sale
from .schemas import SaleCreate, SaleOut, SaleUpdate, changed_fields
from .stats import (
    MONTH_NAMES, day_label, growth_rate, money, month_bounds, previous_month,
    safe_average, utc_today,
)

router = APIRouter(prefix="/api/sales", tags=["sales"])

DAILY_WINDOW = 30
DUPLICATE_DATE = "A sale record already exists for this date."


async def _get_sale_or_404(session: AsyncSession, sale_id: int) -> Sale:
    sale = await session.get(Sale, sale_id)
    if not sale:
        raise HTTPException(status_code=404, detail="Sale record not found")
    return sale


async def _revenue_between(session: AsyncSession, start, end) -> float:
    total = await session.scalar(
        select(func.sum(Sale.total_revenue)).where(Sale.date >= start, Sale.date < end)
    )
    return money(total)


def sample_monthly_sales():
    return [{"name": name, "sales": random.randint(3500, 8000)} for name in MONTH_NAMES]


def sample_daily_sales(today=None):
    today = today or utc_today()
    out = []
    for offset in range(DAILY_WINDOW - 1, -1, -1):
        day = today - timedelta(days=offset)
        out.append({"date": day.isoformat(), "name": day_label(day), "sales": random.randint(500, 2000)})
    return out


@router.get("")
async def list_sales(session: AsyncSession = Depends(get_session)):
    res = await session.execute(select(Sale).order_by(Sale.date.desc()))
    return {"sales": [SaleOut.model_validate(s) for s in res.scalars().all()]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_sale(payload: SaleCreate, session: AsyncSession = Depends(get_session)):
    sale = Sale(**payload.model_dump())
    session.add(sale)
    await commit(session, DUPLICATE_DATE)
    await session.refresh(sale)
    return {"message": "Sale record created successfully", "sale": SaleOut.model_validate(sale)}


# 📊 Статистика
@router.get("/stats/overview")
async def get_stats(session: AsyncSession = Depends(get_session)):
    total_revenue = money(await session.scalar(select(func.sum(Sale.total_revenue))))
    total_orders = await session.scalar(select(func.sum(Sale.orders_count))) or 0

    today = utc_today()
    current = await _revenue_between(session, *month_bounds(today))
    previous = await _revenue_between(session, *month_bounds(previous_month(today)))

    return {
        "totalRevenue": total_revenue,
        "totalOrders": int(total_orders),
        "revenueGrowth": growth_rate(current, previous),
        "averageOrderValue": safe_average(total_revenue, total_orders),
    }


@router.get("/stats/by-category")
async def get_sales_by_category(session: AsyncSession = Depends(get_session)):
    revenue = func.sum(OrderItem.quantity * OrderItem.price).label("revenue")
    res = await session.execute(
        select(Product.category, revenue)
        .select_from(OrderItem)
        .join(Product, OrderItem.product_id == Product.id)
        .join(Order, OrderItem.order_id == Order.id)
        .where(Order.status == "completed")
        .group_by(Product.category)
        .order_by(revenue.desc())
    )
    return [{"category": category, "revenue": money(total)} for category, total in res.all()]


@router.get("/stats/monthly")
async def get_monthly_sales(session: AsyncSession = Depends(get_session)):
    month = extract("month", Sale.date).label("month")
    res = await session.execute(
        select(month, func.sum(Sale.total_revenue)).group_by(month).order_by(month)
    )
    rows = res.all()
    if not rows:
        return sample_monthly_sales()
    return [{"name": MONTH_NAMES[int(m) - 1], "sales": money(total)} for m, total in rows]


@router.get("/stats/daily")
async def get_daily_sales(session: AsyncSession = Depends(get_session)):
    res = await session.execute(
        select(Sale.date, func.sum(Sale.total_revenue))
        .group_by(Sale.date)
        .order_by(Sale.date.desc())
        .limit(DAILY_WINDOW)
    )
    rows = list(reversed(res.all()))
    if not rows:
        return sample_daily_sales()
    return [
        {"date": day.isoformat(), "name": day_label(day), "sales": money(total)}
        for day, total in rows
    ]


@router.get("/{sale_id}")
async def get_sale(sale_id: int, session: AsyncSession = Depends(get_session)):
    sale = await _get_sale_or_404(session, sale_id)
    return {"sale": SaleOut.model_validate(sale)}


@router.put("/{sale_id}")
async def update_sale(sale_id: int, payload: SaleUpdate, session: AsyncSession = Depends(get_session)):
    sale = await _get_sale_or_404(session, sale_id)

    for field, value in changed_fields(payload).items():
        setattr(sale, field, value)

    await commit(session, DUPLICATE_DATE)
    await session.refresh(sale)
    return {"message": "Sale record updated successfully", "sale": SaleOut.model_validate(sale)}


@router.delete("/{sale_id}")
async def delete_sale(sale_id: int, session: AsyncSession = Depends(get_session)):
    sale = await _get_sale_or_404(session, sale_id)
    await session.delete(sale)
    await commit(session)
    return {"message": "Sale record deleted successfully"}
