# dashboard/orders.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select, func

from .database import commit, get_session
from .logger import setup_logger
from .models import Order, OrderItem, Product, User
from .schemas import OrderCreate, OrderOut, OrderUpdate, changed_fields
from .stats import money, order_total

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])

RECENT_LIMIT = 10


def _with_relations(stmt):
    return stmt.options(
        selectinload(Order.user),
        selectinload(Order.items).selectinload(OrderItem.product),
    )


async def _load_order(session: AsyncSession, order_id: int) -> Order:
    res = await session.execute(
        _with_relations(select(Order))
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    order = res.scalar_one_or_none()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


async def _count(session: AsyncSession, *where) -> int:
    return await session.scalar(select(func.count(Order.id)).where(*where))


# 🧾 Все заказы (новые сверху)
@router.get("")
async def list_orders(session: AsyncSession = Depends(get_session)):
    res = await session.execute(
        _with_relations(select(Order)).order_by(Order.created_at.desc(), Order.id.desc())
    )
    return {"orders": [OrderOut.model_validate(o) for o in res.scalars().all()]}


# ✅ Создание заказа вместе с позициями в одной транзакции
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(payload: OrderCreate, session: AsyncSession = Depends(get_session)):
    if await session.get(User, payload.user_id) is None:
        raise HTTPException(status_code=422, detail="The selected user id is invalid.")

    product_ids = {it.product_id for it in payload.items}
    res = await session.execute(select(Product.id).where(Product.id.in_(sorted(product_ids))))
    missing = product_ids - set(res.scalars().all())
    if missing:
        raise HTTPException(
            status_code=422,
            detail=f"The selected product id is invalid: {sorted(missing)}",
        )

    # the total is derived from the items, whatever the client sent
    total = order_total(payload.items)
    if payload.total_amount is not None and money(payload.total_amount) != money(total):
        logger.info("orders: client total %s replaced by item total %s", payload.total_amount, total)

    order = Order(
        user_id=payload.user_id,
        total_amount=total,
        status=payload.status,
        payment_method=payload.payment_method,
        shipping_address=payload.shipping_address,
        billing_address=payload.billing_address,
        tracking_number=payload.tracking_number,
    )
    session.add(order)
    await session.flush()  # получим order.id

    for it in payload.items:
        session.add(OrderItem(
            order_id=order.id,
            product_id=it.product_id,
            quantity=it.quantity,
            price=it.price,
        ))

    await commit(session)
    order = await _load_order(session, order.id)
    return {"message": "Order created successfully", "order": OrderOut.model_validate(order)}


# 📊 Статистика
@router.get("/stats/overview")
async def get_stats(session: AsyncSession = Depends(get_session)):
    completed = Order.status == "completed"
    total_revenue = await session.scalar(select(func.sum(Order.total_amount)).where(completed))
    average = await session.scalar(select(func.avg(Order.total_amount)).where(completed))

    return {
        "totalOrders": await _count(session),
        "pendingOrders": await _count(session, Order.status == "pending"),
        "completedOrders": await _count(session, completed),
        "cancelledOrders": await _count(session, Order.status == "cancelled"),
        "totalRevenue": money(total_revenue),
        "averageOrderValue": money(average),
    }


@router.get("/stats/recent")
async def get_recent(session: AsyncSession = Depends(get_session)):
    res = await session.execute(
        _with_relations(select(Order))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(RECENT_LIMIT)
    )
    return [OrderOut.model_validate(o) for o in res.scalars().all()]


@router.get("/stats/status-distribution")
async def get_status_distribution(session: AsyncSession = Depends(get_session)):
    res = await session.execute(
        select(Order.status, func.count(Order.id)).group_by(Order.status).order_by(Order.status)
    )
    return [{"status": s, "count": n} for s, n in res.all()]


# 📦 Детали одного заказа
@router.get("/{order_id}")
async def get_order(order_id: int, session: AsyncSession = Depends(get_session)):
    order = await _load_order(session, order_id)
    return {"order": OrderOut.model_validate(order)}


@router.put("/{order_id}")
async def update_order(order_id: int, payload: OrderUpdate, session: AsyncSession = Depends(get_session)):
    order = await _load_order(session, order_id)

    for field, value in changed_fields(payload, nullable=("tracking_number",)).items():
        setattr(order, field, value)

    await commit(session)
    order = await _load_order(session, order_id)
    return {"message": "Order updated successfully", "order": OrderOut.model_validate(order)}


@router.delete("/{order_id}")
async def delete_order(order_id: int, session: AsyncSession = Depends(get_session)):
    order = await _load_order(session, order_id)

    # items are loaded, so the cascade deletes them in the same transaction
    await session.delete(order)
    await commit(session)
    return {"message": "Order deleted successfully"}
