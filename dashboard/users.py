# dashboard/users.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from .database import commit, get_session
from .logger import setup_logger
from .models import User
from .schemas import UserCreate, UserUpdate, UserOut, changed_fields
from .security import get_password_hash
from .stats import churn_rate, day_bounds, subtract_month, utc_today

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


async def _get_user_or_404(session: AsyncSession, user_id: int) -> User:
    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def _email_taken(session: AsyncSession, email: str, exclude_id: int = None) -> bool:
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    res = await session.execute(stmt)
    return res.first() is not None


# 📊 Статистика (объявлена до /{user_id}, чтобы путь не перехватывался)
@router.get("/stats/overview")
async def get_stats(session: AsyncSession = Depends(get_session)):
    today = utc_today()
    start, end = day_bounds(today)
    month_ago_start, month_ago_end = day_bounds(subtract_month(today))

    total_users = await session.scalar(select(func.count(User.id)))
    new_today = await session.scalar(
        select(func.count(User.id)).where(User.created_at >= start, User.created_at < end)
    )
    active_users = await session.scalar(
        select(func.count(User.id)).where(User.status == "active")
    )

    # simplified churn: users who went inactive during the last month
    # over the users that already existed a month ago
    users_last_month = await session.scalar(
        select(func.count(User.id)).where(User.created_at < month_ago_end)
    )
    churned = await session.scalar(
        select(func.count(User.id)).where(User.status == "inactive", User.updated_at >= month_ago_start)
    )

    return {
        "totalUsers": total_users,
        "newUsersToday": new_today,
        "activeUsers": active_users,
        "churnRate": churn_rate(churned, users_last_month),
    }


@router.get("")
async def list_users(session: AsyncSession = Depends(get_session)):
    result = await session.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    users = result.scalars().all()
    return {"users": [UserOut.model_validate(u) for u in users]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, session: AsyncSession = Depends(get_session)):
    if await _email_taken(session, payload.email):
        raise HTTPException(status_code=422,
                            detail="The email has already been taken.")

    data = payload.model_dump()
    data["password"] = get_password_hash(payload.password)
    user = User(**data)
    session.add(user)
    await commit(session, "The email has already been taken.")
    await session.refresh(user)
    logger.info("users: created user %s (%s)", user.id, user.email)
    return {"message": "User created successfully", "user": UserOut.model_validate(user)}


@router.get("/{user_id}")
async def get_user(user_id: int, session: AsyncSession = Depends(get_session)):
    user = await _get_user_or_404(session, user_id)
    return {"user": UserOut.model_validate(user)}


@router.put("/{user_id}")
async def update_user(user_id: int, payload: UserUpdate, session: AsyncSession = Depends(get_session)):
    user = await _get_user_or_404(session, user_id)
    changes = changed_fields(payload, nullable=("avatar_url", "demographics"))

    if "email" in changes and await _email_taken(session, changes["email"], exclude_id=user.id):
        raise HTTPException(status_code=422,
                            detail="The email has already been taken.")
    if "password" in changes:
        changes["password"] = get_password_hash(changes["password"])

    for field, value in changes.items():
        setattr(user, field, value)
    await commit(session, "The email has already been taken.")
    await session.refresh(user)
    return {"message": "User updated successfully", "user": UserOut.model_validate(user)}


@router.delete("/{user_id}")
async def delete_user(user_id: int, session: AsyncSession = Depends(get_session)):
    user = await _get_user_or_404(session, user_id)
    await session.delete(user)
    await commit(session)
    return {"message": "User deleted successfully"}
