# dashboard/products.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List

from .database import commit, get_session
from .models import OrderItem, Product
from .schemas import ProductOut, ProductCreate, ProductUpdate, changed_fields

router = APIRouter(prefix="/api/products", tags=["products"])

PRODUCT_IN_USE = "The product is part of existing orders and cannot be deleted."


async def _get_product_or_404(session: AsyncSession, product_id: int) -> Product:
    product = await session.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("", response_model=List[ProductOut])
async def list_products(session: AsyncSession = Depends(get_session)):
    result = await session.execute(select(Product).order_by(Product.created_at.desc(), Product.id.desc()))
    return result.scalars().all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreate, session: AsyncSession = Depends(get_session)):
    product = Product(**payload.model_dump())
    session.add(product)
    await commit(session)
    await session.refresh(product)
    return {"message": "Product created successfully", "product": ProductOut.model_validate(product)}


# 📊 Статистика
@router.get("/stats/overview")
async def get_stats(session: AsyncSession = Depends(get_session)):
    total = await session.scalar(select(func.count(Product.id)))
    active = await session.scalar(select(func.count(Product.id)).where(Product.is_active.is_(True)))
    out_of_stock = await session.scalar(select(func.count(Product.id)).where(Product.stock == 0))
    featured = await session.scalar(select(func.count(Product.id)).where(Product.is_featured.is_(True)))

    return {
        "totalProducts": total,
        "activeProducts": active,
        "outOfStockProducts": out_of_stock,
        "featuredProducts": featured,
    }


@router.get("/stats/categories")
async def get_categories_data(session: AsyncSession = Depends(get_session)):
    count = func.count(Product.id).label("count")
    res = await session.execute(
        select(Product.category, count)
        .group_by(Product.category)
        .order_by(count.desc(), Product.category)
    )
    return [{"category": category, "count": n} for category, n in res.all()]


@router.get("/{product_id}")
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    product = await _get_product_or_404(session, product_id)
    return {"product": ProductOut.model_validate(product)}


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: AsyncSession = Depends(get_session),
):
    product = await _get_product_or_404(session, product_id)

    for field, value in changed_fields(payload, nullable=("description", "image_url")).items():
        setattr(product, field, value)

    await commit(session)
    await session.refresh(product)
    return {"message": "Product updated successfully", "product": ProductOut.model_validate(product)}


@router.delete("/{product_id}")
async def delete_product(product_id: int, session: AsyncSession = Depends(get_session)):
    product = await _get_product_or_404(session, product_id)

    ordered = await session.scalar(select(OrderItem.id).where(OrderItem.product_id == product.id).limit(1))
    if ordered is not None:
        raise HTTPException(status_code=422, detail=PRODUCT_IN_USE)

    await session.delete(product)
    await commit(session, PRODUCT_IN_USE)
    return {"message": "Product deleted successfully"}
