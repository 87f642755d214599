# dashboard/schemas.py
import datetime as dt
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "moderator", "customer"]
UserStatus = Literal["active", "inactive"]
OrderStatus = Literal["pending", "processing", "completed", "cancelled"]


def changed_fields(payload: BaseModel, nullable=()) -> Dict[str, Any]:
    """Fields the client actually sent; None only survives for nullable columns."""
    data = payload.model_dump(exclude_unset=True)
    return {k: v for k, v in data.items() if v is not None or k in nullable}


# 👤 Пользователь
class UserBase(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    role: Role
    status: UserStatus
    avatar_url: Optional[str] = None
    demographics: Optional[Dict[str, Any]] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    role: Optional[Role] = None
    status: Optional[UserStatus] = None
    avatar_url: Optional[str] = None
    demographics: Optional[Dict[str, Any]] = None


class UserOut(UserBase):
    id: int
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# 🛍️ Товар
class ProductBase(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    category: str = Field(..., max_length=255)
    image_url: Optional[str] = None
    is_featured: bool = False
    is_active: bool = True


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=255)
    image_url: Optional[str] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None


class ProductOut(ProductBase):
    id: int
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# 📦 Заказ
class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class OrderCreate(BaseModel):
    user_id: int
    # the stored total is always recomputed from the items
    total_amount: Optional[float] = Field(None, ge=0)
    status: OrderStatus
    payment_method: str
    shipping_address: str
    billing_address: str
    tracking_number: Optional[str] = None
    items: List[OrderItemCreate] = Field(..., min_length=1)


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    payment_method: Optional[str] = None
    shipping_address: Optional[str] = None
    billing_address: Optional[str] = None
    tracking_number: Optional[str] = None


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: float
    product: Optional[ProductOut] = None

    class Config:
        from_attributes = True


class OrderOut(BaseModel):
    id: int
    user_id: int
    total_amount: float
    status: str
    payment_method: str
    shipping_address: str
    billing_address: str
    tracking_number: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    user: Optional[UserOut] = None
    items: List[OrderItemOut] = []

    class Config:
        from_attributes = True


# 📈 Продажи
class SaleCreate(BaseModel):
    date: dt.date
    total_revenue: float = Field(..., ge=0)
    orders_count: int = Field(..., ge=0)
    average_order_value: float = Field(..., ge=0)


class SaleUpdate(BaseModel):
    date: Optional[dt.date] = None
    total_revenue: Optional[float] = Field(None, ge=0)
    orders_count: Optional[int] = Field(None, ge=0)
    average_order_value: Optional[float] = Field(None, ge=0)


class SaleOut(SaleCreate):
    id: int

    class Config:
        from_attributes = True
