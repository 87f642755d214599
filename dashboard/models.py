from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey, DateTime, Date, Boolean, JSON, func,
    Numeric, CheckConstraint, Index
)
from sqlalchemy.orm import relationship
from .database import Base

USER_STATUSES = ("active", "inactive")
ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")


# 👤 Пользователь
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # 🔐 хэш, не сам пароль
    role = Column(String(20), nullable=False, default="customer")
    status = Column(String(20), nullable=False, default="active")
    avatar_url = Column(String(255), nullable=True)
    demographics = Column(JSON, nullable=True)  # age_group / gender / location
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index("ix_users_status", "status"),
    )


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)         # 💰 точные деньги
    stock = Column(Integer, nullable=False, default=0)      # 📦 остаток на складе
    category = Column(String(255), nullable=False)
    image_url = Column(String(255), nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # items keep their product; deleting a product that was ordered is refused
    order_items = relationship("OrderItem", back_populates="product", passive_deletes="all")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
        CheckConstraint("stock >= 0", name="ck_products_stock_nonneg"),
        Index("ix_products_category_name", "category", "name"),
    )


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)  # 💰 сумма позиций
    status = Column(String(20), nullable=False, default="pending")  # pending/processing/completed/cancelled
    payment_method = Column(String(100), nullable=False)
    shipping_address = Column(String(255), nullable=False)
    billing_address = Column(String(255), nullable=False)
    tracking_number = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="orders", passive_deletes=True)
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_nonneg"),
        Index("ix_orders_status_created", "status", "created_at"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)  # 💰 фиксируем цену на момент покупки

    order = relationship("Order", back_populates="items", passive_deletes=True)
    product = relationship("Product", back_populates="order_items", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_orderitem_quantity_pos"),
        CheckConstraint("price >= 0", name="ck_orderitem_price_nonneg"),
    )


# 📈 Дневной срез продаж (заполняется batch-джобой, см. rollup.py)
class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)
    orders_count = Column(Integer, nullable=False, default=0)
    average_order_value = Column(Numeric(12, 2), nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("total_revenue >= 0", name="ck_sales_revenue_nonneg"),
        CheckConstraint("orders_count >= 0", name="ck_sales_orders_nonneg"),
    )
