"""Seed the database with demo users, products, orders and sales.

The script creates the database and tables when missing, then inserts:

* an admin, a moderator and 50 customers (password ``password``);
* a fixed product catalogue;
* 100 random orders spread over the last 30 days;
* the daily Sale rollup of completed orders, plus random history for every
  day of the past year that has no rollup yet.

Users, products and orders are only inserted into an empty database, so
running it twice does not duplicate rows.

Usage:
    python -m dashboard.seed

The script reads DATABASE_URL from the environment.
"""
import asyncio
import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from .database import async_session_maker, create_tables, ensure_database_exists
from .logger import setup_logger
from .models import ORDER_STATUSES, USER_STATUSES, Order, OrderItem, Product, Sale, User
from .rollup import order_days, rebuild_daily_sales
from .security import get_password_hash
from .stats import order_total, previous_month, safe_average

logger = setup_logger(__name__)

DEMO_PASSWORD = "password"
CUSTOMERS = 50
ORDERS = 100
ORDER_WINDOW_DAYS = 30

AGE_GROUPS = ["18-24", "25-35", "36-45", "46-55", "56+"]
GENDERS = ["male", "female", "other"]
LOCATIONS = [
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix",
    "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose",
]
PAYMENT_METHODS = ["Credit Card", "PayPal", "Bank Transfer", "Cash on Delivery"]
DEMO_ADDRESS = "123 Main St, City, State, 12345"

PRODUCTS = [
    # name, description, price, stock, category, featured
    ("Smartphone X", "Latest smartphone with advanced features", "999.99", 50, "Electronics", True),
    ("Laptop Pro", "High-performance laptop for professionals", "1499.99", 25, "Electronics", True),
    ("Wireless Earbuds", "Premium sound quality with noise cancellation", "149.99", 100, "Electronics", False),
    ("Smart Watch", "Track your fitness and stay connected", "249.99", 75, "Electronics", False),
    ("Men's Casual Shirt", "Comfortable and stylish casual shirt", "39.99", 200, "Clothing", False),
    ("Women's Dress", "Elegant dress for special occasions", "79.99", 150, "Clothing", True),
    ("Running Shoes", "Lightweight and comfortable running shoes", "89.99", 100, "Clothing", False),
    ("Winter Jacket", "Warm and waterproof winter jacket", "129.99", 0, "Clothing", False),
    ("Coffee Maker", "Programmable coffee maker with timer", "79.99", 60, "Home & Kitchen", False),
    ("Blender", "High-speed blender for smoothies and more", "69.99", 45, "Home & Kitchen", False),
    ("Cookware Set", "Complete set of non-stick cookware", "199.99", 30, "Home & Kitchen", True),
    ("Bestselling Novel", "Award-winning fiction novel", "24.99", 300, "Books", False),
    ("Cookbook", "Collection of gourmet recipes", "34.99", 150, "Books", False),
    ("Self-Help Book", "Guide to personal development", "19.99", 200, "Books", True),
    ("Yoga Mat", "Non-slip yoga mat for exercise", "29.99", 120, "Sports & Outdoors", False),
    ("Dumbbells Set", "Adjustable dumbbells for home workouts", "149.99", 50, "Sports & Outdoors", False),
    ("Tennis Racket", "Professional tennis racket", "89.99", 0, "Sports & Outdoors", False),
]


def _demographics(rng: random.Random) -> dict:
    return {
        "age_group": rng.choice(AGE_GROUPS),
        "gender": rng.choice(GENDERS),
        "location": rng.choice(LOCATIONS),
    }


async def seed_users(session: AsyncSession, rng: random.Random, customers: int = CUSTOMERS):
    # one hash for everybody: Argon2 is deliberately slow
    password = get_password_hash(DEMO_PASSWORD)
    users = [
        User(name="Admin User", email="admin@example.com", password=password, role="admin",
             status="active", demographics={"age_group": "30-40", "gender": "male", "location": "New York"}),
        User(name="Moderator User", email="moderator@example.com", password=password, role="moderator",
             status="active", demographics={"age_group": "25-35", "gender": "female", "location": "San Francisco"}),
    ]
    for i in range(1, customers + 1):
        users.append(User(
            name=f"Customer {i}",
            email=f"customer{i}@example.com",
            password=password,
            role="customer",
            status=rng.choice(USER_STATUSES),
            demographics=_demographics(rng),
        ))
    session.add_all(users)
    await session.commit()
    logger.info("Seeded %d users", len(users))
    return users


async def seed_products(session: AsyncSession):
    products = [
        Product(name=name, description=desc, price=Decimal(price), stock=stock,
                category=category, is_featured=featured, is_active=True)
        for name, desc, price, stock, category, featured in PRODUCTS
    ]
    session.add_all(products)
    await session.commit()
    logger.info("Seeded %d products", len(products))
    return products


async def seed_orders(session: AsyncSession, customers, products, rng: random.Random,
                      count: int = ORDERS, now: datetime = None):
    now = now or datetime.now(timezone.utc)
    for _ in range(count):
        placed = now - timedelta(
            days=rng.randint(0, ORDER_WINDOW_DAYS), hours=rng.randint(0, 23), minutes=rng.randint(0, 59)
        )
        picked = rng.sample(products, rng.randint(1, min(5, len(products))))
        items = [OrderItem(product_id=p.id, quantity=rng.randint(1, 3), price=p.price) for p in picked]

        session.add(Order(
            user_id=rng.choice(customers).id,
            total_amount=order_total(items),
            status=rng.choice(ORDER_STATUSES),
            payment_method=rng.choice(PAYMENT_METHODS),
            shipping_address=DEMO_ADDRESS,
            billing_address=DEMO_ADDRESS,
            tracking_number=f"TRK{rng.randint(100000, 999999)}",
            created_at=placed,
            updated_at=placed,
            items=items,
        ))
    await session.commit()
    logger.info("Seeded %d orders", count)


async def seed_sales_history(session: AsyncSession, rng: random.Random, today: date = None) -> int:
    """Random Sale rows from a year ago up to the end of last month, skipping days with sales or orders."""
    today = today or datetime.now(timezone.utc).date()
    start = date(today.year - 1, today.month, 1)
    end = previous_month(today)

    res = await session.execute(select(Sale.date).where(Sale.date >= start, Sale.date <= end))
    # days with orders belong to the rollup
    taken = set(res.scalars().all()) | await order_days(session)

    created = 0
    day = start
    while day <= end:
        if day not in taken:
            orders_count = rng.randint(5, 50)
            average = Decimal(rng.randint(50, 200)) + Decimal(rng.randint(0, 99)) / 100
            revenue = average * orders_count
            session.add(Sale(date=day, total_revenue=revenue, orders_count=orders_count,
                             average_order_value=safe_average(revenue, orders_count)))
            created += 1
        day += timedelta(days=1)
    await session.commit()
    logger.info("Seeded %d historical sale rows", created)
    return created


async def seed(session: AsyncSession, rng: random.Random = None):
    rng = rng or random.Random()
    has_users = await session.scalar(select(func.count(User.id)))
    if has_users:
        logger.info("Database already has users, skipping users/products/orders")
    else:
        users = await seed_users(session, rng)
        products = await seed_products(session)
        customers = [u for u in users if u.role == "customer"]
        await seed_orders(session, customers, products, rng)

    await rebuild_daily_sales(session)
    await seed_sales_history(session, rng)


async def _main():
    ensure_database_exists()
    await create_tables()
    async with async_session_maker() as session:
        await seed(session)


def main():
    asyncio.run(_main())


if __name__ == "__main__":
    main()
