from datetime import datetime, timedelta, timezone

import pytest

from dashboard.models import Order
from dashboard.stats import utc_today


def test_health_and_test_endpoints(client):
    assert client.get("/api/health-check").json() == {"status": "ok"}
    assert client.get("/api/test").json() == {"message": "API is working!"}


@pytest.mark.anyio
async def test_dashboard_summary(client, make_user, make_product, make_order, session_factory):
    user = make_user()
    make_user()
    product = make_product(price=10)
    make_product(stock=0)
    today_order = make_order(user, [(product, 2)], status="completed")
    old_order = make_order(user, [(product, 5)], status="completed")
    make_order(user, [(product, 1)], status="pending")

    async with session_factory() as session:
        order = await session.get(Order, old_order["id"])
        order.created_at = datetime.now(timezone.utc) - timedelta(days=3)
        await session.commit()

    stats = client.get("/api/analytics/dashboard").json()
    assert stats["userStats"] == {"totalUsers": 2, "newUsersToday": 2}
    assert stats["orderStats"] == {"totalOrders": 3, "pendingOrders": 1}
    assert stats["revenueStats"] == {"totalRevenue": 70.0, "revenueToday": today_order["total_amount"]}
    assert stats["productStats"] == {"totalProducts": 2, "outOfStockProducts": 1}


def test_sales_vs_targets(client):
    today = utc_today()
    client.post("/api/sales", json={
        "date": today.replace(day=1).isoformat(),
        "total_revenue": 1234.5, "orders_count": 10, "average_order_value": 123.45,
    })
    # previous years are ignored
    client.post("/api/sales", json={
        "date": today.replace(year=today.year - 1, day=1).isoformat(),
        "total_revenue": 999, "orders_count": 1, "average_order_value": 999,
    })

    rows = client.get("/api/analytics/sales-vs-targets").json()
    assert len(rows) == 12
    assert rows[0]["month"] == "Jan"
    assert rows[0]["target"] == 10000
    assert rows[11]["month"] == "Dec"
    assert rows[11]["target"] == 25000
    assert rows[today.month - 1]["actual"] == 1234.5
    assert sum(r["actual"] for r in rows) == 1234.5


def test_traffic_sources(client):
    rows = client.get("/api/analytics/traffic-sources").json()
    assert rows[0] == {"source": "Direct", "count": 4200}
    assert all(r["count"] > 0 for r in rows)
