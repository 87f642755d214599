import httpx
import pytest

from dashboard import widgets
from dashboard.client import DashboardClient
from dashboard.fallback import FALLBACK_DATA
from dashboard.stats import MONTH_NAMES


def _api(routes):
    def handler(request):
        path = request.url.path.removeprefix("/api")
        if path == "/health-check":
            return httpx.Response(200, json={"status": "ok"})
        if path in routes:
            return httpx.Response(200, json=routes[path])
        return httpx.Response(500)

    return DashboardClient(base_url="http://dashboard.test/api", transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_monthly_chart_fills_the_year():
    async with _api({"/sales/stats/monthly": [{"name": "May", "sales": 42}]}) as api:
        result = await widgets.monthly_sales_chart(api)

    assert not result.using_fallback
    assert [r["name"] for r in result.data] == MONTH_NAMES
    assert result.data[4]["sales"] == 42


@pytest.mark.anyio
async def test_failed_request_uses_widget_fallback():
    async with _api({}) as api:
        result = await widgets.order_status_chart(api)

    assert result.using_fallback
    assert result.data == FALLBACK_DATA["orderStatusDistribution"]
    assert result.error == "Failed to load status data. Using mock data instead."


@pytest.mark.anyio
async def test_traffic_chart_without_visits_uses_fallback():
    async with _api({"/analytics/traffic-sources": [{"source": "Direct", "count": 0}]}) as api:
        result = await widgets.traffic_sources_chart(api)

    assert result.using_fallback
    assert result.data == FALLBACK_DATA["trafficSources"]


@pytest.mark.anyio
async def test_category_and_status_charts():
    routes = {
        "/sales/stats/by-category": [{"category": "Books", "revenue": 60.0}],
        "/products/stats/categories": [{"category": "Electronics", "count": 2}],
        "/orders/stats/status-distribution": [{"status": "completed", "count": 7}],
        "/analytics/sales-vs-targets": [{"month": "Jan", "target": 10000, "actual": 500}],
    }
    async with _api(routes) as api:
        assert (await widgets.sales_by_category_chart(api)).data == [{"name": "Books", "value": 60.0}]
        assert (await widgets.category_distribution_chart(api)).data == [{"name": "Electronics", "value": 2.0}]
        assert (await widgets.order_status_chart(api)).data == [{"name": "Completed", "value": 7}]
        assert (await widgets.revenue_chart(api)).data == [{"month": "Jan", "revenue": 500.0, "target": 10000.0}]


@pytest.mark.anyio
async def test_users_table_searches_and_paginates():
    users = [{"name": f"Customer {i}", "email": f"c{i}@example.com", "role": "customer"} for i in range(1, 8)]
    users.append({"name": "Admin", "email": "admin@example.com", "role": "admin"})

    async with _api({"/users": {"users": users}}) as api:
        first = await widgets.users_table(api, term="customer", page=2, per_page=5)
        admins = await widgets.users_table(api, term="ADMIN")

    assert first.error is None
    assert first.data.total == 7
    assert [u["name"] for u in first.data.items] == ["Customer 6", "Customer 7"]
    assert first.data.label == "Showing 6 to 7 of 7"
    assert [u["name"] for u in admins.data.items] == ["Admin"]


@pytest.mark.anyio
async def test_users_table_offline():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with DashboardClient(base_url="http://dashboard.test/api",
                               transport=httpx.MockTransport(handler)) as api:
        result = await widgets.users_table(api, term="jane")

    assert result.using_fallback
    assert [u["name"] for u in result.data.items] == ["Jane Smith"]
