"""Data for the individual dashboard widgets (charts and tables).

Each widget fetches one endpoint, reshapes it with :mod:`dashboard.transforms`
and, when either the request or the reshaping fails, shows its own sample
data together with a banner message.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .client import DashboardClient, fallback
from .transforms import (
    USER_SEARCH_FIELDS, Page, category_chart, complete_monthly_sales, paginate,
    revenue_vs_target_chart, search_rows, status_distribution_chart, traffic_chart,
)

_MISSING = object()


@dataclass
class WidgetData:
    data: Any
    error: Optional[str] = None

    @property
    def using_fallback(self) -> bool:
        return self.error is not None


def _identity(rows):
    return rows


async def _load(api: DashboardClient, path: str, transform: Callable, fallback_key: str, message: str) -> WidgetData:
    raw = await api.with_fallback(lambda: api.get(path), _MISSING)
    if raw is _MISSING:
        return WidgetData(fallback(fallback_key, []), message)
    try:
        return WidgetData(transform(raw))
    except (KeyError, TypeError, ValueError, AttributeError):
        return WidgetData(fallback(fallback_key, []), message)


async def monthly_sales_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.sales.path}/stats/monthly", complete_monthly_sales,
                       "monthlySales", "Failed to load sales data")


async def daily_sales_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.sales.path}/stats/daily", _identity,
                       "dailySales", "Failed to load daily sales data. Using mock data instead.")


async def sales_by_category_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.sales.path}/stats/by-category", category_chart,
                       "salesByCategory", "Failed to load category data. Using mock data instead.")


async def category_distribution_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.products.path}/stats/categories", category_chart,
                       "categoryDistribution", "Failed to load category data. Using mock data instead.")


async def order_status_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.orders.path}/stats/status-distribution", status_distribution_chart,
                       "orderStatusDistribution", "Failed to load status data. Using mock data instead.")


async def traffic_sources_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.analytics.path}/traffic-sources", traffic_chart,
                       "trafficSources", "Failed to load traffic data. Using mock data instead.")


async def revenue_chart(api: DashboardClient) -> WidgetData:
    return await _load(api, f"{api.analytics.path}/sales-vs-targets", revenue_vs_target_chart,
                       "revenueVsTargets", "Failed to load revenue data. Using mock data instead.")


async def users_table(api: DashboardClient, term: str = "", page: int = 1, per_page: int = 5) -> WidgetData:
    """One page of the users table, filtered by ``term``."""
    raw = await api.with_fallback(lambda: api.get(api.users.path), _MISSING)
    error = None
    if raw is _MISSING:
        rows, error = fallback("users", []), api.last_error or "API unavailable. Using mock data instead."
    else:
        rows = raw.get("users", []) if isinstance(raw, dict) else raw
    found = search_rows(rows, term, USER_SEARCH_FIELDS)
    result: Page = paginate(found, page, per_page)
    return WidgetData(result, error)
