"""Async client for the dashboard API with static fallback data.

Every call goes through :meth:`DashboardClient.with_fallback`: when the last
health check said the API is down, or the request fails, the matching entry
of :data:`dashboard.fallback.FALLBACK_DATA` is returned instead.
"""
import copy
import time
from typing import Any, Awaitable, Callable, Optional

import httpx

from .config import API_BASE_URL, API_TIMEOUT, HEALTH_TIMEOUT
from .fallback import FALLBACK_DATA
from .logger import setup_logger

logger = setup_logger(__name__)


def handle_api_error(error: BaseException) -> str:
    """Human-readable message for a failed API call."""
    if isinstance(error, httpx.TimeoutException):
        return "Request timed out. The API server might be slow or unavailable."
    if isinstance(error, httpx.HTTPStatusError):
        code = error.response.status_code
        if code == 404:
            return "API endpoint not found. Please check the API route configuration."
        if code >= 500:
            return "Server error. Please contact the administrator."
        return f"Error: {code} - {error.response.reason_phrase}"
    if isinstance(error, httpx.TransportError):
        return "Network error. Please check if the API server is running."
    return "An unexpected error occurred. Using fallback data instead."


def fallback(key: str, default: Any = None) -> Any:
    """Copy of a fallback entry so callers can mutate what they get."""
    if key not in FALLBACK_DATA:
        return copy.deepcopy(default)
    return copy.deepcopy(FALLBACK_DATA[key])


class ResourceService:
    """list/create/read/update/delete + stats overview for one resource."""

    path = ""
    rows_key: Optional[str] = None
    stats_key: Optional[str] = None

    def __init__(self, client: "DashboardClient"):
        self.client = client

    def _rows(self):
        return fallback(self.rows_key, []) if self.rows_key else []

    async def get_all(self):
        return await self.client.with_fallback(lambda: self.client.get(self.path), self._rows())

    async def get_by_id(self, item_id: int):
        row = next((r for r in self._rows() if r.get("id") == item_id), {})
        return await self.client.with_fallback(lambda: self.client.get(f"{self.path}/{item_id}"), row)

    async def create(self, data: dict):
        placeholder = {**data, "id": int(time.time() * 1000)}
        return await self.client.with_fallback(lambda: self.client.post(self.path, data), placeholder)

    async def update(self, item_id: int, data: dict):
        return await self.client.with_fallback(
            lambda: self.client.put(f"{self.path}/{item_id}", data), {**data, "id": item_id}
        )

    async def delete(self, item_id: int):
        return await self.client.with_fallback(
            lambda: self.client.delete(f"{self.path}/{item_id}"), {"success": True}
        )

    async def get_stats(self):
        stats = fallback(self.stats_key, {}) if self.stats_key else {}
        return await self.client.with_fallback(lambda: self.client.get(f"{self.path}/stats/overview"), stats)


class UserService(ResourceService):
    path = "/users"
    rows_key = "users"
    stats_key = "userStats"


class ProductService(ResourceService):
    path = "/products"
    rows_key = "products"
    stats_key = "productStats"

    async def get_categories_data(self):
        return await self.client.with_fallback(
            lambda: self.client.get(f"{self.path}/stats/categories"), fallback("categoryDistribution")
        )


class OrderService(ResourceService):
    path = "/orders"
    stats_key = "orderStats"

    async def get_recent(self):
        return await self.client.with_fallback(lambda: self.client.get(f"{self.path}/stats/recent"), [])

    async def get_status_distribution(self):
        return await self.client.with_fallback(
            lambda: self.client.get(f"{self.path}/stats/status-distribution"), []
        )


class SaleService(ResourceService):
    path = "/sales"
    stats_key = "salesStats"

    async def get_sales_by_category(self):
        return await self.client.with_fallback(
            lambda: self.client.get(f"{self.path}/stats/by-category"), fallback("categoryDistribution")
        )

    async def get_monthly_sales(self):
        return await self.client.with_fallback(
            lambda: self.client.get(f"{self.path}/stats/monthly"), fallback("monthlySales", [])
        )

    async def get_daily_sales(self):
        return await self.client.with_fallback(
            lambda: self.client.get(f"{self.path}/stats/daily"), fallback("dailySales", [])
        )


class AnalyticsService:
    path = "/analytics"

    def __init__(self, client: "DashboardClient"):
        self.client = client

    async def get_dashboard_stats(self):
        return await self.client.with_fallback(lambda: self.client.get(f"{self.path}/dashboard"), {})

    async def get_sales_vs_targets(self):
        return await self.client.with_fallback(lambda: self.client.get(f"{self.path}/sales-vs-targets"), [])

    async def get_traffic_sources(self):
        return await self.client.with_fallback(lambda: self.client.get(f"{self.path}/traffic-sources"), [])


class DashboardClient:
    """
    Usage::

        async with DashboardClient() as api:
            users = await api.users.get_all()

    Entering the context runs the health check; until a check succeeds every
    call answers with fallback data.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = API_TIMEOUT,
        health_timeout: float = HEALTH_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.health_timeout = health_timeout
        self.api_available = False
        self.last_error: Optional[str] = None
        self.http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

        self.users = UserService(self)
        self.products = ProductService(self)
        self.orders = OrderService(self)
        self.sales = SaleService(self)
        self.analytics = AnalyticsService(self)

    async def __aenter__(self):
        await self.check_health()
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self.http.aclose()

    async def check_health(self) -> bool:
        try:
            resp = await self.http.get("/health-check", timeout=self.health_timeout)
            self.api_available = resp.is_success
        except httpx.HTTPError as e:
            logger.error("API status check error: %s", e)
            self.api_available = False

        if self.api_available:
            logger.info("API server is available.")
        else:
            logger.warning("API server is not available. The application will use fallback data.")
        return self.api_available

    # 🌐 raw requests: raise on transport errors and non-2xx answers
    async def _request(self, method: str, path: str, json: Any = None):
        resp = await self.http.request(method, path, json=json)
        resp.raise_for_status()
        return resp.json()

    async def get(self, path: str):
        return await self._request("GET", path)

    async def post(self, path: str, data: Any):
        return await self._request("POST", path, json=data)

    async def put(self, path: str, data: Any):
        return await self._request("PUT", path, json=data)

    async def delete(self, path: str):
        return await self._request("DELETE", path)

    async def with_fallback(self, call: Callable[[], Awaitable[Any]], fallback_value: Any):
        if not self.api_available:
            logger.warning("Using fallback data (API unavailable)")
            return fallback_value

        try:
            result = await call()
        except (httpx.HTTPError, ValueError) as e:
            self.last_error = handle_api_error(e)
            logger.warning("%s Using fallback data due to API error", self.last_error)
            return fallback_value
        self.last_error = None
        return result
