"""Reshape API answers into the rows the dashboard charts and tables render."""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .stats import MONTH_NAMES

USER_SEARCH_FIELDS = ("name", "email", "role")


def _number(value, cast=float):
    try:
        return cast(value)
    except (TypeError, ValueError):
        return 0


def complete_monthly_sales(data) -> List[Dict[str, Any]]:
    """Twelve ``{name, sales}`` rows in calendar order, 0 where the API had nothing.

    ``data`` is either a list of ``{name, sales}`` rows or a mapping keyed by
    full month name.
    """
    by_month = {}
    if isinstance(data, Mapping):
        for key, value in data.items():
            if key in MONTH_NAMES:
                by_month[key] = value
    elif isinstance(data, Iterable):
        for item in data:
            if isinstance(item, Mapping) and item.get("name") and item.get("sales") is not None:
                by_month[item["name"]] = item["sales"]

    return [{"name": month, "sales": by_month.get(month, 0)} for month in MONTH_NAMES]


def status_distribution_chart(rows) -> List[Dict[str, Any]]:
    return [
        {"name": str(item["status"]).capitalize(), "value": item["count"]}
        for item in rows
    ]


def category_chart(rows) -> List[Dict[str, Any]]:
    """``{category, revenue}`` or ``{category, count}`` rows as pie slices."""
    out = []
    for item in rows:
        value = item.get("revenue", item.get("count"))
        out.append({"name": item.get("category") or "Uncategorized", "value": _number(value)})
    return out


def traffic_chart(rows) -> List[Dict[str, Any]]:
    data = rows if isinstance(rows, list) else []
    out = [
        {"name": item.get("source") or "Unknown", "value": _number(item.get("count") or item.get("visits") or 0, int)}
        for item in data
    ]
    out = [item for item in out if item["value"] > 0]
    if not out:
        raise ValueError("No valid data received")
    return out


def revenue_vs_target_chart(rows) -> List[Dict[str, Any]]:
    data = rows if isinstance(rows, list) else []
    return [
        {"month": item.get("month"), "revenue": _number(item.get("actual")), "target": _number(item.get("target"))}
        for item in data
    ]


def search_rows(rows: Sequence[Mapping], term: str, fields: Sequence[str] = USER_SEARCH_FIELDS) -> List[Mapping]:
    """Case-insensitive substring match on any of ``fields``."""
    term = (term or "").strip().lower()
    if not term:
        return list(rows)
    return [
        row for row in rows
        if any(term in str(row.get(f) or "").lower() for f in fields)
    ]


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total: int = 0
    first: int = 0  # 1-based index of the first row shown, 0 when empty
    last: int = 0

    @property
    def label(self) -> str:
        return f"Showing {self.first} to {self.last} of {self.total}"


def paginate(rows: Sequence[Any], page: int = 1, per_page: int = 10) -> Page:
    if per_page < 1:
        raise ValueError("per_page must be positive")
    total = len(rows)
    total_pages = math.ceil(total / per_page)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page
    items = list(rows[start:start + per_page])
    return Page(
        items=items,
        page=page,
        total_pages=total_pages,
        total=total,
        first=start + 1 if items else 0,
        last=start + len(items),
    )
