"""
metrics.py: pure derivations behind every page.

Nothing here touches Dash; pages call these and only lay out the results.
Each function works on plain lists of model records and recomputes from
scratch on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta

import pandas as pd

from standarium_erp.models import (
    KIND_CONSUMPTION,
    STATUS_IN_STOCK,
    STATUS_IN_TRANSIT,
    STATUS_SOLD,
)

PERIOD_ALL_TIME = "all_time"
PERIOD_THIS_MONTH = "this_month"
PERIOD_LAST_30_DAYS = "last_30_days"

PRICE_MARKUP = 1.3


# ══════════════════════════════════════════════════════════════════════════════
#  DASHBOARD
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class DashboardMetrics:
    revenue: float = 0.0
    profit: float = 0.0
    sold_count: int = 0
    stock_value: float = 0.0
    stock_cost: float = 0.0


def _in_period(sale_date, period, now):
    if period == PERIOD_LAST_30_DAYS:
        return datetime.combine(sale_date, time()) >= now - timedelta(days=30)
    if period == PERIOD_THIS_MONTH:
        return sale_date.month == now.month and sale_date.year == now.year
    return True


def filter_sold_in_period(products, period=PERIOD_ALL_TIME, now=None):
    """Sold for-sale items whose sale date falls in ``period``.

    Items without a sale date never match, whatever the period.
    """
    now = now or datetime.now()
    return [
        p for p in products
        if p.is_for_sale and p.status == STATUS_SOLD and p.sale_date is not None
        and _in_period(p.sale_date, period, now)
    ]


def stock_items(products):
    """For-sale items that have not been sold yet (in stock or in transit)."""
    return [p for p in products if p.is_for_sale and p.status != STATUS_SOLD]


def dashboard_metrics(products, period=PERIOD_ALL_TIME, now=None) -> DashboardMetrics:
    sold = filter_sold_in_period(products, period, now)
    stock = stock_items(products)
    return DashboardMetrics(
        revenue=sum(p.sale_value or 0.0 for p in sold),
        profit=sum((p.sale_value or 0.0) - (p.cost or 0.0) for p in sold),
        sold_count=len(sold),
        stock_value=sum((p.suggested_price or 0.0) * (p.quantity or 1) for p in stock),
        stock_cost=sum(p.cost or 0.0 for p in stock),
    )


def monthly_revenue_vs_cost(products) -> pd.DataFrame:
    """Costs by purchase month and revenue by sale month.

    Returns a DataFrame indexed by ``YYYY-MM`` with ``revenue`` and ``costs``
    columns, months in ascending order.
    """
    rows = []
    for p in products:
        if p.purchase_date is not None:
            rows.append({"month": p.purchase_date.strftime("%Y-%m"),
                         "costs": p.cost or 0.0, "revenue": 0.0})
        if p.status == STATUS_SOLD and p.sale_date is not None:
            rows.append({"month": p.sale_date.strftime("%Y-%m"),
                         "costs": 0.0, "revenue": p.sale_value or 0.0})
    if not rows:
        return pd.DataFrame(columns=["revenue", "costs"])
    df = pd.DataFrame(rows)
    return df.groupby("month")[["revenue", "costs"]].sum().sort_index()


def sales_by_method(sold) -> dict[str, float]:
    totals: dict[str, float] = {}
    for p in sold:
        method = p.sale_method or "N/A"
        totals[method] = totals.get(method, 0.0) + (p.sale_value or 0.0)
    return totals


# ══════════════════════════════════════════════════════════════════════════════
#  INVENTORY
# ══════════════════════════════════════════════════════════════════════════════

STATUS_FILTER_ALL = "all"
STATUS_FILTER_CONSUMPTION = "consumption"
SORT_BY_DATE = "date"
SORT_BY_COST = "cost"


def filter_inventory(products, status_filter=STATUS_FILTER_ALL, date_filter=None):
    items = list(products)
    if status_filter and status_filter != STATUS_FILTER_ALL:
        if status_filter == STATUS_FILTER_CONSUMPTION:
            items = [p for p in items if p.kind == KIND_CONSUMPTION]
        else:
            items = [p for p in items if p.is_for_sale and p.status == status_filter]
    if date_filter:
        items = [p for p in items
                 if p.purchase_date is not None and p.purchase_date.isoformat() == str(date_filter)[:10]]
    return items


def sort_inventory(items, sort_by=SORT_BY_DATE, order="desc"):
    """Stable sort by purchase date or unit cost; undated items always go last."""
    reverse = order != "asc"
    if sort_by == SORT_BY_COST:
        return sorted(items, key=lambda p: p.unit_cost, reverse=reverse)
    dated = [p for p in items if p.purchase_date is not None]
    undated = [p for p in items if p.purchase_date is None]
    return sorted(dated, key=lambda p: p.purchase_date, reverse=reverse) + undated


def inventory_kpis(products) -> dict[str, int]:
    return {
        "in_stock": sum(1 for p in products if p.is_for_sale and p.status == STATUS_IN_STOCK),
        "in_transit": sum(1 for p in products if p.is_for_sale and p.status == STATUS_IN_TRANSIT),
        "sold": sum(1 for p in products if p.is_for_sale and p.status == STATUS_SOLD),
        "consumption": sum(1 for p in products if p.kind == KIND_CONSUMPTION),
    }


# ══════════════════════════════════════════════════════════════════════════════
#  SERVICES / BUILD-COST CHECKLIST
# ══════════════════════════════════════════════════════════════════════════════

def sort_by_name(items):
    return sorted(items, key=lambda item: (item.name or "").casefold())


@dataclass
class ChecklistTotals:
    total_cost: float = 0.0
    suggested_price: float = 0.0


def checklist_totals(components, checked_ids, labor_rate=0.0) -> ChecklistTotals:
    checked = set(checked_ids or ())
    total = sum(c.cost or 0.0 for c in components if c.id in checked)
    labor = labor_rate or 0.0
    return ChecklistTotals(total_cost=total, suggested_price=(total + labor) * PRICE_MARKUP)
