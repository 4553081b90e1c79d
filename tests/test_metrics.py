"""Dashboard, inventory and checklist derivations."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from standarium_erp.metrics import (
    PERIOD_ALL_TIME,
    PERIOD_LAST_30_DAYS,
    PERIOD_THIS_MONTH,
    checklist_totals,
    dashboard_metrics,
    filter_inventory,
    filter_sold_in_period,
    inventory_kpis,
    monthly_revenue_vs_cost,
    sales_by_method,
    sort_by_name,
    sort_inventory,
)
from standarium_erp.models import Product

NOW = datetime(2024, 4, 25, 15, 30)


class TestDashboard:
    def test_all_time_totals(self, products) -> None:
        m = dashboard_metrics(products, PERIOD_ALL_TIME, NOW)
        assert m.revenue == pytest.approx(280.0)
        assert m.profit == pytest.approx(30.0)
        assert m.sold_count == 2
        # Carregador (20 x 3) + Cabo USB-C (25 x 1)
        assert m.stock_value == pytest.approx(85.0)
        assert m.stock_cost == pytest.approx(40.0)

    def test_this_month(self, products) -> None:
        sold = filter_sold_in_period(products, PERIOD_THIS_MONTH, NOW)
        assert [p.id for p in sold] == ["p5"]

    def test_last_30_days_boundary(self) -> None:
        inside = Product(id="a", status="sold", sale_value=1.0, sale_date=date(2024, 3, 27))
        outside = Product(id="b", status="sold", sale_value=1.0, sale_date=date(2024, 3, 25))
        sold = filter_sold_in_period([inside, outside], PERIOD_LAST_30_DAYS, NOW)
        assert [p.id for p in sold] == ["a"]

    def test_sold_without_date_is_never_counted(self) -> None:
        p = Product(id="x", status="sold", sale_value=50.0, sale_date=None)
        assert dashboard_metrics([p], PERIOD_ALL_TIME, NOW).sold_count == 0

    def test_consumption_items_are_not_sales(self, products) -> None:
        m = dashboard_metrics(products, PERIOD_ALL_TIME, NOW)
        assert all(p.kind == "for-sale" for p in filter_sold_in_period(products))
        assert m.stock_cost == pytest.approx(40.0)

    def test_monthly_revenue_vs_cost(self, products) -> None:
        df = monthly_revenue_vs_cost(products)
        assert list(df.index) == ["2024-01", "2024-03", "2024-04"]
        assert df.loc["2024-01", "costs"] == pytest.approx(200.0)
        assert df.loc["2024-03", "costs"] == pytest.approx(50.0)
        assert df.loc["2024-03", "revenue"] == pytest.approx(100.0)
        assert df.loc["2024-04", "costs"] == pytest.approx(45.0)
        assert df.loc["2024-04", "revenue"] == pytest.approx(180.0)

    def test_monthly_revenue_vs_cost_empty(self) -> None:
        df = monthly_revenue_vs_cost([])
        assert df.empty
        assert list(df.columns) == ["revenue", "costs"]

    def test_sales_by_method(self, products) -> None:
        totals = sales_by_method(filter_sold_in_period(products))
        assert totals == {"Pix": 100.0, "Cartão": 180.0}


class TestInventory:
    def test_kpis(self, products) -> None:
        assert inventory_kpis(products) == {
            "in_stock": 1, "in_transit": 1, "sold": 2, "consumption": 1,
        }

    def test_status_filters(self, products) -> None:
        assert [p.id for p in filter_inventory(products, "consumption")] == ["p4"]
        assert [p.id for p in filter_inventory(products, "sold")] == ["p1", "p5"]
        assert len(filter_inventory(products, "all")) == len(products)

    def test_date_filter(self, products) -> None:
        assert [p.id for p in filter_inventory(products, "all", "2024-04-05")] == ["p2"]

    def test_sort_by_unit_cost_ascending(self, products) -> None:
        ordered = sort_inventory(products, "cost", "asc")
        # Carregador costs 30 for a lot of 3: 10 per unit, tied with Cabo USB-C
        assert [p.id for p in ordered] == ["p2", "p3", "p4", "p1", "p5"]

    def test_sort_by_date_puts_undated_last(self, products) -> None:
        desc = sort_inventory(products, "date", "desc")
        asc = sort_inventory(products, "date", "asc")
        assert [p.id for p in desc] == ["p2", "p4", "p1", "p5", "p3"]
        assert [p.id for p in asc] == ["p5", "p1", "p4", "p2", "p3"]


class TestServicesAndChecklist:
    def test_sort_by_name_ignores_case(self, services) -> None:
        assert [s.name for s in sort_by_name(services)] == ["Bateria", "Formatação", "troca de tela"]

    def test_checklist_totals(self, components) -> None:
        totals = checklist_totals(components, ["c1", "c2"], labor_rate=5)
        assert totals.total_cost == pytest.approx(30.0)
        assert totals.suggested_price == pytest.approx(45.5)

    def test_checklist_nothing_checked(self, components) -> None:
        totals = checklist_totals(components, [], labor_rate=0)
        assert totals.total_cost == 0
        assert totals.suggested_price == 0
