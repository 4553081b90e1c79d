"""Entity parsing, product form rules and sale registration."""

from __future__ import annotations

from datetime import date

import pytest

from standarium_erp.models import (
    Product,
    Sale,
    build_sale,
    from_document,
    parse_number,
    product_from_form,
    to_document,
)


class TestParsing:
    @pytest.mark.parametrize("raw, expected", [
        ("1.234,56", 1234.56),
        ("R$ 99,90", 99.9),
        ("12.5", 12.5),
        (7, 7.0),
        ("", 0.0),
        ("abc", 0.0),
    ])
    def test_parse_number(self, raw, expected) -> None:
        assert parse_number(raw) == pytest.approx(expected)

    def test_from_document_coerces_and_ignores_unknown_keys(self) -> None:
        p = from_document("products", {
            "id": 42, "name": "Fone", "cost": "50", "quantity": "2",
            "purchase_date": "2024-03-02T00:00:00", "suggested_price": None,
            "updated_at": "2024-03-02T10:00:00Z", "user_id": "u1",
        })
        assert p.id == "42"
        assert p.cost == 50.0
        assert p.quantity == 2
        assert p.purchase_date == date(2024, 3, 2)
        assert p.suggested_price is None

    def test_to_document_drops_id_and_serializes_dates(self) -> None:
        doc = to_document(Sale(id="x", product_id="p", date=date(2024, 5, 1), total=10.0))
        assert "id" not in doc
        assert doc["date"] == "2024-05-01"


class TestProductForm:
    def test_consumption_has_no_status_or_sale_fields(self) -> None:
        doc = product_from_form({
            "name": " Papel ", "kind": "consumption", "cost": "15", "status": "sold",
            "suggested_price": "30", "sale_value": "40",
        })
        assert doc["name"] == "Papel"
        assert doc["status"] == "not-applicable"
        assert doc["suggested_price"] is None
        assert doc["sale_value"] is None
        assert doc["sale_date"] is None
        assert doc["sale_method"] is None

    def test_for_sale_defaults_to_in_stock(self) -> None:
        doc = product_from_form({"name": "Cabo", "kind": "for-sale", "status": "bogus"})
        assert doc["status"] == "in-stock"
        assert doc["sale_value"] is None

    def test_sold_item_gets_sale_fields(self) -> None:
        doc = product_from_form({
            "name": "Fone", "kind": "for-sale", "cost": "50", "quantity": "2", "status": "sold",
            "sale_value": "120", "sale_date": "2024-03-20",
        })
        assert doc["status"] == "sold"
        assert doc["sale_value"] == 120.0
        assert doc["sale_date"] == "2024-03-20"
        assert doc["sale_method"] == "Pix"
        assert doc["quantity_sold"] == 2

    def test_sold_without_date_uses_today(self) -> None:
        doc = product_from_form({"name": "Fone", "status": "sold", "sale_value": "10"})
        assert doc["sale_date"] == date.today().isoformat()


class TestBuildSale:
    def _lot(self, **kw) -> Product:
        base = dict(id="p2", name="Carregador", cost=30.0, quantity=3, status="in-stock")
        base.update(kw)
        return Product(**base)

    def test_partial_sale_reduces_quantity_and_cost(self) -> None:
        sale, update = build_sale(self._lot(), 1, 25, "Dinheiro", today=date(2024, 6, 1))
        assert sale["quantity"] == 1
        assert sale["total"] == 25.0
        assert sale["cost"] == 10.0
        assert sale["date"] == "2024-06-01"
        assert update == {"quantity": 2, "cost": 20.0}

    def test_full_lot_marks_sold(self) -> None:
        sale, update = build_sale(self._lot(), 3, 20, "Pix", today=date(2024, 6, 1))
        assert sale["total"] == 60.0
        assert update["status"] == "sold"
        assert update["sale_value"] == 60.0
        assert update["quantity_sold"] == 3
        assert update["sale_date"] == "2024-06-01"

    @pytest.mark.parametrize("qty", [0, -1, 4])
    def test_rejects_out_of_range_quantity(self, qty) -> None:
        with pytest.raises(ValueError):
            build_sale(self._lot(), qty, 20, "Pix")

    def test_rejects_items_not_in_stock(self) -> None:
        with pytest.raises(ValueError):
            build_sale(self._lot(status="in-transit"), 1, 20, "Pix")
        with pytest.raises(ValueError):
            build_sale(self._lot(kind="consumption", status="not-applicable"), 1, 20, "Pix")

    @pytest.mark.parametrize("price", [None, "", 0, "0,00"])
    def test_rejects_missing_unit_price(self, price) -> None:
        with pytest.raises(ValueError):
            build_sale(self._lot(), 1, price, "Pix")
