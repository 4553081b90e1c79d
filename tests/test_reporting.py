"""Report projections, formatting and CSV / XLSX exports."""

from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest

from standarium_erp.reporting import (
    CSV_BOM,
    XLSX_SHEET,
    display_rows,
    format_currency,
    format_date,
    get_report_data,
    lookup,
    normalize_header,
    report_filename,
    to_csv,
    to_xlsx,
)


class TestFormatting:
    @pytest.mark.parametrize("value, expected", [
        (1234.56, "R$ 1.234,56"),
        (0, "R$ 0,00"),
        (None, "R$ 0,00"),
        (-45.5, "-R$ 45,50"),
        (1000000, "R$ 1.000.000,00"),
    ])
    def test_format_currency(self, value, expected) -> None:
        assert format_currency(value) == expected

    def test_format_date(self) -> None:
        assert format_date(date(2024, 3, 2)) == "02/03/2024"
        assert format_date(None) == "---"

    def test_normalize_header(self) -> None:
        assert normalize_header("Data Venda") == normalize_header("DATA_VENDA")
        assert normalize_header(" Preço  Sugerido ") == "preçosugerido"

    def test_lookup_matches_normalized_keys(self) -> None:
        assert lookup({"Data Venda": "2024-01-01"}, "data_venda") == "2024-01-01"
        assert lookup({"Data Venda": "2024-01-01"}, "Produto") is None


class TestReports:
    def test_sales_report(self, products) -> None:
        rows, headers = get_report_data("sales", products)
        assert headers == ["Data Venda", "Produto", "Custo", "Venda", "Lucro", "Método"]
        assert [r["Produto"] for r in rows] == ["Fone Bluetooth", "Smartwatch"]
        assert rows[1]["Lucro"] == pytest.approx(-20.0)
        assert rows[0]["Data Venda"] == "2024-03-20"

    def test_purchases_report_includes_everything(self, products) -> None:
        rows, headers = get_report_data("purchases", products)
        assert headers == ["Data Compra", "Item", "Tipo", "Custo", "Método"]
        assert len(rows) == len(products)
        assert {r["Tipo"] for r in rows} == {"Produto para Venda", "Consumo"}

    def test_stock_report_only_in_stock(self, products) -> None:
        rows, headers = get_report_data("stock", products)
        assert [r["Produto"] for r in rows] == ["Carregador"]

    def test_empty_report_keeps_headers(self) -> None:
        rows, headers = get_report_data("stock", [])
        assert rows == []
        assert headers == ["Produto", "Custo", "Preço Sugerido", "Data Compra"]

    def test_unknown_report(self, products) -> None:
        assert get_report_data("taxes", products) == ([], [])

    def test_display_rows_format_money_but_not_names(self, products) -> None:
        rows, headers = get_report_data("stock", products)
        (row,) = display_rows(rows, headers)
        assert row == ["Carregador", "R$ 30,00", "R$ 20,00", "2024-04-05"]

    def test_display_rows_mark_missing_values(self) -> None:
        assert display_rows([{"Produto": "X", "Custo": None}], ["Produto", "Custo"]) == [["X", "---"]]

    def test_report_filename(self) -> None:
        assert report_filename("sales", "csv", date(2024, 5, 1)) == "relatorio_sales_2024-05-01.csv"


class TestExports:
    def test_csv_layout(self) -> None:
        data = to_csv([{"Produto": 'He said "hi"', "Custo": 10.0}], ["Produto", "Custo"])
        text = data.decode("utf-8")
        assert text.startswith(CSV_BOM)
        assert text[len(CSV_BOM):] == 'Produto,Custo\r\n"He said ""hi""","10.0"\r\n'

    def test_csv_empty_cells(self) -> None:
        text = to_csv([{"Produto": "X"}], ["Produto", "Custo"]).decode("utf-8")
        assert text.endswith('"X",""\r\n')

    def test_csv_without_rows_keeps_header(self) -> None:
        assert to_csv([], ["Produto", "Custo"]).decode("utf-8") == CSV_BOM + "Produto,Custo\r\n"

    def test_xlsx_round_trip(self, products) -> None:
        rows, headers = get_report_data("sales", products)
        df = pd.read_excel(io.BytesIO(to_xlsx(rows, headers)), sheet_name=XLSX_SHEET)
        assert list(df.columns) == headers
        assert list(df["Produto"]) == ["Fone Bluetooth", "Smartwatch"]
