"""
reporting.py: currency formatting, report projections and file exports.

A report is a declarative list of (header, getter) columns over the product
collection. Header labels double as lookup keys: ``lookup`` matches them
ignoring case, whitespace and underscores, so callers need not match the exact
label.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

import pandas as pd

from standarium_erp.models import STATUS_IN_STOCK, STATUS_SOLD
from standarium_erp.theme import KIND_LABELS

logger = logging.getLogger("standarium.reports")

XLSX_SHEET = "Relatório"
CSV_BOM = "\ufeff"
EMPTY_CELL = "---"


# ══════════════════════════════════════════════════════════════════════════════
#  FORMATTING
# ══════════════════════════════════════════════════════════════════════════════

def format_currency(val):
    """Format a number as R$ 1.234,56."""
    val = val or 0
    text = f"{abs(val):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    if val < 0:
        return f"-R$ {text}"
    return f"R$ {text}"


def format_date(val):
    if isinstance(val, date):
        return val.strftime("%d/%m/%Y")
    return val or EMPTY_CELL


_HEADER_SEP = re.compile(r"[\s_]+")


def normalize_header(header):
    return _HEADER_SEP.sub("", str(header)).lower()


def lookup(row: dict, header):
    """Value of ``row`` under the key matching ``header`` after normalization."""
    wanted = normalize_header(header)
    for key, value in row.items():
        if normalize_header(key) == wanted:
            return value
    return None


# ══════════════════════════════════════════════════════════════════════════════
#  REPORT DEFINITIONS
# ══════════════════════════════════════════════════════════════════════════════

def _iso(d):
    return d.isoformat() if d else None


@dataclass
class ReportSpec:
    title: str
    include: Callable[[Any], bool]
    columns: list


REPORTS = {
    "sales": ReportSpec(
        title="Vendas",
        include=lambda p: p.is_for_sale and p.status == STATUS_SOLD,
        columns=[
            ("Data Venda", lambda p: _iso(p.sale_date)),
            ("Produto", lambda p: p.name),
            ("Custo", lambda p: p.cost),
            ("Venda", lambda p: p.sale_value),
            ("Lucro", lambda p: p.profit),
            ("Método", lambda p: p.sale_method),
        ],
    ),
    "purchases": ReportSpec(
        title="Compras",
        include=lambda p: True,
        columns=[
            ("Data Compra", lambda p: _iso(p.purchase_date)),
            ("Item", lambda p: p.name),
            ("Tipo", lambda p: KIND_LABELS.get(p.kind, p.kind)),
            ("Custo", lambda p: p.cost),
            ("Método", lambda p: p.purchase_method),
        ],
    ),
    "stock": ReportSpec(
        title="Estoque Atual",
        include=lambda p: p.is_for_sale and p.status == STATUS_IN_STOCK,
        columns=[
            ("Produto", lambda p: p.name),
            ("Custo", lambda p: p.cost),
            ("Preço Sugerido", lambda p: p.suggested_price),
            ("Data Compra", lambda p: _iso(p.purchase_date)),
        ],
    ),
}


def get_report_data(report_type, products):
    """Return ``(rows, headers)`` for one of the fixed report shapes."""
    spec = REPORTS.get(report_type)
    if spec is None:
        logger.warning("Unknown report type %r", report_type)
        return [], []
    headers = [header for header, _ in spec.columns]
    rows = [
        {header: getter(p) for header, getter in spec.columns}
        for p in products if spec.include(p)
    ]
    return rows, headers


def format_cell(value, header):
    """Display text for a report cell: money columns get currency formatting."""
    if value is None or value == "":
        return EMPTY_CELL
    if isinstance(value, (int, float)) and normalize_header(header) != "produto":
        return format_currency(value)
    return str(value)


def display_rows(rows, headers):
    return [[format_cell(lookup(row, h), h) for h in headers] for row in rows]


def report_filename(report_type, ext, today=None):
    today = today or date.today()
    return f"relatorio_{report_type}_{today.isoformat()}.{ext}"


# ══════════════════════════════════════════════════════════════════════════════
#  EXPORTS
# ══════════════════════════════════════════════════════════════════════════════

def _frame(rows, headers):
    return pd.DataFrame([[lookup(row, h) for h in headers] for row in rows], columns=headers)


def to_csv(rows, headers) -> bytes:
    """UTF-8 CSV with BOM: plain header line, every data field quoted, CRLF."""
    buffer = io.StringIO()
    buffer.write(CSV_BOM + ",".join(headers) + "\r\n")
    _frame(rows, headers).to_csv(buffer, header=False, index=False,
                                 quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    return buffer.getvalue().encode("utf-8")


def to_xlsx(rows, headers) -> bytes:
    df = _frame(rows, headers)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=XLSX_SHEET)
    return buffer.getvalue()
