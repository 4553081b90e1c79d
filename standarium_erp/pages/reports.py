"""Reports page: pick a report, preview it, export CSV / XLSX / PDF."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from standarium_erp.theme import *
from standarium_erp.components.cards import section, empty_state
from standarium_erp.components.tables import simple_table
from standarium_erp.reporting import REPORTS, display_rows

DEFAULT_REPORT = "sales"


def build_table(rows, headers):
    if not headers:
        return empty_state("Tipo de relatório desconhecido.")
    if not rows:
        return empty_state("Nenhum dado para este relatório.")
    return simple_table(headers, display_rows(rows, headers))


def build_print_area(report_type, rows, headers, generated_on):
    """Printable copy of the report; hidden on screen, the only thing printed."""
    spec = REPORTS.get(report_type)
    title = spec.title if spec else report_type
    return html.Div([
        html.H3(f"Relatório de {title}"),
        html.P(f"Gerado em {generated_on}"),
        build_table(rows, headers),
    ])


def layout(session):
    return html.Div([
        html.Div([
            html.H4("Relatórios", className="mb-0"),
            html.Div([
                dbc.Select(id="report-type", options=REPORT_OPTIONS, value=DEFAULT_REPORT,
                           style={"width": "200px"}),
                dbc.DropdownMenu([
                    dbc.DropdownMenuItem("CSV", id="report-export-csv", n_clicks=0),
                    dbc.DropdownMenuItem("Excel (XLSX)", id="report-export-xlsx", n_clicks=0),
                    dbc.DropdownMenuItem("PDF (imprimir)", id="report-export-pdf", n_clicks=0),
                ], label="Exportar", color="primary", size="sm"),
            ], className="ms-auto", style={"display": "flex", "gap": "8px", "alignItems": "center"}),
        ], style={"display": "flex", "alignItems": "center", "marginBottom": "16px"}),

        section("Pré-visualização", html.Div(id="report-table")),

        dcc.Download(id="report-download"),
        html.Div(id="print-area", className="print-area"),
        dcc.Store(id="print-done"),
    ])
