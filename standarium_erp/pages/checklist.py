"""Build-cost checklist: tick components, add labor, get a suggested price."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from standarium_erp.theme import *
from standarium_erp.components.kpi import kpi_card, kpi_row
from standarium_erp.components.cards import section, empty_state
from standarium_erp.components.tables import action_button
from standarium_erp.metrics import PRICE_MARKUP
from standarium_erp.reporting import format_currency


def build_list(components, checked_ids):
    if not components:
        return empty_state("Nenhum componente cadastrado.")
    checked = set(checked_ids or ())
    rows = []
    for c in components:
        rows.append(html.Div([
            dbc.Checkbox(id={"type": "comp-check", "index": c.id}, value=c.id in checked,
                         label=c.name, className="me-auto"),
            html.Span(format_currency(c.cost), style={"fontFamily": "monospace", "color": SKY,
                                                      "marginRight": "12px"}),
            action_button("Editar", "comp-edit", c.id),
            action_button("Excluir", "comp-delete", c.id, color="danger"),
        ], className="checklist-row",
            style={"display": "flex", "alignItems": "center", "padding": "6px 0",
                   "borderBottom": "1px solid #ffffff10"}))
    return html.Div(rows)


def build_totals(totals):
    return kpi_row([
        kpi_card("Custo dos Componentes", format_currency(totals.total_cost), ORANGE),
        kpi_card("Preço Sugerido", format_currency(totals.suggested_price), GREEN,
                 subtitle=f"(componentes + mão de obra) × {PRICE_MARKUP}"),
    ])


def layout(session):
    return html.Div([
        html.Div([
            html.H4("Montagem", className="mb-0"),
            dbc.Button("+ Adicionar Componente", id="comp-add-btn", color="primary", size="sm",
                       className="ms-auto", n_clicks=0),
        ], style={"display": "flex", "alignItems": "center", "marginBottom": "16px"}),

        html.Div(id="comp-totals"),

        dbc.Row([
            dbc.Col([
                dbc.Label("Mão de obra (R$)", style={"fontSize": "12px"}),
                dbc.Input(id="comp-labor", type="number", step=0.01,
                          value=session.settings.labor_rate),
            ], md=4),
            dbc.Col(dbc.Button("Limpar seleção", id="comp-reset", color="secondary",
                               outline=True, n_clicks=0), md=4, className="d-flex align-items-end"),
        ], className="mb-3"),

        section("Componentes", html.Div(id="comp-list"), color=ORANGE),

        dbc.Modal([
            dbc.ModalHeader(dbc.ModalTitle("Adicionar Componente", id="comp-modal-title")),
            dbc.ModalBody([
                dbc.Label("Nome", style={"fontSize": "12px"}),
                dbc.Input(id="comp-name", className="mb-2"),
                dbc.Label("Custo (R$)", style={"fontSize": "12px"}),
                dbc.Input(id="comp-cost", type="number", step=0.01),
            ]),
            dbc.ModalFooter([
                dbc.Button("Cancelar", id="comp-cancel", color="secondary", n_clicks=0),
                dbc.Button("Salvar", id="comp-save", color="primary", n_clicks=0),
            ]),
        ], id="comp-modal", is_open=False),
        dcc.Store(id="comp-checked", data=[]),
        dcc.Store(id="comp-editing-id"),
        dcc.Store(id="comp-pending-delete"),
        dcc.ConfirmDialog(id="comp-confirm-delete",
                          message="Tem certeza que deseja excluir este componente?"),
        html.Div(id="comp-toast"),
    ])
