"""Services page: the catalog of services offered, alphabetical."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from standarium_erp.theme import *
from standarium_erp.components.cards import section, empty_state
from standarium_erp.components.tables import action_button, money_cell
from standarium_erp.reporting import format_currency


def build_table(services):
    if not services:
        return empty_state("Nenhum serviço cadastrado.")
    rows = [
        html.Tr([
            html.Td([html.Div(s.name, style={"color": WHITE, "fontWeight": "600"}),
                     html.Div(s.description, style={"color": GRAY, "fontSize": "11px"})]),
            money_cell(format_currency(s.price), GREEN),
            html.Td([action_button("Editar", "svc-edit", s.id),
                     action_button("Excluir", "svc-delete", s.id, color="danger")],
                    style={"whiteSpace": "nowrap", "textAlign": "right"}),
        ])
        for s in services
    ]
    return dbc.Table([
        html.Thead(html.Tr([html.Th("Serviço"), html.Th("Preço", style={"textAlign": "right"}),
                            html.Th("")])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")


def layout(session):
    return html.Div([
        html.Div([
            html.H4("Serviços", className="mb-0"),
            dbc.Button("+ Adicionar Serviço", id="svc-add-btn", color="primary", size="sm",
                       className="ms-auto", n_clicks=0),
        ], style={"display": "flex", "alignItems": "center", "marginBottom": "16px"}),

        section("Catálogo", html.Div(id="svc-table"), color=GREEN),

        dbc.Modal([
            dbc.ModalHeader(dbc.ModalTitle("Adicionar Serviço", id="svc-modal-title")),
            dbc.ModalBody([
                dbc.Label("Nome", style={"fontSize": "12px"}),
                dbc.Input(id="svc-name", className="mb-2"),
                dbc.Label("Preço (R$)", style={"fontSize": "12px"}),
                dbc.Input(id="svc-price", type="number", step=0.01, className="mb-2"),
                dbc.Label("Descrição", style={"fontSize": "12px"}),
                dbc.Textarea(id="svc-description"),
            ]),
            dbc.ModalFooter([
                dbc.Button("Cancelar", id="svc-cancel", color="secondary", n_clicks=0),
                dbc.Button("Salvar", id="svc-save", color="primary", n_clicks=0),
            ]),
        ], id="svc-modal", is_open=False),
        dcc.Store(id="svc-editing-id"),
        dcc.Store(id="svc-pending-delete"),
        dcc.ConfirmDialog(id="svc-confirm-delete",
                          message="Tem certeza que deseja excluir este serviço?"),
        html.Div(id="svc-toast"),
    ])
