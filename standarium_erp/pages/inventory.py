"""Inventory page: filters, KPI strip, product table, product and sale modals."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from standarium_erp.theme import *
from standarium_erp.components.kpi import kpi_card, kpi_row
from standarium_erp.components.cards import section, empty_state
from standarium_erp.components.tables import status_badge, action_button, money_cell
from standarium_erp.metrics import STATUS_FILTER_ALL, STATUS_FILTER_CONSUMPTION, SORT_BY_DATE
from standarium_erp.models import (
    KIND_FOR_SALE,
    PAYMENT_METHODS,
    STATUS_IN_STOCK,
    STATUS_IN_TRANSIT,
    STATUS_SOLD,
)
from standarium_erp.reporting import format_currency, format_date

STATUS_FILTER_OPTIONS = [
    {"label": "Todos", "value": STATUS_FILTER_ALL},
    {"label": "Em Estoque", "value": STATUS_IN_STOCK},
    {"label": "Em Trânsito", "value": STATUS_IN_TRANSIT},
    {"label": "Vendidos", "value": STATUS_SOLD},
    {"label": "Consumo", "value": STATUS_FILTER_CONSUMPTION},
]
SORT_OPTIONS = [
    {"label": "Data de compra", "value": SORT_BY_DATE},
    {"label": "Custo unitário", "value": "cost"},
]
ORDER_OPTIONS = [
    {"label": "Decrescente", "value": "desc"},
    {"label": "Crescente", "value": "asc"},
]
KIND_OPTIONS = [{"label": v, "value": k} for k, v in KIND_LABELS.items()]
FOR_SALE_STATUS_OPTIONS = [
    {"label": STATUS_LABELS[s], "value": s} for s in (STATUS_IN_STOCK, STATUS_IN_TRANSIT, STATUS_SOLD)
]
METHOD_OPTIONS = [{"label": m, "value": m} for m in PAYMENT_METHODS]


def build_kpis(kpis):
    return kpi_row([
        kpi_card("Em Estoque", str(kpis["in_stock"]), SKY),
        kpi_card("Em Trânsito", str(kpis["in_transit"]), YELLOW),
        kpi_card("Vendidos", str(kpis["sold"]), GREEN),
        kpi_card("Consumo", str(kpis["consumption"]), PURPLE),
    ])


def _product_row(p):
    actions = [action_button("Editar", "inv-edit", p.id),
               action_button("Excluir", "inv-delete", p.id, color="danger")]
    if p.is_for_sale and p.status == STATUS_IN_STOCK:
        actions.insert(0, action_button("Vender", "inv-sell", p.id, color="success"))
    sub = [html.Span(KIND_LABELS.get(p.kind, p.kind), style={"color": GRAY, "fontSize": "11px"})]
    if p.quantity and p.quantity > 1:
        sub.append(html.Span(f" · {p.quantity} un.", style={"color": DARKGRAY, "fontSize": "11px"}))
    return html.Tr([
        html.Td([html.Div(p.name, style={"color": WHITE, "fontSize": "13px", "fontWeight": "600"}),
                 html.Div(sub)]),
        html.Td(status_badge(p.status)),
        html.Td(format_date(p.purchase_date), style={"fontSize": "12px"}),
        money_cell(format_currency(p.cost)),
        money_cell(format_currency(p.unit_cost), GRAY),
        money_cell(format_currency(p.suggested_price) if p.is_for_sale else "---", SKY),
        html.Td(actions, style={"whiteSpace": "nowrap", "textAlign": "right"}),
    ], className="stock-row")


def build_table(items):
    if not items:
        return empty_state("Nenhum item encontrado.")
    return dbc.Table([
        html.Thead(html.Tr([
            html.Th("Item"),
            html.Th("Status"),
            html.Th("Compra"),
            html.Th("Custo", style={"textAlign": "right"}),
            html.Th("Custo Unit.", style={"textAlign": "right"}),
            html.Th("Preço Sugerido", style={"textAlign": "right"}),
            html.Th(""),
        ])),
        html.Tbody([_product_row(p) for p in items]),
    ], striped=True, hover=True, size="sm", className="mb-0")


def _field(label, control):
    return html.Div([dbc.Label(label, className="mb-1", style={"fontSize": "12px"}), control],
                    className="mb-2")


def _product_modal():
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle("Adicionar Item", id="prod-modal-title")),
        dbc.ModalBody([
            _field("Nome", dbc.Input(id="prod-name")),
            dbc.Row([
                dbc.Col(_field("Tipo", dbc.Select(id="prod-kind", options=KIND_OPTIONS,
                                                  value=KIND_FOR_SALE))),
                dbc.Col(_field("Quantidade", dbc.Input(id="prod-quantity", type="number", min=1,
                                                       step=1, value=1))),
            ]),
            dbc.Row([
                dbc.Col(_field("Custo total (R$)", dbc.Input(id="prod-cost", type="number",
                                                             step=0.01))),
                dbc.Col(_field("Data de compra", dbc.Input(id="prod-purchase-date", type="date"))),
            ]),
            _field("Forma de pagamento da compra",
                   dbc.Select(id="prod-purchase-method", options=METHOD_OPTIONS, value="Pix")),
            dbc.Collapse([
                dbc.Row([
                    dbc.Col(_field("Preço sugerido (R$)",
                                   dbc.Input(id="prod-suggested-price", type="number", step=0.01))),
                    dbc.Col(_field("Status", dbc.Select(id="prod-status",
                                                        options=FOR_SALE_STATUS_OPTIONS,
                                                        value=STATUS_IN_STOCK))),
                ]),
                dbc.Collapse(dbc.Row([
                    dbc.Col(_field("Valor da venda (R$)",
                                   dbc.Input(id="prod-sale-value", type="number", step=0.01))),
                    dbc.Col(_field("Data da venda", dbc.Input(id="prod-sale-date", type="date"))),
                    dbc.Col(_field("Método", dbc.Select(id="prod-sale-method",
                                                        options=METHOD_OPTIONS, value="Pix"))),
                ]), id="prod-sale-fields", is_open=False),
            ], id="prod-for-sale-fields", is_open=True),
            _field("Descrição", dbc.Textarea(id="prod-description", style={"height": "120px"})),
            dbc.Button("Gerar descrição com IA", id="prod-ai-btn", color="info", outline=True,
                       size="sm", n_clicks=0),
        ]),
        dbc.ModalFooter([
            dbc.Button("Cancelar", id="prod-cancel", color="secondary", n_clicks=0),
            dbc.Button("Salvar", id="prod-save", color="primary", n_clicks=0),
        ]),
    ], id="prod-modal", is_open=False, size="lg")


def _sale_modal():
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle("Registrar Venda")),
        dbc.ModalBody([
            html.Div(id="sale-product-info", className="mb-3", style={"color": GRAY}),
            dbc.Row([
                dbc.Col(_field("Quantidade", dbc.Input(id="sale-quantity", type="number", min=1,
                                                       step=1, value=1))),
                dbc.Col(_field("Preço unitário (R$)", dbc.Input(id="sale-unit-price",
                                                                type="number", step=0.01))),
                dbc.Col(_field("Método", dbc.Select(id="sale-method", options=METHOD_OPTIONS,
                                                    value="Pix"))),
            ]),
            html.Div(id="sale-error", style={"color": RED, "fontSize": "13px"}),
        ]),
        dbc.ModalFooter([
            dbc.Button("Cancelar", id="sale-cancel", color="secondary", n_clicks=0),
            dbc.Button("Confirmar Venda", id="sale-confirm", color="success", n_clicks=0),
        ]),
    ], id="sale-modal", is_open=False)


def layout(session):
    return html.Div([
        html.Div([
            html.H4("Estoque", className="mb-0"),
            dbc.Button("+ Adicionar Item", id="inv-add-btn", color="primary", size="sm",
                       className="ms-auto", n_clicks=0),
        ], style={"display": "flex", "alignItems": "center", "marginBottom": "16px"}),

        html.Div(id="inv-kpis"),

        dbc.Row([
            dbc.Col(dbc.Select(id="inv-status-filter", options=STATUS_FILTER_OPTIONS,
                               value=STATUS_FILTER_ALL), md=3),
            dbc.Col(dbc.Input(id="inv-date-filter", type="date"), md=3),
            dbc.Col(dbc.Select(id="inv-sort-by", options=SORT_OPTIONS, value=SORT_BY_DATE), md=3),
            dbc.Col(dbc.Select(id="inv-sort-order", options=ORDER_OPTIONS, value="desc"), md=3),
        ], className="mb-3 g-2"),

        section("Itens", html.Div(id="inv-table")),

        _product_modal(),
        _sale_modal(),
        dcc.Store(id="prod-editing-id"),
        dcc.Store(id="sale-product-id"),
        dcc.Store(id="inv-pending-delete"),
        dcc.ConfirmDialog(id="inv-confirm-delete",
                          message="Tem certeza que deseja excluir este item?"),
        html.Div(id="inv-toast"),
    ])
