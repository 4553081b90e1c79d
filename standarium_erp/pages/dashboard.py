"""Dashboard page: KPI strip, revenue vs. cost, sales by method, AI insights."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from standarium_erp.theme import *
from standarium_erp.components.kpi import kpi_card, kpi_row
from standarium_erp.components.cards import section, make_chart, empty_state
from standarium_erp.components.tables import simple_table, money_cell
from standarium_erp.metrics import PERIOD_ALL_TIME
from standarium_erp.reporting import format_currency, format_date

RECENT_SALES = 10


def build_kpis(m):
    return kpi_row([
        kpi_card("Faturamento", format_currency(m.revenue), GREEN),
        kpi_card("Lucro", format_currency(m.profit), GREEN if m.profit >= 0 else RED),
        kpi_card("Itens Vendidos", str(m.sold_count), SKY),
        kpi_card("Valor em Estoque", format_currency(m.stock_value), ORANGE,
                 subtitle=f"Custo: {format_currency(m.stock_cost)}"),
    ])


def build_revenue_cost_figure(df):
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Faturamento", x=list(df.index), y=list(df["revenue"]),
                         marker_color=GREEN))
    fig.add_trace(go.Bar(name="Custos", x=list(df.index), y=list(df["costs"]),
                         marker_color=ORANGE))
    fig.update_layout(title="Faturamento vs. Custos", barmode="group",
                      yaxis_tickprefix="R$ ")
    return make_chart(fig)


def build_method_figure(totals):
    fig = go.Figure()
    if totals:
        fig.add_trace(go.Pie(labels=list(totals.keys()), values=list(totals.values()),
                             hole=0.55, marker=dict(colors=METHOD_COLORS)))
    fig.update_layout(title="Vendas por Método")
    return make_chart(fig)


def build_recent_sales(sales):
    if not sales:
        return empty_state("Nenhuma venda registrada ainda.")
    recent = sorted(sales, key=lambda s: (s.date is not None, s.date), reverse=True)[:RECENT_SALES]
    rows = [
        [format_date(s.date), s.product_name, str(s.quantity), money_cell(format_currency(s.total)),
         money_cell(format_currency(s.profit), GREEN if s.profit >= 0 else RED), s.method]
        for s in recent
    ]
    return simple_table(["Data", "Produto", "Qtd", "Total", "Lucro", "Método"], rows,
                        right_align=("Total", "Lucro"))


def layout(session):
    return html.Div([
        html.Div([
            html.H4("Dashboard", className="mb-0"),
            dbc.Select(id="dash-period", options=PERIOD_OPTIONS, value=PERIOD_ALL_TIME,
                       style={"maxWidth": "220px"}, className="ms-auto"),
        ], style={"display": "flex", "alignItems": "center", "marginBottom": "16px"}),

        html.Div(id="dash-kpis"),

        dbc.Row([
            dbc.Col(dbc.Card(dcc.Graph(id="dash-revenue-cost", config={"displayModeBar": False})),
                    md=8),
            dbc.Col(dbc.Card(dcc.Graph(id="dash-methods", config={"displayModeBar": False})),
                    md=4),
        ], className="mb-3"),

        section("Análise com IA", [
            html.P("Gere uma análise do período selecionado com sugestões práticas.",
                   style={"color": GRAY}),
            html.Div(id="dash-insights"),
        ], color=PURPLE, actions=[
            dbc.Button("Gerar Análise", id="dash-insights-btn", color="info", size="sm", n_clicks=0),
        ]),

        section("Vendas Recentes", html.Div(id="dash-recent-sales"), color=GREEN),
    ])
