"""Dashboard callbacks: period-filtered KPIs and charts, AI insights."""
from dash import html, Input, Output, State
import dash_bootstrap_components as dbc

from standarium_erp.ai_gateway import BUSY_LABEL, FALLBACK_MESSAGE, insights_prompt
from standarium_erp.components.markdown_view import render_markdown
from standarium_erp.metrics import (
    dashboard_metrics,
    filter_sold_in_period,
    monthly_revenue_vs_cost,
    sales_by_method,
)
from standarium_erp.pages.dashboard import (
    build_kpis,
    build_method_figure,
    build_recent_sales,
    build_revenue_cost_figure,
)
from standarium_erp.reporting import format_currency
from standarium_erp.theme import PERIOD_OPTIONS

PERIOD_LABELS = {o["value"]: o["label"] for o in PERIOD_OPTIONS}


def register_callbacks(app, session):
    store = session.store

    @app.callback(
        Output("dash-kpis", "children"),
        Output("dash-revenue-cost", "figure"),
        Output("dash-methods", "figure"),
        Output("dash-recent-sales", "children"),
        Output("dash-insights", "children"),
        Input("page-version", "data"),
        Input("dash-period", "value"),
    )
    def render_dashboard(version, period):
        products = store.get_products()
        metrics = dashboard_metrics(products, period)
        sold = filter_sold_in_period(products, period)
        return (
            build_kpis(metrics),
            build_revenue_cost_figure(monthly_revenue_vs_cost(products)),
            build_method_figure(sales_by_method(sold)),
            build_recent_sales(store.get_sales()),
            [],
        )

    @app.callback(
        Output("dash-insights", "children", allow_duplicate=True),
        Input("dash-insights-btn", "n_clicks"),
        State("dash-period", "value"),
        running=[
            (Output("dash-insights-btn", "disabled"), True, False),
            (Output("dash-insights-btn", "children"), BUSY_LABEL, "Gerar Análise"),
        ],
        prevent_initial_call=True,
    )
    def generate_insights(n_clicks, period):
        metrics = dashboard_metrics(store.get_products(), period)
        prompt = insights_prompt(
            PERIOD_LABELS.get(period, period),
            format_currency(metrics.revenue),
            format_currency(metrics.profit),
            metrics.sold_count,
        )
        text = session.ai.generate_text(prompt)
        if text is None:
            return dbc.Alert(FALLBACK_MESSAGE, color="warning", className="mb-0")
        return html.Div(render_markdown(text), className="insights-box")
