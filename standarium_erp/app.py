"""
Standarium ERP: inventory, sales and services dashboard.
Run:  python -m standarium_erp.app
Open: http://127.0.0.1:8070
"""

import logging
import os

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc
from flask import jsonify

from standarium_erp.config import configure_logging, load_settings
from standarium_erp.data_store import COLLECTIONS
from standarium_erp.pages import login
from standarium_erp.session import build_session

logger = logging.getLogger("standarium.app")

# ── Sidebar navigation ──────────────────────────────────────────────────────
NAV_ITEMS = [
    {"label": "Dashboard",  "icon": "\U0001f4ca", "value": "/"},
    {"label": "Estoque",    "icon": "\U0001f4e6", "value": "/inventory"},
    {"label": "Serviços",   "icon": "\U0001f527", "value": "/services"},
    "---",
    {"label": "Montagem",   "icon": "\U0001f9ee", "value": "/build"},
    {"label": "Relatórios", "icon": "\U0001f4c4", "value": "/reports"},
    "---",
    {"label": "Assistente", "icon": "\U0001f916", "value": "/assistant"},
]


def _build_sidebar():
    nav_links = []
    for item in NAV_ITEMS:
        if item == "---":
            nav_links.append(html.Hr(className="sidebar-divider"))
        else:
            nav_links.append(
                dbc.NavLink(
                    [html.Span(item["icon"], className="nav-icon"), item["label"]],
                    href=item["value"],
                    active="exact",
                )
            )

    return html.Div([
        html.Div([
            html.H4("STANDARIUM"),
            html.Small("ERP de Estoque e Vendas"),
        ], className="sidebar-brand"),

        dbc.Nav(nav_links, vertical=True, pills=True),

        html.Div([
            html.Div(id="sync-status", className="sync-status"),
            dbc.Button("Sair", id="logout-btn", color="secondary", outline=True, size="sm",
                       className="w-100", n_clicks=0),
        ], className="sidebar-footer"),
    ], className="sidebar")


# ── App layout ───────────────────────────────────────────────────────────────
def serve_layout(session):
    return html.Div([
        dcc.Location(id="url", refresh=False),
        dcc.Interval(id="sync-tick", interval=session.settings.refresh_ms),
        dcc.Store(id="auth-state"),
        dcc.Store(id="page-version"),
        dcc.Store(id="chat-history", data=[]),

        html.Div(login.layout(), id="auth-container"),

        html.Div([
            _build_sidebar(),
            html.Div([
                html.Div(id="error-banner"),
                html.Div(id="page-content"),
            ], className="main-content"),
        ], id="app-container", style={"display": "none"}),
    ])


def _register_routes(server, session):
    @server.route("/api/health")
    def health():
        gateway = session.gateway
        return jsonify({
            "status": "ok",
            "backend": "supabase" if session.settings.use_supabase else "local",
            "auth_state": gateway.state,
            "authenticated": gateway.is_authenticated,
            "loaded": sorted(session.loaded),
            "counts": session.store.counts() if gateway.is_authenticated else {c: 0 for c in COLLECTIONS},
        })


def create_app(session):
    app = dash.Dash(
        __name__,
        suppress_callback_exceptions=True,
        external_stylesheets=[
            dbc.themes.DARKLY,
            "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
        ],
        assets_folder=os.path.join(os.path.dirname(__file__), "assets"),
        title="Standarium ERP",
    )
    app.layout = serve_layout(session)
    _register_routes(app.server, session)

    # ── Register callbacks ──────────────────────────────────────────────
    from standarium_erp.callbacks import (
        assistant_cb,
        auth_cb,
        checklist_cb,
        dashboard_cb,
        inventory_cb,
        navigation_cb,
        reports_cb,
        services_cb,
    )
    for module in (navigation_cb, auth_cb, dashboard_cb, inventory_cb, services_cb,
                   checklist_cb, reports_cb, assistant_cb):
        module.register_callbacks(app, session)
    return app


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    session = build_session(settings)
    app = create_app(session)
    logger.info("Standarium ERP on http://127.0.0.1:%d", settings.port)
    try:
        app.run(debug=False, host="0.0.0.0", port=settings.port)
    finally:
        session.close()


# ── Run ──────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    main()
