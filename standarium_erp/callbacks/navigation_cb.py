"""Page routing, live refresh tick and the error banner."""
from dash import html, Input, Output, State, callback_context, no_update
import dash_bootstrap_components as dbc

from standarium_erp.theme import *
from standarium_erp.views import page_for_path

SHOW = {}
HIDE = {"display": "none"}


def render_page(page, session):
    if page == "dashboard":
        from standarium_erp.pages.dashboard import layout
    elif page == "inventory":
        from standarium_erp.pages.inventory import layout
    elif page == "services":
        from standarium_erp.pages.services import layout
    elif page == "reports":
        from standarium_erp.pages.reports import layout
    elif page == "checklist":
        from standarium_erp.pages.checklist import layout
    elif page == "assistant":
        from standarium_erp.pages.assistant import layout
    else:
        return html.Div([
            html.H3("404 - Página não encontrada", style={"color": RED}),
        ], style={"padding": "40px"})
    return layout(session)


def register_callbacks(app, session):
    gateway = session.gateway
    views = session.views

    @app.callback(
        Output("page-content", "children"),
        Output("page-version", "data"),
        Output("auth-container", "style"),
        Output("app-container", "style"),
        Input("url", "pathname"),
        Input("auth-state", "data"),
        Input("sync-tick", "n_intervals"),
        State("page-version", "data"),
    )
    def route_page(pathname, auth_state, n_intervals, current):
        page = page_for_path(pathname)
        signed_in = gateway.is_authenticated
        current = current or {}

        if callback_context.triggered_id == "sync-tick" and current.get("signed_in") == signed_in:
            if not signed_in:
                return no_update, no_update, no_update, no_update
            version = views.version(page)
            if current.get("page") == page and current.get("version") == version:
                return no_update, no_update, no_update, no_update
            # only the page's data callbacks redraw; its controls keep their values
            return no_update, {"page": page, "version": version, "signed_in": True}, no_update, no_update

        if not signed_in:
            return [], {"page": page, "version": 0, "signed_in": False}, SHOW, HIDE
        return (render_page(page, session),
                {"page": page, "version": views.version(page), "signed_in": True},
                HIDE, SHOW)

    @app.callback(
        Output("error-banner", "children"),
        Input("sync-tick", "n_intervals"),
    )
    def show_error_banner(n_intervals):
        message = session.banner.take()
        if not message:
            return no_update
        return dbc.Alert(message, color="danger", dismissable=True, duration=8000)

    @app.callback(
        Output("sync-status", "children"),
        Input("sync-tick", "n_intervals"),
        State("sync-status", "children"),
    )
    def show_sync_status(n_intervals, shown):
        text = "Sincronizando..." if session.syncing else ""
        return text if text != (shown or "") else no_update
