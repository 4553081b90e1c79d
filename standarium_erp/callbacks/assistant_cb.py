"""Assistant chat callbacks."""
from dash import Input, Output, State, no_update
import dash_bootstrap_components as dbc
from dash.exceptions import PreventUpdate

from standarium_erp.ai_gateway import (
    BUSY_LABEL,
    FALLBACK_MESSAGE,
    ROLE_MODEL,
    ROLE_USER,
    history_entry,
)
from standarium_erp.pages.assistant import build_history


def register_callbacks(app, session):
    @app.callback(
        Output("chat-log", "children"),
        Input("page-version", "data"),
        Input("chat-history", "data"),
    )
    def render_chat(version, history):
        return build_history(history)

    @app.callback(
        Output("chat-history", "data"),
        Output("chat-input", "value"),
        Output("chat-error", "children"),
        Input("chat-send", "n_clicks"),
        Input("chat-input", "n_submit"),
        State("chat-input", "value"),
        State("chat-history", "data"),
        running=[
            (Output("chat-send", "disabled"), True, False),
            (Output("chat-send", "children"), BUSY_LABEL, "Enviar"),
        ],
        prevent_initial_call=True,
    )
    def send_message(n_clicks, n_submit, message, history):
        message = (message or "").strip()
        if not message:
            raise PreventUpdate
        history = list(history or []) + [history_entry(ROLE_USER, message)]
        reply = session.ai.generate_chat(history)
        if reply is None:
            return no_update, no_update, dbc.Alert(FALLBACK_MESSAGE, color="warning", className="mb-0")
        return history + [history_entry(ROLE_MODEL, reply)], "", []
