"""Login / sign-up form and logout."""
import time

from dash import Input, Output, State, no_update
from dash.exceptions import PreventUpdate

from standarium_erp.errors import AuthenticationError
from standarium_erp.pages.login import MODE_LOGIN, MODE_SIGNUP, MODE_TEXT

MSG_CONFIRM_EMAIL = "Conta criada! Confirme seu e-mail e depois faça login."
MSG_MISSING_FIELDS = "Preencha e-mail e senha."


def register_callbacks(app, session):
    gateway = session.gateway

    @app.callback(
        Output("auth-mode", "data"),
        Output("auth-title", "children"),
        Output("auth-subtitle", "children"),
        Output("auth-submit", "children"),
        Output("auth-toggle", "children"),
        Output("auth-error", "children", allow_duplicate=True),
        Input("auth-toggle", "n_clicks"),
        State("auth-mode", "data"),
        prevent_initial_call=True,
    )
    def toggle_mode(n_clicks, mode):
        mode = MODE_SIGNUP if mode == MODE_LOGIN else MODE_LOGIN
        text = MODE_TEXT[mode]
        return mode, text["title"], text["subtitle"], text["button"], text["toggle"], ""

    @app.callback(
        Output("auth-state", "data", allow_duplicate=True),
        Output("auth-error", "children"),
        Output("auth-password", "value"),
        Input("auth-submit", "n_clicks"),
        State("auth-mode", "data"),
        State("auth-email", "value"),
        State("auth-password", "value"),
        running=[(Output("auth-submit", "disabled"), True, False)],
        prevent_initial_call=True,
    )
    def submit(n_clicks, mode, email, password):
        if not n_clicks:
            raise PreventUpdate
        email = (email or "").strip()
        if not email or not password:
            return no_update, MSG_MISSING_FIELDS, no_update
        try:
            if mode == MODE_SIGNUP:
                if not gateway.sign_up(email, password):
                    return no_update, MSG_CONFIRM_EMAIL, ""
            else:
                gateway.sign_in(email, password)
        except AuthenticationError as e:
            return no_update, e.message, ""
        return {"state": gateway.state, "at": time.time()}, "", ""

    @app.callback(
        Output("auth-state", "data", allow_duplicate=True),
        Input("logout-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def logout(n_clicks):
        if not n_clicks:
            raise PreventUpdate
        gateway.sign_out()
        return {"state": gateway.state, "at": time.time()}
