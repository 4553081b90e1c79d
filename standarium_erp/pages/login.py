"""Login / sign-up screen shown while nobody is signed in."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from standarium_erp.theme import *

MODE_LOGIN = "login"
MODE_SIGNUP = "signup"

MODE_TEXT = {
    MODE_LOGIN: {
        "title": "Bem-vindo de volta!",
        "subtitle": "Faça login para gerenciar seu negócio.",
        "button": "Entrar",
        "toggle": "Não tem uma conta? Cadastre-se",
    },
    MODE_SIGNUP: {
        "title": "Crie sua conta",
        "subtitle": "Comece a organizar seu estoque e suas vendas.",
        "button": "Cadastrar",
        "toggle": "Já tem uma conta? Faça login",
    },
}


def layout():
    text = MODE_TEXT[MODE_LOGIN]
    return html.Div([
        dcc.Store(id="auth-mode", data=MODE_LOGIN),
        dbc.Card(dbc.CardBody([
            html.H4("STANDARIUM", style={"color": SKY, "fontWeight": "bold", "letterSpacing": "2px"}),
            html.H5(text["title"], id="auth-title", className="mt-3"),
            html.P(text["subtitle"], id="auth-subtitle", style={"color": GRAY}),
            dbc.Input(id="auth-email", type="email", placeholder="E-mail", className="mb-2"),
            dbc.Input(id="auth-password", type="password", placeholder="Senha", className="mb-2"),
            html.Div(id="auth-error", style={"color": RED, "fontSize": "13px", "minHeight": "20px"}),
            dbc.Button(text["button"], id="auth-submit", color="primary", className="w-100 mt-2",
                       n_clicks=0),
            dbc.Button(text["toggle"], id="auth-toggle", color="link", className="w-100 mt-2",
                       n_clicks=0),
        ]), style={"maxWidth": "420px", "margin": "10vh auto", "borderTop": f"3px solid {SKY}"}),
    ])
