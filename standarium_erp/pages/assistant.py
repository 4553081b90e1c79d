"""Assistant page: free-form chat with the hosted AI backend."""
from dash import html
import dash_bootstrap_components as dbc

from standarium_erp.theme import *
from standarium_erp.ai_gateway import ROLE_USER
from standarium_erp.components.cards import section
from standarium_erp.components.markdown_view import render_markdown

GREETING = "Olá! Sou seu assistente. Pergunte sobre preços, estoque ou estratégias de venda."


def build_history(history):
    bubbles = [html.Div(render_markdown(GREETING), className="chat-bubble chat-model")]
    for turn in history or []:
        text = " ".join(part.get("text", "") for part in turn.get("parts", []))
        if turn.get("role") == ROLE_USER:
            bubbles.append(html.Div(text, className="chat-bubble chat-user"))
        else:
            bubbles.append(html.Div(render_markdown(text), className="chat-bubble chat-model"))
    return bubbles


def layout(session):
    return html.Div([
        html.H4("Assistente", className="mb-3"),
        section("Conversa", [
            html.Div(id="chat-log", className="chat-log"),
            html.Div(id="chat-error", className="mt-2"),
            dbc.InputGroup([
                dbc.Input(id="chat-input", placeholder="Digite sua pergunta...", debounce=False),
                dbc.Button("Enviar", id="chat-send", color="primary", n_clicks=0),
            ], className="mt-3"),
        ], color=PURPLE),
    ])
