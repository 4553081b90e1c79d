"""Reusable card/section builders."""
from dash import html
import dash_bootstrap_components as dbc
from standarium_erp.theme import *


def section(title, children, color=SKY, actions=None):
    """Titled section card with colored top border; ``actions`` sit at the right of the header."""
    header = [html.Span(title)]
    if actions:
        header.append(html.Div(actions, className="ms-auto", style={"display": "flex", "gap": "8px"}))
    return dbc.Card([
        dbc.CardHeader(header, style={"color": color, "fontWeight": "bold", "fontSize": "16px",
                                      "borderBottom": f"2px solid {color}",
                                      "backgroundColor": "transparent", "padding": "12px 16px",
                                      "display": "flex", "alignItems": "center"}),
        dbc.CardBody(children, style={"padding": "16px"}),
    ], className="mb-3")


def make_chart(fig, height=360, legend_h=True):
    """Apply consistent styling to a Plotly figure."""
    layout = {**CHART_LAYOUT, "height": height}
    if legend_h:
        layout["legend"] = dict(orientation="h", y=1.12, x=0.5, xanchor="center")
    fig.update_layout(**layout)
    return fig


def toast(message, header, icon="success"):
    return dbc.Toast(message, header=header, icon=icon, duration=3000, style=TOAST_STYLE)


def empty_state(message):
    return html.P(message, style={"color": GRAY, "textAlign": "center", "padding": "40px"})
