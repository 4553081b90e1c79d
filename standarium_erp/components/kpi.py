"""KPI card builders using dash-bootstrap-components."""
from dash import html
import dash_bootstrap_components as dbc
from standarium_erp.theme import *


def kpi_card(label, value, color, subtitle="", card_id=None):
    """KPI card with colored top border; ``card_id`` tags the value for callbacks."""
    value_props = {"id": card_id} if card_id else {}
    body_children = [
        html.Div(label, className="kpi-label"),
        html.Div(value, className="kpi-value", style={"color": color}, **value_props),
    ]
    if subtitle:
        body_children.append(html.Div(subtitle, className="kpi-subtitle"))
    return dbc.Card(
        dbc.CardBody(body_children, style={"padding": "14px", "textAlign": "center"}),
        style={"borderTop": f"3px solid {color}", "flex": "1", "minWidth": "150px"},
        className="kpi-card-top",
    )


def kpi_row(cards):
    return html.Div(cards, style={"display": "flex", "gap": "12px", "flexWrap": "wrap",
                                  "marginBottom": "16px"})
