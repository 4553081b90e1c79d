"""Reusable table builders."""
from dash import html
from dash.exceptions import PreventUpdate
import dash_bootstrap_components as dbc
from standarium_erp.theme import *


def status_badge(status):
    color = STATUS_COLORS.get(status, GRAY)
    return html.Span(STATUS_LABELS.get(status, status or "---"), style={
        "color": color, "border": f"1px solid {color}", "borderRadius": "10px",
        "padding": "1px 8px", "fontSize": "11px", "whiteSpace": "nowrap",
    })


def action_button(label, kind, index, color="secondary"):
    """Small outline button with a pattern-matching id ``{"type": kind, "index": index}``."""
    return dbc.Button(label, id={"type": kind, "index": index}, color=color,
                      outline=True, size="sm", className="me-1", n_clicks=0)


def money_cell(text, color=WHITE):
    return html.Td(text, style={"fontFamily": "monospace", "textAlign": "right",
                                "fontSize": "12px", "color": color})


def simple_table(headers, rows, right_align=()):
    """Striped dbc table; ``rows`` are lists of cells (strings or html.Td)."""
    head = [html.Th(h, style={"textAlign": "right"}) if h in right_align else html.Th(h) for h in headers]
    body = [html.Tr([c if isinstance(c, html.Td) else html.Td(c) for c in row]) for row in rows]
    return dbc.Table([html.Thead(html.Tr(head)), html.Tbody(body)],
                     striped=True, hover=True, size="sm", className="mb-0")


def triggered_index(ctx):
    """Index of the ``action_button`` that fired, or PreventUpdate when nothing was clicked.

    Pattern-matching inputs also fire when a table re-renders with fresh
    buttons (``n_clicks`` 0 or None); those must not count as clicks.
    """
    if not ctx.triggered or not ctx.triggered[0].get("value"):
        raise PreventUpdate
    tid = ctx.triggered_id
    return tid["index"] if isinstance(tid, dict) else tid
