"""Inventory page callbacks: filters, add/edit/delete, AI description, sales."""
import logging

from dash import html, Input, Output, State, callback_context, no_update, ALL
from dash.exceptions import PreventUpdate

from standarium_erp.ai_gateway import BUSY_LABEL, FALLBACK_MESSAGE, description_prompt
from standarium_erp.components.cards import toast
from standarium_erp.components.tables import triggered_index
from standarium_erp.errors import StandariumError
from standarium_erp.metrics import filter_inventory, inventory_kpis, sort_inventory
from standarium_erp.models import (
    KIND_FOR_SALE,
    PAYMENT_METHODS,
    STATUS_IN_STOCK,
    STATUS_SOLD,
    product_from_form,
)
from standarium_erp.pages.inventory import build_kpis, build_table
from standarium_erp.reporting import format_currency

logger = logging.getLogger("standarium.ui.inventory")

PRODUCT_FIELDS = (
    "name", "kind", "cost", "quantity", "suggested_price", "purchase_date",
    "purchase_method", "status", "sale_value", "sale_date", "sale_method", "description",
)
FIELD_IDS = {name: "prod-" + name.replace("_", "-") for name in PRODUCT_FIELDS}

MSG_NAME_FIRST = "Digite o nome do produto primeiro."
MSG_SALE_INVALID = "Informe uma quantidade dentro do estoque e um preço unitário maior que zero."


def _field_values(p=None):
    if p is None:
        return ["", KIND_FOR_SALE, None, 1, None, None, PAYMENT_METHODS[0], STATUS_IN_STOCK,
                None, None, PAYMENT_METHODS[0], ""]
    return [
        p.name,
        p.kind,
        p.cost,
        p.quantity,
        p.suggested_price,
        p.purchase_date.isoformat() if p.purchase_date else None,
        p.purchase_method or PAYMENT_METHODS[0],
        p.status if p.is_for_sale else STATUS_IN_STOCK,
        p.sale_value,
        p.sale_date.isoformat() if p.sale_date else None,
        p.sale_method or PAYMENT_METHODS[0],
        p.description,
    ]


def register_callbacks(app, session):
    store = session.store
    gateway = session.gateway

    # ── Table + KPIs ──────────────────────────────────────────────────────
    @app.callback(
        Output("inv-kpis", "children"),
        Output("inv-table", "children"),
        Input("page-version", "data"),
        Input("inv-status-filter", "value"),
        Input("inv-date-filter", "value"),
        Input("inv-sort-by", "value"),
        Input("inv-sort-order", "value"),
    )
    def render_inventory(version, status_filter, date_filter, sort_by, order):
        products = store.get_products()
        items = sort_inventory(filter_inventory(products, status_filter, date_filter), sort_by, order)
        return build_kpis(inventory_kpis(products)), build_table(items)

    # ── Form field visibility ─────────────────────────────────────────────
    @app.callback(
        Output("prod-for-sale-fields", "is_open"),
        Output("prod-sale-fields", "is_open"),
        Input("prod-kind", "value"),
        Input("prod-status", "value"),
    )
    def toggle_fields(kind, status):
        for_sale = kind == KIND_FOR_SALE
        return for_sale, for_sale and status == STATUS_SOLD

    # ── Add / edit modal ──────────────────────────────────────────────────
    @app.callback(
        Output("prod-modal", "is_open"),
        Output("prod-modal-title", "children"),
        Output("prod-editing-id", "data"),
        *[Output(FIELD_IDS[name], "value") for name in PRODUCT_FIELDS],
        Input("inv-add-btn", "n_clicks"),
        Input({"type": "inv-edit", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_product_modal(add_clicks, edit_clicks):
        index = triggered_index(callback_context)
        if index == "inv-add-btn":
            return (True, "Adicionar Item", None, *_field_values())
        product = session.product(index)
        if product is None:
            raise PreventUpdate
        return (True, "Editar Item", product.id, *_field_values(product))

    @app.callback(
        Output("prod-modal", "is_open", allow_duplicate=True),
        Input("prod-cancel", "n_clicks"),
        prevent_initial_call=True,
    )
    def close_product_modal(n_clicks):
        if not n_clicks:
            raise PreventUpdate
        return False

    @app.callback(
        Output("prod-modal", "is_open", allow_duplicate=True),
        Output("inv-toast", "children", allow_duplicate=True),
        Input("prod-save", "n_clicks"),
        State("prod-editing-id", "data"),
        *[State(FIELD_IDS[name], "value") for name in PRODUCT_FIELDS],
        running=[(Output("prod-save", "disabled"), True, False)],
        prevent_initial_call=True,
    )
    def save_product(n_clicks, editing_id, *values):
        if not n_clicks:
            raise PreventUpdate
        form = dict(zip(PRODUCT_FIELDS, values))
        if not (form["name"] or "").strip():
            return no_update, toast("Informe o nome do item.", "Item", icon="warning")
        try:
            gateway.save("products", product_from_form(form), editing_id)
        except StandariumError:
            # banner already shows the failure; keep the form open with the user's input
            return no_update, no_update
        return False, toast(f"{form['name']} salvo.", "Estoque Atualizado")

    # ── AI description ────────────────────────────────────────────────────
    @app.callback(
        Output("prod-description", "value", allow_duplicate=True),
        Output("inv-toast", "children", allow_duplicate=True),
        Input("prod-ai-btn", "n_clicks"),
        State("prod-name", "value"),
        running=[
            (Output("prod-ai-btn", "disabled"), True, False),
            (Output("prod-ai-btn", "children"), BUSY_LABEL, "Gerar descrição com IA"),
        ],
        prevent_initial_call=True,
    )
    def generate_description(n_clicks, name):
        if not n_clicks:
            raise PreventUpdate
        if not (name or "").strip():
            return no_update, toast(MSG_NAME_FIRST, "IA", icon="warning")
        text = session.ai.generate_text(description_prompt(name.strip()))
        if text is None:
            return no_update, toast(FALLBACK_MESSAGE, "IA", icon="danger")
        return text, no_update

    # ── Delete ────────────────────────────────────────────────────────────
    @app.callback(
        Output("inv-pending-delete", "data"),
        Output("inv-confirm-delete", "displayed"),
        Input({"type": "inv-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def ask_delete(delete_clicks):
        return triggered_index(callback_context), True

    @app.callback(
        Output("inv-toast", "children", allow_duplicate=True),
        Input("inv-confirm-delete", "submit_n_clicks"),
        State("inv-pending-delete", "data"),
        prevent_initial_call=True,
    )
    def confirm_delete(submit_clicks, product_id):
        if not submit_clicks or not product_id:
            raise PreventUpdate
        try:
            gateway.remove("products", product_id)
        except StandariumError:
            return no_update
        return toast("Item excluído.", "Estoque Atualizado", icon="info")

    # ── Sale registration ─────────────────────────────────────────────────
    @app.callback(
        Output("sale-modal", "is_open"),
        Output("sale-product-id", "data"),
        Output("sale-product-info", "children"),
        Output("sale-quantity", "value"),
        Output("sale-quantity", "max"),
        Output("sale-unit-price", "value"),
        Output("sale-error", "children"),
        Input({"type": "inv-sell", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_sale_modal(sell_clicks):
        product = session.product(triggered_index(callback_context))
        if product is None:
            raise PreventUpdate
        info = html.Div([
            html.Strong(product.name),
            html.Div(f"{product.quantity} un. em estoque · custo unitário "
                     f"{format_currency(product.unit_cost)}"),
        ])
        return (True, product.id, info, 1, product.quantity,
                product.suggested_price, "")

    @app.callback(
        Output("sale-modal", "is_open", allow_duplicate=True),
        Input("sale-cancel", "n_clicks"),
        prevent_initial_call=True,
    )
    def close_sale_modal(n_clicks):
        if not n_clicks:
            raise PreventUpdate
        return False

    @app.callback(
        Output("sale-modal", "is_open", allow_duplicate=True),
        Output("sale-error", "children", allow_duplicate=True),
        Output("inv-toast", "children", allow_duplicate=True),
        Input("sale-confirm", "n_clicks"),
        State("sale-product-id", "data"),
        State("sale-quantity", "value"),
        State("sale-unit-price", "value"),
        State("sale-method", "value"),
        running=[(Output("sale-confirm", "disabled"), True, False)],
        prevent_initial_call=True,
    )
    def confirm_sale(n_clicks, product_id, quantity, unit_price, method):
        if not n_clicks:
            raise PreventUpdate
        product = session.product(product_id)
        if product is None:
            return no_update, "Item não encontrado.", no_update
        try:
            gateway.register_sale(product, quantity, unit_price, method)
        except ValueError as e:
            logger.info("Sale rejected: %s", e)
            return no_update, MSG_SALE_INVALID, no_update
        except StandariumError:
            return no_update, no_update, no_update
        return False, "", toast(f"Venda de {product.name} registrada.", "Venda Registrada")
