"""Build-cost checklist callbacks: selection, labor, totals, component CRUD."""
from dash import Input, Output, State, callback_context, no_update, ALL
from dash.exceptions import PreventUpdate

from standarium_erp.components.cards import toast
from standarium_erp.components.tables import triggered_index
from standarium_erp.errors import StandariumError
from standarium_erp.metrics import checklist_totals, sort_by_name
from standarium_erp.models import component_from_form, parse_number
from standarium_erp.pages.checklist import build_list, build_totals


def register_callbacks(app, session):
    store = session.store
    gateway = session.gateway

    @app.callback(
        Output("comp-list", "children"),
        Input("page-version", "data"),
        State("comp-checked", "data"),
    )
    def render_checklist(version, checked):
        return build_list(sort_by_name(store.get_components()), checked)

    @app.callback(
        Output("comp-checked", "data"),
        Output("comp-totals", "children"),
        Input({"type": "comp-check", "index": ALL}, "value"),
        Input("comp-labor", "value"),
        State({"type": "comp-check", "index": ALL}, "id"),
    )
    def update_totals(values, labor, ids):
        checked = [i["index"] for i, v in zip(ids, values) if v]
        totals = checklist_totals(store.get_components(), checked, parse_number(labor))
        return checked, build_totals(totals)

    @app.callback(
        Output({"type": "comp-check", "index": ALL}, "value"),
        Input("comp-reset", "n_clicks"),
        State({"type": "comp-check", "index": ALL}, "id"),
        prevent_initial_call=True,
    )
    def reset_selection(n_clicks, ids):
        if not n_clicks:
            raise PreventUpdate
        return [False] * len(ids)

    # ── Component CRUD ────────────────────────────────────────────────────
    @app.callback(
        Output("comp-modal", "is_open"),
        Output("comp-modal-title", "children"),
        Output("comp-editing-id", "data"),
        Output("comp-name", "value"),
        Output("comp-cost", "value"),
        Input("comp-add-btn", "n_clicks"),
        Input({"type": "comp-edit", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_component_modal(add_clicks, edit_clicks):
        index = triggered_index(callback_context)
        if index == "comp-add-btn":
            return True, "Adicionar Componente", None, "", None
        component = next((c for c in store.get_components() if c.id == index), None)
        if component is None:
            raise PreventUpdate
        return True, "Editar Componente", component.id, component.name, component.cost

    @app.callback(
        Output("comp-modal", "is_open", allow_duplicate=True),
        Input("comp-cancel", "n_clicks"),
        prevent_initial_call=True,
    )
    def close_component_modal(n_clicks):
        if not n_clicks:
            raise PreventUpdate
        return False

    @app.callback(
        Output("comp-modal", "is_open", allow_duplicate=True),
        Output("comp-toast", "children", allow_duplicate=True),
        Input("comp-save", "n_clicks"),
        State("comp-editing-id", "data"),
        State("comp-name", "value"),
        State("comp-cost", "value"),
        running=[(Output("comp-save", "disabled"), True, False)],
        prevent_initial_call=True,
    )
    def save_component(n_clicks, editing_id, name, cost):
        if not n_clicks:
            raise PreventUpdate
        if not (name or "").strip():
            return no_update, toast("Informe o nome do componente.", "Componente", icon="warning")
        data = component_from_form({"name": name, "cost": cost})
        try:
            gateway.save("components", data, editing_id)
        except StandariumError:
            return no_update, no_update
        return False, toast(f"{data['name']} salvo.", "Componentes Atualizados")

    @app.callback(
        Output("comp-pending-delete", "data"),
        Output("comp-confirm-delete", "displayed"),
        Input({"type": "comp-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def ask_delete(delete_clicks):
        return triggered_index(callback_context), True

    @app.callback(
        Output("comp-toast", "children", allow_duplicate=True),
        Input("comp-confirm-delete", "submit_n_clicks"),
        State("comp-pending-delete", "data"),
        prevent_initial_call=True,
    )
    def confirm_delete(submit_clicks, component_id):
        if not submit_clicks or not component_id:
            raise PreventUpdate
        try:
            gateway.remove("components", component_id)
        except StandariumError:
            return no_update
        return toast("Componente excluído.", "Componentes Atualizados", icon="info")
