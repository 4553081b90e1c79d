"""Services page callbacks."""
from dash import Input, Output, State, callback_context, no_update, ALL
from dash.exceptions import PreventUpdate

from standarium_erp.components.cards import toast
from standarium_erp.components.tables import triggered_index
from standarium_erp.errors import StandariumError
from standarium_erp.metrics import sort_by_name
from standarium_erp.models import service_from_form
from standarium_erp.pages.services import build_table


def register_callbacks(app, session):
    store = session.store
    gateway = session.gateway

    @app.callback(
        Output("svc-table", "children"),
        Input("page-version", "data"),
    )
    def render_services(version):
        return build_table(sort_by_name(store.get_services()))

    @app.callback(
        Output("svc-modal", "is_open"),
        Output("svc-modal-title", "children"),
        Output("svc-editing-id", "data"),
        Output("svc-name", "value"),
        Output("svc-price", "value"),
        Output("svc-description", "value"),
        Input("svc-add-btn", "n_clicks"),
        Input({"type": "svc-edit", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_service_modal(add_clicks, edit_clicks):
        index = triggered_index(callback_context)
        if index == "svc-add-btn":
            return True, "Adicionar Serviço", None, "", None, ""
        service = next((s for s in store.get_services() if s.id == index), None)
        if service is None:
            raise PreventUpdate
        return True, "Editar Serviço", service.id, service.name, service.price, service.description

    @app.callback(
        Output("svc-modal", "is_open", allow_duplicate=True),
        Input("svc-cancel", "n_clicks"),
        prevent_initial_call=True,
    )
    def close_service_modal(n_clicks):
        if not n_clicks:
            raise PreventUpdate
        return False

    @app.callback(
        Output("svc-modal", "is_open", allow_duplicate=True),
        Output("svc-toast", "children", allow_duplicate=True),
        Input("svc-save", "n_clicks"),
        State("svc-editing-id", "data"),
        State("svc-name", "value"),
        State("svc-price", "value"),
        State("svc-description", "value"),
        running=[(Output("svc-save", "disabled"), True, False)],
        prevent_initial_call=True,
    )
    def save_service(n_clicks, editing_id, name, price, description):
        if not n_clicks:
            raise PreventUpdate
        if not (name or "").strip():
            return no_update, toast("Informe o nome do serviço.", "Serviço", icon="warning")
        data = service_from_form({"name": name, "price": price, "description": description})
        try:
            gateway.save("services", data, editing_id)
        except StandariumError:
            return no_update, no_update
        return False, toast(f"{data['name']} salvo.", "Serviços Atualizados")

    @app.callback(
        Output("svc-pending-delete", "data"),
        Output("svc-confirm-delete", "displayed"),
        Input({"type": "svc-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def ask_delete(delete_clicks):
        return triggered_index(callback_context), True

    @app.callback(
        Output("svc-toast", "children", allow_duplicate=True),
        Input("svc-confirm-delete", "submit_n_clicks"),
        State("svc-pending-delete", "data"),
        prevent_initial_call=True,
    )
    def confirm_delete(submit_clicks, service_id):
        if not submit_clicks or not service_id:
            raise PreventUpdate
        try:
            gateway.remove("services", service_id)
        except StandariumError:
            return no_update
        return toast("Serviço excluído.", "Serviços Atualizados", icon="info")
