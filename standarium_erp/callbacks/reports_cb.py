"""Reports page callbacks: preview and CSV / XLSX / PDF export."""
import logging
from datetime import date

from dash import dcc, Input, Output, State, callback_context
from dash.exceptions import PreventUpdate

from standarium_erp.pages.reports import build_print_area, build_table
from standarium_erp.reporting import format_date, get_report_data, report_filename, to_csv, to_xlsx

logger = logging.getLogger("standarium.ui.reports")

PRINT_SCRIPT = """
function(children) {
    if (children) {
        setTimeout(function() { window.print(); }, 300);
    }
    return window.dash_clientside.no_update;
}
"""


def register_callbacks(app, session):
    store = session.store

    @app.callback(
        Output("report-table", "children"),
        Input("page-version", "data"),
        Input("report-type", "value"),
    )
    def render_report(version, report_type):
        rows, headers = get_report_data(report_type, store.get_products())
        return build_table(rows, headers)

    @app.callback(
        Output("report-download", "data"),
        Input("report-export-csv", "n_clicks"),
        Input("report-export-xlsx", "n_clicks"),
        State("report-type", "value"),
        prevent_initial_call=True,
    )
    def export_report(csv_clicks, xlsx_clicks, report_type):
        if not callback_context.triggered or not callback_context.triggered[0].get("value"):
            raise PreventUpdate
        rows, headers = get_report_data(report_type, store.get_products())
        if not headers:
            raise PreventUpdate
        if callback_context.triggered_id == "report-export-xlsx":
            content, ext = to_xlsx(rows, headers), "xlsx"
        else:
            content, ext = to_csv(rows, headers), "csv"
        filename = report_filename(report_type, ext)
        logger.info("Exporting %d row(s) to %s", len(rows), filename)
        return dcc.send_bytes(content, filename)

    @app.callback(
        Output("print-area", "children"),
        Input("report-export-pdf", "n_clicks"),
        State("report-type", "value"),
        prevent_initial_call=True,
    )
    def prepare_print(n_clicks, report_type):
        if not n_clicks:
            raise PreventUpdate
        rows, headers = get_report_data(report_type, store.get_products())
        return build_print_area(report_type, rows, headers, format_date(date.today()))

    app.clientside_callback(
        PRINT_SCRIPT,
        Output("print-done", "data"),
        Input("print-area", "children"),
        prevent_initial_call=True,
    )
