"""CLI commands: one module per mode (session, dashboard, records, alerts, reports, predict)."""

from typer import Typer

from stocksync.cli import alerts_mode, dashboard_mode, predict_mode, records_mode, reports_mode, session_mode
from stocksync.utils.tracing import init_tracing

init_tracing()

app = Typer(help="StockSync inventory management client")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(session_mode.login)
    app.command()(session_mode.logout)
    app.command()(session_mode.whoami)
    app.command()(dashboard_mode.dashboard)
    app.command(name="list")(records_mode.list_records)
    app.command()(records_mode.create)
    app.command()(records_mode.update)
    app.command()(records_mode.delete)
    app.command()(alerts_mode.alerts)
    app.command(name="add-stock")(alerts_mode.add_stock_command)
    app.command()(reports_mode.reports)
    app.command()(predict_mode.predict)


register_commands()
