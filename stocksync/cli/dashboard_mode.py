"""Dashboard mode: headline stat cards."""

from rich.table import Table

from stocksync.auth.session import Session
from stocksync.views.dashboard import Dashboard
from stocksync.views.notifications import Notifier

from .shared import console, logger, run_with_session


def dashboard() -> None:
    """Show total categories, products, users, stock alerts and monthly revenue."""
    log = logger.bind(command="dashboard")

    async def run(session: Session, notifier: Notifier):
        board = Dashboard(session, notifier=notifier)
        try:
            return await board.refresh()
        finally:
            await board.close()

    values = run_with_session(run)
    table = Table(title="Dashboard")
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")
    for title, value in values.items():
        table.add_row(title, value)
    console.print(table)
    log.info("dashboard.complete", unavailable=sum(1 for v in values.values() if v == "N/A"))
