"""Stock alert commands: reorder list, badge watch and add-stock."""

import asyncio
from typing import Optional

import typer

from stocksync.auth.session import Session
from stocksync.config import ALERT_POLL_INTERVAL_SECONDS
from stocksync.views.alerts import AlertPoller, add_stock, stock_alert_view
from stocksync.views.mutations import MutationFlow
from stocksync.views.notifications import Notifier
from stocksync.views.resources import STOCK_ALERTS
from stocksync.views.state import Ready, Unavailable, ViewState

from .shared import console, exit_if_unavailable, find_record, logger, records_table, run_with_session

_URGENCY_STYLE = {"HIGH": "bold red", "MEDIUM": "yellow", "LOW": "dim"}


def _print_alerts(alerts) -> None:
    if not alerts:
        console.print("[green]All products are above their reorder points.[/green]")
        return
    table = records_table(STOCK_ALERTS, alerts, title="Reorder Suggestions")
    for row, alert in enumerate(alerts):
        table.rows[row].style = _URGENCY_STYLE.get(alert.urgencyLevel)
    console.print(table)


async def _watch(session: Session, notifier: Notifier, interval: float) -> None:
    view = stock_alert_view(session, notifier, notify_failures=False)

    def on_change(state: ViewState) -> None:
        if isinstance(state, Ready):
            console.print(f"[bold]Stock alerts:[/bold] {len(state.data)}")
        elif isinstance(state, Unavailable):
            console.print(f"[red]Stock alerts unavailable: {state.reason.message}[/red]")

    view.subscribe(on_change)
    poller = AlertPoller(view, interval=interval)
    poller.start()
    try:
        await asyncio.Event().wait()
    finally:
        await poller.stop()
        await view.close()


def alerts(
    watch: bool = typer.Option(False, "--watch", "-w", help="Keep polling the alert count"),
    interval: float = typer.Option(ALERT_POLL_INTERVAL_SECONDS, "--interval", help="Polling interval in seconds"),
) -> None:
    """Show products that reached their reorder point."""
    log = logger.bind(command="alerts", watch=watch)
    if watch:
        console.print(f"[dim]Polling every {interval:g}s. Ctrl+C to stop.[/dim]")
        try:
            run_with_session(lambda s, n: _watch(s, n, interval))
        except KeyboardInterrupt:
            log.info("alerts.watch_stopped")
        return

    async def run(session: Session, notifier: Notifier):
        view = stock_alert_view(session, notifier)
        await view.refresh()
        await view.close()
        return view

    view = run_with_session(run)
    _print_alerts(exit_if_unavailable(view))
    log.info("alerts.complete", count=len(view.data or []))


def add_stock_command(
    product_id: int = typer.Argument(..., help="Product id from the alert list"),
    quantity: Optional[int] = typer.Option(None, "--quantity", "-q", help="Defaults to the suggested order quantity"),
) -> None:
    """Add stock for a product that has a reorder alert."""
    log = logger.bind(command="add-stock", product_id=product_id)

    async def run(session: Session, notifier: Notifier):
        view = stock_alert_view(session, notifier)
        try:
            await view.refresh()
            if view.data is None:
                return None
            alert = find_record(STOCK_ALERTS, view.data, str(product_id))
            if alert is None:
                console.print(f"[red]No stock alert for product {product_id}.[/red]")
                return None
            flow = MutationFlow(session, STOCK_ALERTS, view, notifier)
            return await add_stock(flow, alert, quantity)
        finally:
            await view.close()

    outcome = run_with_session(run)
    if outcome is None:
        raise typer.Exit(1)
    if not outcome.ok:
        if not outcome.failure.notifies:
            console.print(f"[red]{outcome.failure.message}[/red]")
        raise typer.Exit(1)
    log.info("add_stock.complete")
