"""Reports mode: sales and inventory summaries, with spreadsheet export."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from stocksync.auth.session import Session
from stocksync.reports import export_reports, report_frames, reports_view
from stocksync.views.notifications import Notifier

from .shared import console, exit_if_unavailable, logger, run_with_session


def reports(
    export: Optional[Path] = typer.Option(
        None, "--export", "-o", help="Write all reports to this .xlsx file"
    ),
) -> None:
    """Show top-selling products, products by category, payment methods and user sales."""
    log = logger.bind(command="reports")

    async def run(session: Session, notifier: Notifier):
        view = reports_view(session, notifier)
        await view.refresh()
        await view.close()
        return view

    view = run_with_session(run)
    data = exit_if_unavailable(view)
    for sheet, df in report_frames(data).items():
        table = Table(title=sheet)
        if df.empty:
            console.print(f"[dim]{sheet}: no data[/dim]")
            continue
        for col in df.columns:
            table.add_column(str(col))
        for row in df.itertuples(index=False):
            table.add_row(*(str(v) for v in row))
        console.print(table)
    if export is not None:
        path = export_reports(data, export)
        console.print(f"[green]Wrote {path}[/green]")
        log.info("reports.export_written", path=str(path))
