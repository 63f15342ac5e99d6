"""Shared CLI helpers: console, logger, session wiring, notification and table rendering."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from stocksync.api.client import ApiClient
from stocksync.auth.session import Session
from stocksync.auth.token_store import FileCredentialStore
from stocksync.config import SESSION_STORE_PATH
from stocksync.utils.logger import bind_context, clear_context, get_logger
from stocksync.views.notifications import Notification, Notifier
from stocksync.views.resources import Resource
from stocksync.views.state import DataView, Ready, Unavailable

console = Console()
logger = get_logger("stocksync.cli")

T = TypeVar("T")


def print_notification(note: Notification) -> None:
    style = "red" if note.variant == "destructive" else "green"
    console.print(f"[{style}][bold]{note.title}[/bold]: {note.description}[/{style}]")


def make_notifier() -> Notifier:
    return Notifier(sink=print_notification)


def run_with_session(fn: Callable[[Session, Notifier], Awaitable[T]]) -> T:
    """Open a client + file-backed session, run ``fn``, and close the client."""

    async def runner() -> T:
        async with ApiClient() as client:
            session = Session(client, FileCredentialStore(SESSION_STORE_PATH))
            user = session.current_user()
            if user is not None:
                bind_context(user_id=user.id)
            try:
                return await fn(session, make_notifier())
            finally:
                clear_context()

    return asyncio.run(runner())


def parse_fields(raw_json: str | None, assignments: list[str] | None) -> dict[str, Any]:
    """Merge a JSON object and ``key=value`` pairs into one payload (pairs win)."""
    fields: dict[str, Any] = {}
    if raw_json:
        try:
            loaded = json.loads(raw_json)
        except ValueError as e:
            raise typer.BadParameter(f"--json is not valid JSON: {e}") from e
        if not isinstance(loaded, dict):
            raise typer.BadParameter("--json must be a JSON object")
        fields.update(loaded)
    for item in assignments or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"--set expects key=value, got {item!r}")
        fields[key.strip()] = value
    return fields


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, set)):
        return ", ".join(str(v) for v in value)
    return str(value)


def records_table(resource: Resource, records: list[Any], title: str | None = None) -> Table:
    columns = resource.columns or tuple(resource.record_model.model_fields)
    table = Table(title=title or resource.name.replace("-", " ").title())
    for col in columns:
        table.add_column(col, style="cyan" if col == resource.id_field else None)
    for record in records:
        table.add_row(*(_cell(getattr(record, col, None)) for col in columns))
    return table


def exit_if_unavailable(view: DataView) -> Any:
    """Return Ready data, or exit 1 after the failure has been shown."""
    if isinstance(view.state, Ready):
        return view.state.data
    if isinstance(view.state, Unavailable):
        logger.info("cli.view_unavailable", view=view.name, kind=view.state.reason.kind.value)
        if not view.notify_failures:
            console.print(f"[red]{view.state.reason.message}[/red]")
    raise typer.Exit(1)


def find_record(resource: Resource, records: list[Any], record_id: str) -> Any:
    for record in records or []:
        if str(resource.entity_id(record)) == str(record_id):
            return record
    return None
