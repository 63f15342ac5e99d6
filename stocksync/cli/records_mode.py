"""Record commands: list, create, update and delete for registered resources."""

from typing import Optional

import typer

from stocksync.auth.session import Session
from stocksync.views.mutations import MutationFlow
from stocksync.views.notifications import Notifier
from stocksync.views.resources import Operation, Resource, get_resource, list_resources, resource_view

from .shared import (
    console,
    exit_if_unavailable,
    find_record,
    logger,
    parse_fields,
    records_table,
    run_with_session,
)


def _resolve(name: str) -> Resource:
    try:
        return get_resource(name)
    except ValueError as e:
        raise typer.BadParameter(f"{e}") from e


def _require(resource: Resource, operation: Operation) -> None:
    if not resource.supports(operation):
        raise typer.BadParameter(f"{resource.name} does not support {operation.value}")


def list_records(
    resource: str = typer.Argument(..., help=f"One of: {', '.join(list_resources())}"),
) -> None:
    """Fetch and print all records of a resource."""
    res = _resolve(resource)
    log = logger.bind(command="list", resource=res.name)

    async def run(session: Session, notifier: Notifier):
        view = resource_view(session, res, notifier)
        await view.refresh()
        await view.close()
        return view

    view = run_with_session(run)
    records = exit_if_unavailable(view)
    if not records:
        console.print(f"[dim]No {res.name} found.[/dim]")
    else:
        console.print(records_table(res, records))
    log.info("list.complete", count=len(records or []))


async def _mutate(
    session: Session,
    notifier: Notifier,
    res: Resource,
    operation: Operation,
    record_id: str | None,
    fields: dict,
):
    view = resource_view(session, res, notifier)
    flow = MutationFlow(session, res, view, notifier)
    try:
        if operation is Operation.CREATE:
            flow.open_create()
            return await flow.submit(operation, fields)
        await view.refresh()
        if view.data is None:
            return None
        entity = find_record(res, view.data, record_id)
        if entity is None:
            console.print(f"[red]No {res.label} with id {record_id}.[/red]")
            return None
        if operation is Operation.DELETE:
            flow.open_delete(entity)
            return await flow.submit(operation)
        flow.open_edit(entity)
        merged = {**entity.model_dump(exclude_none=True), **fields}
        return await flow.submit(operation, merged)
    finally:
        await view.close()


def _report(outcome) -> None:
    if outcome is None:
        raise typer.Exit(1)
    if outcome.ok:
        return
    if not outcome.failure.notifies:
        console.print(f"[red]{outcome.failure.message}[/red]")
    raise typer.Exit(1)


def create(
    resource: str = typer.Argument(..., help="Resource name"),
    json_data: Optional[str] = typer.Option(None, "--json", "-j", help="Record fields as a JSON object"),
    assignments: Optional[list[str]] = typer.Option(None, "--set", "-s", help="Field as key=value (repeatable)"),
) -> None:
    """Create a record."""
    res = _resolve(resource)
    _require(res, Operation.CREATE)
    fields = parse_fields(json_data, assignments)
    outcome = run_with_session(lambda s, n: _mutate(s, n, res, Operation.CREATE, None, fields))
    _report(outcome)


def update(
    resource: str = typer.Argument(..., help="Resource name"),
    record_id: str = typer.Argument(..., help="Record id"),
    json_data: Optional[str] = typer.Option(None, "--json", "-j", help="Changed fields as a JSON object"),
    assignments: Optional[list[str]] = typer.Option(None, "--set", "-s", help="Field as key=value (repeatable)"),
) -> None:
    """Update a record; unspecified fields keep their current values."""
    res = _resolve(resource)
    _require(res, Operation.UPDATE)
    fields = parse_fields(json_data, assignments)
    outcome = run_with_session(lambda s, n: _mutate(s, n, res, Operation.UPDATE, record_id, fields))
    _report(outcome)


def delete(
    resource: str = typer.Argument(..., help="Resource name"),
    record_id: str = typer.Argument(..., help="Record id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a record (asks for confirmation; this cannot be undone)."""
    res = _resolve(resource)
    _require(res, Operation.DELETE)
    if not yes:
        typer.confirm(f"Permanently delete {res.label} {record_id}?", abort=True)
    outcome = run_with_session(lambda s, n: _mutate(s, n, res, Operation.DELETE, record_id, {}))
    _report(outcome)
