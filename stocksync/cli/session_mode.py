"""Login / logout / whoami: manage the stored bearer credential."""

import typer

from stocksync.auth.session import Session
from stocksync.views.notifications import Notifier

from .shared import console, logger, run_with_session


def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Account password"),
) -> None:
    """Sign in and store the bearer token for later commands."""
    log = logger.bind(command="login")

    async def run(session: Session, notifier: Notifier):
        return await session.login(email, password)

    result = run_with_session(run)
    if not result.ok:
        console.print(f"[red][bold]Login Failed[/bold]: {result.message}[/red]")
        log.info("login.failed")
        raise typer.Exit(1)
    name = result.user.fullName if result.user else email
    console.print(f"[green]Login Successful. Signed in as {name}.[/green]")
    log.info("login.ok")


def logout() -> None:
    """Remove the stored token and profile."""

    async def run(session: Session, notifier: Notifier):
        session.logout()

    run_with_session(run)
    console.print("[green]Logged out.[/green]")


def whoami() -> None:
    """Show the signed-in user from local storage."""

    async def run(session: Session, notifier: Notifier):
        return session.is_authenticated, session.current_user()

    authenticated, user = run_with_session(run)
    if not authenticated:
        console.print("[yellow]Not logged in.[/yellow]")
        raise typer.Exit(1)
    if user is None:
        console.print("Logged in (no stored profile).")
        return
    roles = ", ".join(user.roles) or "-"
    console.print(f"[bold]{user.fullName}[/bold] <{user.email}>  roles: {roles}")
