"""Callboard CLI - run a push sync or a conflict report from the shell."""

import asyncio
import json
import logging
import uuid
from typing import Any

import typer
from rich.console import Console

from .config import settings

app = typer.Typer(
    name="callboard",
    help="Callboard - theatre scheduling sync and conflict tools",
    no_args_is_help=True,
)
console = Console()


class ConsoleProgressSink:
    """Prints progress events as they arrive."""

    def __init__(self, out: Console = console):
        self.out = out
        self.last: dict[str, Any] | None = None

    async def emit(self, event: dict[str, Any]) -> None:
        self.last = event
        if event["type"] == "progress":
            self.out.print(f"[cyan][{event['current']}/{event['total']}][/cyan] {event['message']}")
        elif event["type"] == "complete":
            style = "yellow" if event["errors"] else "green"
            self.out.print(
                f"[{style}]Sync complete:[/{style}] {event['synced']} categories, "
                f"{event['errors']} errors"
            )
        else:
            self.out.print(f"[red]Error:[/red] {event['message']}")

    async def close(self) -> None:
        pass


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _parse_uuid(value: str, label: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        console.print(f"[red]Invalid {label}:[/red] {value}")
        raise typer.Exit(1)


@app.command("sync")
def sync(
    user_id: str = typer.Argument(..., help="Profile id of the user to sync"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Push the user's events to their Google calendars."""
    _configure_logging(verbose)
    uid = _parse_uuid(user_id, "user id")

    from .database import async_session_factory
    from .deps import get_calendar_client, get_oauth_client
    from .sync.push_sync import PushSyncEngine

    sink = ConsoleProgressSink()

    async def _run():
        async with async_session_factory() as db:
            engine = PushSyncEngine(db, get_calendar_client(), get_oauth_client())
            return await engine.run(uid, sink)

    summary = asyncio.run(_run())
    if summary is None or summary.errors:
        raise typer.Exit(1)


@app.command("conflicts")
def conflicts(
    rehearsal_event_id: str = typer.Argument(..., help="Rehearsal event id"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Print the conflict report for a rehearsal event's agenda."""
    _configure_logging(verbose)
    event_id = _parse_uuid(rehearsal_event_id, "rehearsal event id")

    from .database import async_session_factory
    from .services import conflict_svc

    async def _report():
        async with async_session_factory() as db:
            return await conflict_svc.rehearsal_event_conflicts(db, event_id)

    report = asyncio.run(_report())
    if report is None:
        console.print("[red]Rehearsal event not found[/red]")
        raise typer.Exit(1)
    console.print_json(json.dumps(report, default=str))


if __name__ == "__main__":
    app()
