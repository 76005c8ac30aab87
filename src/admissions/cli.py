"""Command-line interface for the admissions assistant.

Usage:
    python -m admissions validate-config
    python -m admissions ask roster.xlsx "List accepted students"
    python -m admissions priority roster.xlsx
    python -m admissions draft roster.xlsx 3
    python -m admissions chat roster.xlsx
    python -m admissions serve --roster roster.xlsx
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from admissions.config import validate_config_file
from admissions.core.logging import configure_logging

console = Console()

_ROSTER_ARG = click.argument("roster", type=click.Path(exists=False, path_type=Path))
_SHEET_OPTION = click.option("--sheet", default=None, help="Worksheet name (default: first sheet)")


def _print_agent(text: str) -> None:
    console.print("[cyan]agent>[/cyan]", end=" ")
    console.print(text, markup=False, highlight=False)


def _load_session(roster: Path, sheet: str | None):
    """Build a session from config and load the roster, exiting on failure."""
    from admissions.config import get_config
    from admissions.core.errors import ConfigLoadError, ConfigValidationError
    from admissions.engine.session import AdmissionsSession

    try:
        config = get_config()
    except (ConfigLoadError, ConfigValidationError) as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)

    session = AdmissionsSession(config)
    if not session.ingest_file(roster, sheet=sheet):
        console.print(session.messages[-1].text, style="red", markup=False)
        sys.exit(1)
    return session


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
def cli(debug: bool) -> None:
    """EDMO admissions assistant - roster triage and reminder drafting."""
    log_level = "DEBUG" if debug else "WARNING"
    # Human-readable output for CLI, JSON for server
    configure_logging(log_level=log_level, json_output=False)


@cli.command("validate-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Config file to check (default: $ADMISSIONS_CONFIG_PATH or config/config.yaml)",
)
def validate_config(config_path: Path | None) -> None:
    """Check a config file and summarize the settings it yields."""
    from admissions.config import config_path as active_config_path

    target = config_path or active_config_path()
    console.print(f"Validating config: [cyan]{target}[/cyan]", highlight=False)

    is_valid, message = validate_config_file(target)
    marker = "[green]✓[/green]" if is_valid else "[red]✗[/red]"
    console.print(f"\n{marker}", end=" ")
    console.print(message, markup=False, highlight=False)
    sys.exit(0 if is_valid else 1)


@cli.command("ask")
@_ROSTER_ARG
@click.argument("query")
@_SHEET_OPTION
def ask(roster: Path, query: str, sheet: str | None) -> None:
    """Answer one free-text QUERY about the ROSTER."""
    session = _load_session(roster, sheet)
    reply = session.ask(query)
    if reply is None:
        console.print("[yellow]Empty query.[/yellow]")
        sys.exit(1)
    console.print(reply, markup=False, highlight=False)


@cli.command("priority")
@_ROSTER_ARG
@_SHEET_OPTION
def priority(roster: Path, sheet: str | None) -> None:
    """Show applicants ranked by deadline."""
    session = _load_session(roster, sheet)
    cards = session.applicant_cards()

    table = Table(title=f"Priority Applicants ({len(cards)})")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Urgency")
    table.add_column("Deadline")
    table.add_column("Days", justify="right")
    table.add_column("Missing")

    for card in cards:
        colour = "red" if card.urgency == "high" else "yellow"
        table.add_row(
            str(card.applicant.id),
            card.applicant.name,
            f"[{colour}]{card.urgency.upper()}[/{colour}]",
            card.deadline_display,
            str(card.days_left),
            card.missing_display,
        )
    console.print(table)


@cli.command("draft")
@_ROSTER_ARG
@click.argument("applicant_id", type=int)
@_SHEET_OPTION
def draft(roster: Path, applicant_id: int, sheet: str | None) -> None:
    """Print the reminder email draft for APPLICANT_ID."""
    from admissions.core.errors import ApplicantNotFoundError

    session = _load_session(roster, sheet)
    try:
        email = session.request_draft(applicant_id)
    except ApplicantNotFoundError as e:
        console.print(str(e), style="red", markup=False)
        sys.exit(1)

    console.print(f"To: {email.to}", markup=False, highlight=False)
    console.print(f"Subject: {email.subject}", markup=False, highlight=False)
    console.print()
    console.print(email.body, markup=False, highlight=False)


@cli.command("chat")
@_ROSTER_ARG
@_SHEET_OPTION
def chat(roster: Path, sheet: str | None) -> None:
    """Interactive session over the ROSTER.

    Besides free-text questions: /draft ID, /approve, /discard, /quit.
    """
    from admissions.core.errors import AdmissionsError

    session = _load_session(roster, sheet)
    for message in session.messages:
        _print_agent(message.text)

    while True:
        try:
            line = console.input("[bold]you> [/bold]")
        except (EOFError, KeyboardInterrupt):
            break

        command, _, argument = line.strip().partition(" ")
        try:
            if command == "/quit":
                break
            elif command == "/draft":
                email = session.request_draft(int(argument))
                console.print(
                    f"Subject: {email.subject}\n{email.body}", markup=False, highlight=False
                )
            elif command == "/approve":
                console.print(session.approve_draft(), style="green", markup=False)
            elif command == "/discard":
                session.discard_draft()
                console.print("[dim]Draft discarded.[/dim]")
            else:
                reply = session.ask(line)
                if reply is not None:
                    _print_agent(reply)
        except ValueError:
            console.print("[red]Usage:[/red] /draft <applicant id>")
        except AdmissionsError as e:
            console.print(str(e), style="red", markup=False)

    console.print(f"[dim]Emails sent this session: {session.emails_sent}[/dim]")


@cli.command("serve")
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (default: localhost only for security)",
)
@click.option("--port", default=8000, type=int, help="Port to bind to")
@click.option(
    "--roster",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Roster file to load on startup (overrides roster.path in config)",
)
def serve(host: str, port: int, roster: Path | None) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from admissions.web.app import create_app

    if host == "0.0.0.0":  # noqa: S104
        console.print(
            "[yellow]Warning:[/yellow] Binding to 0.0.0.0 exposes the server to the network.\n"
            "This app has no authentication. Use 127.0.0.1 for local-only access."
        )

    from admissions.config import get_config
    from admissions.core.errors import ConfigLoadError, ConfigValidationError

    try:
        logging_config = get_config().logging
    except (ConfigLoadError, ConfigValidationError) as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)

    configure_logging(log_level=logging_config.level, json_output=logging_config.json_output)

    app = create_app(roster_path=roster)
    console.print(f"Starting server on [cyan]http://{host}:{port}[/cyan]")
    uvicorn.run(app, host=host, port=port, log_level="info")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
