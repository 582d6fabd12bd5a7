"""CLI principal (Typer).

Por qué Typer:
- Tipado de argumentos sin boilerplate de argparse.
- Subcomandos (`doctor`) montados como apps independientes.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from tmapi.adapters.json_exporter import export_records_json, records_to_json
from tmapi.cli import doctor
from tmapi.cli.ui_components import build_record_panel, build_records_table
from tmapi.client import TMAPIClient
from tmapi.core.config import AppSettings
from tmapi.core.errors import TMAPIError

app = typer.Typer(no_args_is_help=True, help="TaguchiMail API client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


class ResourceName(str, Enum):
    SUBSCRIBER = "subscriber"
    LIST = "list"
    CAMPAIGN = "campaign"
    ACTIVITY = "activity"
    TEMPLATE = "template"


def _open_client(settings: AppSettings | None = None) -> TMAPIClient:
    settings = settings or AppSettings()
    try:
        return doctor.build_client(settings)
    except ValueError as exc:
        raise typer.BadParameter(f"{exc} (run `tmapi doctor configure`)") from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests (credentials redacted)."),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def find(
    resource: ResourceName = typer.Argument(..., help="Resource to query."),
    query: Optional[list[str]] = typer.Option(
        None, "--query", "-q", help="Predicate `field-operator-value` (repeatable)."
    ),
    sort: str = typer.Option("id", help="Field used to sort the result set."),
    order: str = typer.Option("asc", help="asc | desc"),
    offset: int = typer.Option(0, min=0),
    limit: Optional[int] = typer.Option(None, min=1, help="Defaults to TMAPI_DEFAULT_PAGE_SIZE."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results to a JSON file."),
) -> None:
    """Find records matching the given predicates."""

    settings = AppSettings()
    with _open_client(settings) as tm:
        try:
            records = tm.resource(resource.value).find(
                sort=sort,
                order=order,
                offset=offset,
                limit=limit,
                query=query or [],
            )
        except (TMAPIError, ValueError) as exc:
            _console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    if output is not None:
        export_records_json(records=records, output_path=output)
        _console.print(f"[green]Saved {len(records)} record(s) to:[/green] {output}")
    elif as_json:
        typer.echo(records_to_json(records), nl=False)
    else:
        _console.print(build_records_table(resource.value, records))


@app.command()
def get(
    resource: ResourceName = typer.Argument(..., help="Resource type."),
    record_id: str = typer.Argument(..., help="Record ID."),
    with_content: bool = typer.Option(
        False, "--with-content", help="Include the latest revision (activity/template)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a panel."),
) -> None:
    """Fetch a single record by ID."""

    with _open_client() as tm:
        res = tm.resource(resource.value)
        try:
            if with_content and hasattr(res, "get_with_content"):
                record = res.get_with_content(record_id)
            else:
                record = res.get(record_id)
        except TMAPIError as exc:
            _console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(records_to_json([record]), nl=False)
    else:
        _console.print(build_record_panel(resource.value, record))


@app.command()
def trigger(
    activity_id: str = typer.Argument(..., help="Activity ID to send."),
    subscriber: Optional[list[str]] = typer.Option(None, "--subscriber", "-s", help="Subscriber ID (repeatable)."),
    expression: Optional[str] = typer.Option(None, "--expression", "-e", help="Target expression."),
    content_file: Optional[Path] = typer.Option(
        None, "--content-file", exists=True, dir_okay=False, help="Request content (XML) file."
    ),
    test: bool = typer.Option(False, "--test", help="Send as a test."),
) -> None:
    """Trigger an activity for specific subscribers or a target expression."""

    if bool(subscriber) == bool(expression):
        raise typer.BadParameter("pass either --subscriber or --expression")
    request_content = content_file.read_text(encoding="utf-8") if content_file else None

    with _open_client() as tm:
        try:
            activity = tm.activities.get(activity_id)
            tm.activities.trigger(
                activity,
                subscriber or None,
                expression=expression,
                request_content=request_content,
                test=test,
            )
        except TMAPIError as exc:
            _console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    _console.print(f"[green]Triggered activity {activity.name or activity_id}[/green]")


def run() -> None:
    app()
