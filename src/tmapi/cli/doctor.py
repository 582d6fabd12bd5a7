"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from tmapi.cli.ui_components import print_banner
from tmapi.client import TMAPIClient
from tmapi.core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def build_client(settings: AppSettings) -> TMAPIClient:
    return TMAPIClient.from_settings(settings)


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as tm:
            lists = tm.lists.find(limit=1)
        return True, f"{len(lists)} list(s) visible"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console, settings.host)

    table = Table(title="tmapi Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    missing = settings.missing_connection_fields()
    for name in ("host", "organization_id", "username"):
        value = getattr(settings, name)
        table.add_row(name, "OK" if value else "MISSING", value or "-")
    table.add_row("password", "OK" if settings.password else "MISSING", "***" if settings.password else "-")
    table.add_row("timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api = False
    if missing:
        table.add_row("API connectivity", "SKIPPED", "Complete the connection settings first")
    else:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if missing:
        _console.print("\n[yellow]Note:[/yellow] run `tmapi doctor configure` to store credentials.")
    if missing or not ok_api:
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores connection settings in the user config .env)."""

    settings = AppSettings()
    host = typer.prompt("TaguchiMail host", default=settings.host or "", show_default=True).strip()
    organization_id = typer.prompt(
        "Organization ID",
        default=settings.organization_id or "",
        show_default=True,
    ).strip()
    username = typer.prompt("Username (email)", default=settings.username or "", show_default=True).strip()
    password = typer.prompt("Password", hide_input=True, confirmation_prompt=False).strip()

    if not host or not organization_id or not username:
        raise typer.BadParameter("host, organization ID and username are required")

    env_path = write_user_env_vars(
        {
            "TMAPI_HOST": host,
            "TMAPI_ORGANIZATION_ID": organization_id,
            "TMAPI_USERNAME": username,
            "TMAPI_PASSWORD": password or None,
        }
    )

    _console.print(f"[green]Saved connection settings to:[/green] {env_path}")
