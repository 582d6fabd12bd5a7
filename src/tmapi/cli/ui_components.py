"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tmapi.core.domain.models import Record

# Columnas preferidas por recurso; el resto de campos se omite en la tabla.
_COLUMNS: dict[str, tuple[str, ...]] = {
    "subscriber": ("id", "email", "firstname", "lastname", "unsubscribed"),
    "list": ("id", "ref", "name", "type", "status"),
    "campaign": ("id", "ref", "name", "date", "status"),
    "activity": ("id", "ref", "name", "type", "approval_status", "status"),
    "template": ("id", "ref", "name", "type", "status"),
}


def print_banner(console: Console, host: str | None) -> None:
    title = Text("tmapi", style="bold cyan")
    subtitle = Text(f"TaguchiMail API • {host or 'no host configured'}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_records_table(resource: str, records: Sequence[Record]) -> Table:
    """Tabla Rich con una fila por registro."""

    columns = _COLUMNS.get(resource, ("id", "ref"))
    table = Table(title=f"{resource} ({len(records)})")
    for i, column in enumerate(columns):
        table.add_column(column, style="cyan" if i == 0 else "white", no_wrap=i == 0)
    for record in records:
        data = record.model_dump(mode="json", by_alias=True)
        table.add_row(*("" if data.get(c) is None else str(data.get(c)) for c in columns))
    return table


def build_record_panel(resource: str, record: Record) -> Panel:
    body = Text()
    for key, value in sorted(record.model_dump(mode="json", by_alias=True).items()):
        if value in (None, [], {}):
            continue
        body.append(f"{key}: ", style="bold")
        body.append(f"{value}\n")
    return Panel(body, title=f"{resource} {record.record_id}", border_style="yellow")
