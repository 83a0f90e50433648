"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar la tabla de silences en `show` y en `doctor`.
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.domain.labels import format_labels
from core.domain.models import Silence


def build_silences_table(silences: Iterable[Silence], *, title: str = "Active silences") -> Table:
    """Tabla Rich con una fila por silence."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Creator", style="white")
    table.add_column("Comment", style="white")
    table.add_column("Start", style="green")
    table.add_column("End", style="yellow")
    table.add_column("Labels", style="magenta")
    for silence in silences:
        table.add_row(
            silence.id,
            silence.created_by,
            silence.comment,
            silence.starts_at,
            silence.ends_at,
            format_labels(silence.matchers),
        )
    return table


def print_failure(console: Console, error: Exception) -> None:
    console.print(f"[red]Operation failed:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
