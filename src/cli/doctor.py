"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import HttpxTransport
from adapters.silence_repository import SilenceRepository
from core.config import AppSettings, get_user_env_file
from core.errors import SilenceError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_alertmanager(settings: AppSettings) -> tuple[bool, str]:
    repository = SilenceRepository(
        settings.alertmanager_url,
        HttpxTransport(settings),
        settings.timeout_seconds,
    )
    try:
        silences = await repository.query_active({})
    except SilenceError as exc:
        return False, str(exc)
    return True, f"{len(silences)} active silences"


@app.command()
def run() -> None:
    """Show the effective configuration and check Alertmanager reachability."""

    settings = AppSettings()

    table = Table(title="am-silence doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Alertmanager URL", "OK", settings.alertmanager_url)
    table.add_row("Timeout", "OK", f"{settings.timeout_seconds:g}s per request")
    table.add_row("Defaults", "OK", f"creator={settings.creator}, period={settings.silence_period_hours}h")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok, detail = asyncio.run(_check_alertmanager(settings))
    table.add_row("Silences API", "OK" if ok else "FAIL", detail)

    _console.print(table)
    if not ok:
        raise typer.Exit(code=1)

