"""CLI principal (Typer).

Flags compatibles con la herramienta histórica:
`--mode`, `--silence-period`, `--labels`, `--creator`, `--comment`, `--url`,
`--timeout`. Los valores omitidos se toman de `AppSettings` (env/.env).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor
from cli.ui_components import build_silences_table, print_failure
from core.config import AppSettings
from core.domain.models import Silence
from core.errors import SilenceError
from core.services.silence_pipeline import (
    PipelineHooks,
    SilenceRequest,
    execute,
    format_silence_line,
)

__version__ = "1.0"

app = typer.Typer(
    add_completion=False,
    help="Create, show or delete Alertmanager silences by label set.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _say(text: str) -> None:
    _console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"am-silence {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Work mode: create/delete/show silence."),
    silence_period: Optional[int] = typer.Option(
        None, "--silence-period", min=1, help="Period for silenced alerts in hours."
    ),
    labels: str = typer.Option(
        "", "--labels", "-l", help="Comma separated silence matching labels, eg. key1=value1,key2=value2."
    ),
    creator: Optional[str] = typer.Option(None, "--creator", "-c", help="Creator of the silence."),
    comment: Optional[str] = typer.Option(
        None, "--comment", "-C", help="Comment attached to the silence. Recommended to add the ticket."
    ),
    url: Optional[str] = typer.Option(None, "--url", "--URL", "-u", help="Alertmanager URL."),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", min=0.001, help="Alertmanager connection timeout in seconds, per request."
    ),
    table: bool = typer.Option(False, "--table", help="Render show output as a table."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Run one silence operation against Alertmanager."""

    configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    settings = AppSettings()
    request = SilenceRequest.from_settings(
        settings,
        base_url=url,
        timeout_seconds=timeout,
        mode=mode,
        labels=labels,
        silence_period_hours=silence_period,
        creator=creator,
        comment=comment,
    )

    shown: list[Silence] = []
    hooks = PipelineHooks(
        info=_say,
        silence=shown.append if table else lambda silence: _say(format_silence_line(silence)),
    )

    try:
        asyncio.run(execute(request, settings=settings, hooks=hooks))
    except SilenceError as exc:
        print_failure(_console, exc)
        raise typer.Exit(code=1) from exc

    if table:
        _console.print(build_silences_table(shown))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
