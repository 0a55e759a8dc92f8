"""Aplicación Typer raíz (`watson-sdk`).

Subcomandos:
- `assistant`: workspaces, intents, logs y mensajes de Watson Assistant.
- `stt`: modelos, reconocimiento, trabajos y modelos personalizados.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import typer

from cli import assistant_commands, doctor, stt_commands
from core.config import AppSettings
from core.logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="watson-sdk",
    no_args_is_help=True,
    help="Cliente de línea de comandos para Watson Assistant y Speech to Text.",
)
app.add_typer(assistant_commands.app, name="assistant")
app.add_typer(stt_commands.app, name="stt")
app.add_typer(doctor.app, name="doctor")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"watson-sdk {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Sobrescribe WATSON_SDK_LOG_LEVEL (DEBUG, INFO, WARNING...).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Muestra la versión y sale.",
    ),
) -> None:
    configure_logging(AppSettings(), level=log_level)


def run() -> None:
    app()
