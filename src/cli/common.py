"""Utilidades compartidas por los comandos."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, TypeVar

import httpx
import typer
from rich.console import Console
from websockets.exceptions import WebSocketException

from adapters.json_exporter import dumps_json
from core.errors import ServiceResponseError, WatsonError

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def run_async(coro: Awaitable[T]) -> T:
    """Ejecuta una corrutina y traduce los errores del SDK a salidas de la CLI."""

    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except ServiceResponseError as exc:
        err_console.print(f"[red]HTTP {exc.status_code}:[/red] {exc.message}")
        raise typer.Exit(code=1) from exc
    except WatsonError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except (httpx.HTTPError, WebSocketException) as exc:
        err_console.print(f"[red]Connection error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        err_console.print(f"[red]Invalid input:[/red] {exc}")
        raise typer.Exit(code=2) from exc


def print_json(value: Any) -> None:
    typer.echo(dumps_json(value))
