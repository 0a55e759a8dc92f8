"""Comandos `watson-sdk assistant ...`."""

from __future__ import annotations

from pathlib import Path

import typer

from adapters.assistant import AssistantV1
from adapters.json_exporter import export_json
from cli.common import console, print_json, run_async
from cli.ui_components import (
    build_intents_table,
    build_logs_table,
    build_message_panel,
    build_workspaces_table,
)
from core.domain.assistant import Context

app = typer.Typer(no_args_is_help=True, help="Watson Assistant v1.")

_JSON = typer.Option(False, "--json", help="Salida JSON en lugar de tablas.")


@app.command()
def workspaces(
    limit: int | None = typer.Option(None, "--limit", min=1, help="Tamaño de página."),
    all_pages: bool = typer.Option(False, "--all", help="Recorre todas las páginas."),
    as_json: bool = _JSON,
) -> None:
    """Lista los workspaces de la instancia."""

    async def _run():
        async with AssistantV1() as service:
            if all_pages:
                return [ws async for ws in service.iter_workspaces(page_limit=limit)]
            return (await service.list_workspaces(page_limit=limit)).workspaces

    items = run_async(_run())
    if as_json:
        print_json(items)
        return
    console.print(build_workspaces_table(items))


@app.command()
def workspace(
    workspace_id: str = typer.Argument(..., help="ID del workspace."),
    export: bool = typer.Option(False, "--export", help="Incluye intents, entities y nodos."),
    output: Path | None = typer.Option(None, "--output", "-o", dir_okay=False, help="Guarda el JSON en un fichero."),
) -> None:
    """Muestra un workspace (siempre en JSON)."""

    async def _run():
        async with AssistantV1() as service:
            return await service.get_workspace(workspace_id, export=export or None)

    result = run_async(_run())
    if output is not None:
        path = export_json(result, output_path=output)
        console.print(f"[green]Saved workspace to:[/green] {path}")
        return
    print_json(result)


@app.command()
def message(
    workspace_id: str = typer.Argument(..., help="ID del workspace."),
    text: str = typer.Argument(..., help="Texto del usuario."),
    conversation_id: str | None = typer.Option(None, "--conversation-id", help="Continúa una conversación."),
    as_json: bool = _JSON,
) -> None:
    """Envía un mensaje al workspace y muestra la respuesta."""

    async def _run():
        async with AssistantV1() as service:
            context = Context(conversation_id=conversation_id) if conversation_id else None
            return await service.message(workspace_id, input=text, context=context)

    response = run_async(_run())
    if as_json:
        print_json(response)
        return
    console.print(build_message_panel(response))


@app.command()
def intents(
    workspace_id: str = typer.Argument(..., help="ID del workspace."),
    export: bool = typer.Option(False, "--export", help="Incluye los ejemplos."),
    as_json: bool = _JSON,
) -> None:
    """Lista los intents de un workspace."""

    async def _run():
        async with AssistantV1() as service:
            return (await service.list_intents(workspace_id, export=export or None)).intents

    items = run_async(_run())
    if as_json:
        print_json(items)
        return
    console.print(build_intents_table(items))


@app.command()
def logs(
    workspace_id: str = typer.Argument(..., help="ID del workspace."),
    filter: str | None = typer.Option(None, "--filter", help="Filtro de logs del proveedor."),
    limit: int | None = typer.Option(None, "--limit", min=1),
    as_json: bool = _JSON,
) -> None:
    """Lista los logs de conversación de un workspace."""

    async def _run():
        async with AssistantV1() as service:
            return (await service.list_logs(workspace_id, filter=filter, page_limit=limit)).logs

    items = run_async(_run())
    if as_json:
        print_json(items)
        return
    console.print(build_logs_table(items))
