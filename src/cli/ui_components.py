"""Componentes de UI para CLI (Rich).

Mantiene los detalles visuales fuera de los comandos para reutilizar
tablas y paneles.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.assistant import IntentExport, Log, MessageResponse, Workspace
from core.domain.speech import Customization, RecognitionJob, SpeechModel, SpeechResults


def print_banner(console: Console) -> None:
    """Imprime el banner (se omite con `--json`)."""

    title = Text("watson-sdk", style="bold cyan")
    subtitle = Text("Assistant v1 • Speech to Text v1", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_workspaces_table(workspaces: Iterable[Workspace]) -> Table:
    table = Table(title="Workspaces")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Language", style="green")
    table.add_column("Updated", style="dim")
    for ws in workspaces:
        table.add_row(ws.workspace_id, ws.name or "", ws.language or "", ws.updated.isoformat() if ws.updated else "")
    return table


def build_intents_table(intents: Iterable[IntentExport]) -> Table:
    table = Table(title="Intents")
    table.add_column("Intent", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Examples", style="green", justify="right")
    for intent in intents:
        examples = len(intent.examples) if intent.examples is not None else ""
        table.add_row(intent.intent, intent.description or "", str(examples))
    return table


def build_logs_table(logs: Iterable[Log]) -> Table:
    table = Table(title="Conversation logs")
    table.add_column("Timestamp", style="dim", no_wrap=True)
    table.add_column("Input", style="white")
    table.add_column("Top intent", style="cyan")
    table.add_column("Output", style="green")
    for log in logs:
        user_text = log.request.input.text if log.request.input else ""
        top = log.response.top_intent
        table.add_row(
            log.request_timestamp or "",
            user_text or "",
            top.intent if top else "",
            " ".join(log.response.output.text),
        )
    return table


def build_message_panel(response: MessageResponse) -> Panel:
    """Panel con la respuesta de `message`."""

    body = Text()
    output = " ".join(response.output.text).strip()
    body.append((output or "(sin salida)") + "\n\n")
    top = response.top_intent
    if top:
        body.append("Intent: ", style="bold")
        body.append(f"#{top.intent} ({top.confidence:.2f})\n")
    if response.entities:
        body.append("Entities:\n", style="bold")
        for entity in response.entities:
            body.append(f"- @{entity.entity}:{entity.value}\n")
    conversation_id = response.context.conversation_id
    if conversation_id:
        body.append(f"\nconversation_id: {conversation_id}", style="dim")
    return Panel(body, title=Text("Assistant", style="bold yellow"), border_style="yellow")


def build_models_table(models: Iterable[SpeechModel]) -> Table:
    table = Table(title="Speech models")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Language", style="white")
    table.add_column("Rate", style="green", justify="right")
    table.add_column("Custom LM", style="magenta")
    for model in models:
        features = model.supported_features
        custom = "yes" if features and features.custom_language_model else "no"
        table.add_row(model.name, model.language or "", str(model.rate or ""), custom)
    return table


def build_jobs_table(jobs: Iterable[RecognitionJob]) -> Table:
    table = Table(title="Recognition jobs")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Created", style="dim")
    table.add_column("User token", style="magenta")
    for job in jobs:
        table.add_row(
            job.id,
            job.status.value,
            job.created.isoformat() if job.created else "",
            job.user_token or "",
        )
    return table


def build_customizations_table(customizations: Iterable[Customization]) -> Table:
    table = Table(title="Custom language models")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Base model", style="green")
    table.add_column("Status", style="magenta")
    for item in customizations:
        table.add_row(
            item.id,
            item.name or "",
            item.base_model_name or "",
            item.status.value if item.status else "",
        )
    return table


def build_transcript_panel(results: SpeechResults, *, title: str = "Transcript") -> Panel:
    text = results.transcript or "(sin resultados)"
    body = Text(text)
    if results.warnings:
        body.append("\n\n")
        for warning in results.warnings:
            body.append(f"! {warning}\n", style="yellow")
    return Panel(body, title=Text(title, style="bold green"), border_style="green")
