"""Comandos `watson-sdk stt ...`."""

from __future__ import annotations

from pathlib import Path

import typer

from adapters.speech_to_text import RecognizeOptions, SpeechToTextV1
from cli.common import console, err_console, print_json, run_async
from cli.ui_components import (
    build_customizations_table,
    build_jobs_table,
    build_models_table,
    build_transcript_panel,
)
from core.domain.speech import SpeechResults
from core.interfaces.recognize_callback import BaseRecognizeCallback

app = typer.Typer(no_args_is_help=True, help="Watson Speech to Text v1.")

_JSON = typer.Option(False, "--json", help="Salida JSON en lugar de tablas.")


class _ConsoleCallback(BaseRecognizeCallback):
    """Imprime los resultados finales según llegan por el WebSocket."""

    def __init__(self, *, show_interim: bool) -> None:
        self.show_interim = show_interim
        self.final: list[SpeechResults] = []
        self.error: Exception | None = None

    def on_transcription(self, results: SpeechResults) -> None:
        if results.is_final:
            self.final.append(results)
            console.print(f"[green]>[/green] {results.transcript}")
        elif self.show_interim:
            console.print(f"[dim]… {results.transcript}[/dim]")

    def on_inactivity_timeout(self, error: Exception) -> None:
        err_console.print(f"[yellow]Inactivity timeout:[/yellow] {error}")

    def on_error(self, error: Exception) -> None:
        self.error = error
        err_console.print(f"[red]Recognition error:[/red] {error}")


@app.command()
def models(as_json: bool = _JSON) -> None:
    """Lista los modelos de reconocimiento disponibles."""

    async def _run():
        async with SpeechToTextV1() as service:
            return await service.list_models()

    items = run_async(_run())
    if as_json:
        print_json(items)
        return
    console.print(build_models_table(items))


@app.command()
def recognize(
    audio: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Fichero de audio."),
    model: str | None = typer.Option(None, "--model", help="Modelo (p.ej. en-US_BroadbandModel)."),
    customization_id: str | None = typer.Option(None, "--customization-id"),
    content_type: str | None = typer.Option(None, "--content-type", help="Se deduce de la extensión si se omite."),
    timestamps: bool = typer.Option(False, "--timestamps"),
    speaker_labels: bool = typer.Option(False, "--speaker-labels"),
    stream: bool = typer.Option(False, "--stream", help="Usa el WebSocket en lugar de una petición HTTP."),
    interim: bool = typer.Option(False, "--interim", help="Con --stream, muestra resultados intermedios."),
    as_json: bool = _JSON,
) -> None:
    """Transcribe un fichero de audio."""

    options = RecognizeOptions(
        model=model,
        customization_id=customization_id,
        content_type=content_type,
        timestamps=timestamps or None,
        speaker_labels=speaker_labels or None,
        interim_results=(interim or None) if stream else None,
    )

    if stream:
        callback = _ConsoleCallback(show_interim=interim)

        async def _stream():
            async with SpeechToTextV1() as service:
                await service.recognize_using_websocket(audio, callback, options)

        run_async(_stream())
        if as_json:
            print_json(callback.final)
        if callback.error is not None:
            raise typer.Exit(code=1)
        return

    async def _run():
        async with SpeechToTextV1() as service:
            return await service.recognize(audio, options)

    results = run_async(_run())
    if as_json:
        print_json(results)
        return
    console.print(build_transcript_panel(results, title=audio.name))


@app.command()
def jobs(as_json: bool = _JSON) -> None:
    """Lista los trabajos de reconocimiento asíncrono."""

    async def _run():
        async with SpeechToTextV1() as service:
            return await service.list_recognition_jobs()

    items = run_async(_run())
    if as_json:
        print_json(items)
        return
    console.print(build_jobs_table(items))


@app.command()
def job(
    job_id: str = typer.Argument(..., help="ID del trabajo."),
    wait: bool = typer.Option(False, "--wait", help="Espera a que termine."),
    interval: float = typer.Option(3.0, "--interval", min=0.1, help="Segundos entre consultas con --wait."),
    as_json: bool = _JSON,
) -> None:
    """Muestra el estado (y resultados) de un trabajo."""

    async def _run():
        async with SpeechToTextV1() as service:
            if wait:
                return await service.wait_for_recognition_job(job_id, interval=interval)
            return await service.get_recognition_job(job_id)

    item = run_async(_run())
    if as_json:
        print_json(item)
        return
    console.print(build_jobs_table([item]))
    for results in item.results or []:
        console.print(build_transcript_panel(results))


@app.command(name="submit")
def submit_job(
    audio: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    model: str | None = typer.Option(None, "--model"),
    content_type: str | None = typer.Option(None, "--content-type"),
    callback_url: str | None = typer.Option(None, "--callback-url"),
    user_token: str | None = typer.Option(None, "--user-token"),
    as_json: bool = _JSON,
) -> None:
    """Crea un trabajo de reconocimiento asíncrono."""

    async def _run():
        async with SpeechToTextV1() as service:
            return await service.create_recognition_job(
                audio,
                RecognizeOptions(model=model),
                content_type=content_type,
                callback_url=callback_url,
                user_token=user_token,
            )

    item = run_async(_run())
    if as_json:
        print_json(item)
        return
    console.print(build_jobs_table([item]))


@app.command()
def customizations(
    language: str | None = typer.Option(None, "--language", help="Filtra por idioma (p.ej. en-US)."),
    as_json: bool = _JSON,
) -> None:
    """Lista los modelos de lenguaje personalizados."""

    async def _run():
        async with SpeechToTextV1() as service:
            return await service.list_customizations(language)

    items = run_async(_run())
    if as_json:
        print_json(items)
        return
    console.print(build_customizations_table(items))
