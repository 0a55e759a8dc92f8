"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _credentials_status(apikey: str | None, username: str | None, password: str | None) -> tuple[str, str]:
    if apikey:
        return "OK", "IAM apikey"
    if username == "apikey" and password:
        return "OK", "IAM apikey (username 'apikey')"
    if username and password:
        return "OK", "basic auth"
    return "MISSING", "set an apikey or username/password"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    # Cualquier respuesta HTTP (incluido 401) prueba que el endpoint es alcanzable.
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="watson-sdk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    status, detail = _credentials_status(
        settings.assistant_apikey, settings.assistant_username, settings.assistant_password
    )
    table.add_row("Assistant credentials", status, detail)
    if settings.assistant_version:
        table.add_row("Assistant version", "OK", settings.assistant_version)
    else:
        table.add_row("Assistant version", "MISSING", "set WATSON_SDK_ASSISTANT_VERSION (e.g. 2018-07-10)")

    status, detail = _credentials_status(
        settings.speech_to_text_apikey, settings.speech_to_text_username, settings.speech_to_text_password
    )
    table.add_row("Speech to Text credentials", status, detail)

    checks = {
        "IAM endpoint": settings.iam_url,
        "Assistant endpoint": settings.assistant_url,
        "Speech to Text endpoint": settings.speech_to_text_url,
    }

    async def _gather() -> list[tuple[bool, str]]:
        return await asyncio.gather(*(_check_http(url, settings) for url in checks.values()))

    for name, (ok, detail) in zip(checks, asyncio.run(_gather())):
        table.add_row(name, "OK" if ok else "FAIL", detail)

    _console.print(table)
    _console.print(f"\n[dim]User config file:[/dim] {get_user_env_file()}")


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    service = typer.prompt("Service (assistant/stt)", default="assistant", show_default=True).strip().lower()
    prefixes = {"assistant": "WATSON_SDK_ASSISTANT", "stt": "WATSON_SDK_SPEECH_TO_TEXT"}
    prefix = prefixes.get(service)
    if prefix is None:
        raise typer.BadParameter("service must be 'assistant' or 'stt'")

    defaults = AppSettings()
    default_url = defaults.assistant_url if service == "assistant" else defaults.speech_to_text_url

    url = typer.prompt("Service URL", default=default_url, show_default=True).strip()
    apikey = typer.prompt("IAM apikey", hide_input=True, confirmation_prompt=False).strip()
    if not url or not apikey:
        raise typer.BadParameter("url and apikey are required")

    values = {f"{prefix}_URL": url, f"{prefix}_APIKEY": apikey}
    if service == "assistant":
        version = typer.prompt(
            "API version date",
            default=defaults.assistant_version or "2018-07-10",
            show_default=True,
        ).strip()
        values["WATSON_SDK_ASSISTANT_VERSION"] = version

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved {service} config to:[/green] {env_path}")
