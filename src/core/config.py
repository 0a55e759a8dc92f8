"""Configuración del SDK.

Centraliza variables de entorno (pydantic-settings) para que los servicios
(Assistant, Speech to Text) y la CLI lean credenciales y endpoints de forma
consistente.

Nota:
- Los argumentos explícitos de cada servicio siempre tienen prioridad sobre
  estos valores.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_IAM_URL = "https://iam.bluemix.net/identity/token"
DEFAULT_ASSISTANT_URL = "https://gateway.watsonplatform.net/assistant/api"
DEFAULT_SPEECH_TO_TEXT_URL = "https://stream.watsonplatform.net/speech-to-text/api"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "watson-cloud-sdk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "watson-cloud-sdk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "watson-cloud-sdk"
    return Path.home() / ".config" / "watson-cloud-sdk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` se ignoran; las claves existentes se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# watson-cloud-sdk user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del SDK.

    Prioridad: variables de entorno, `.env` del proyecto y por último el
    `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="WATSON_SDK_",
        extra="ignore",
        case_sensitive=False,
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request HTTP (segundos).",
    )
    user_agent: str = Field(
        default="watson-cloud-sdk/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    iam_url: str = Field(
        default=DEFAULT_IAM_URL,
        min_length=8,
        description="Endpoint de emisión de tokens IAM.",
    )

    # Assistant v1
    assistant_url: str = Field(
        default=DEFAULT_ASSISTANT_URL,
        min_length=8,
        description="Base URL del servicio Assistant.",
    )
    assistant_version: str | None = Field(
        default=None,
        description="Fecha de versión de la API (p.ej. '2018-07-10').",
    )
    assistant_apikey: str | None = Field(default=None, description="API key IAM para Assistant.")
    assistant_username: str | None = Field(default=None, description="Usuario (basic auth) para Assistant.")
    assistant_password: str | None = Field(default=None, description="Password (basic auth) para Assistant.")

    # Speech to Text v1
    speech_to_text_url: str = Field(
        default=DEFAULT_SPEECH_TO_TEXT_URL,
        min_length=8,
        description="Base URL del servicio Speech to Text.",
    )
    speech_to_text_apikey: str | None = Field(default=None, description="API key IAM para Speech to Text.")
    speech_to_text_username: str | None = Field(default=None, description="Usuario (basic auth) para Speech to Text.")
    speech_to_text_password: str | None = Field(default=None, description="Password (basic auth) para Speech to Text.")

    websocket_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Espera máxima para un reconocimiento por WebSocket (segundos).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )
    log_format: str = Field(
        default="console",
        pattern="^(console|json)$",
        description="Formato de salida de logs: 'console' o 'json'.",
    )
