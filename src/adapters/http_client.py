"""Wrapper de httpx.

Estandariza timeouts, headers y construcción de URLs para todos los
servicios. Facilita el testeo: se puede inyectar un cliente con
`httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping
from urllib.parse import quote

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    auth: httpx.Auth | tuple[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults comunes.

    El cliente conserva cookies entre peticiones (necesario para las
    sesiones de Speech to Text).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        auth=auth,
    )


def construct_http_url(
    endpoint: str,
    path_segments: Iterable[str],
    path_parameters: Iterable[str] | None = None,
) -> str:
    """Compone `endpoint/segmento[0]/parametro[0]/segmento[1]/...`.

    Los parámetros se codifican (incluida la barra). Un parámetro vacío o
    `None` se rechaza: la URL resultante apuntaría a otro recurso.
    """

    segments = list(path_segments)
    parameters = list(path_parameters or [])
    if len(parameters) > len(segments):
        raise ValueError("more path parameters than path segments")

    parts: list[str] = [endpoint.rstrip("/")]
    for index, segment in enumerate(segments):
        parts.append(segment.strip("/"))
        if index < len(parameters):
            value = parameters[index]
            if value is None or str(value) == "":
                raise ValueError(f"path parameter for '{segment}' cannot be empty")
            parts.append(quote(str(value), safe=""))
    return "/".join(parts)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    if isinstance(value, (list, tuple, set)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def clean_query(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Elimina `None` y normaliza valores de query (bool, enum, listas)."""

    if not params:
        return {}
    return {key: _query_value(value) for key, value in params.items() if value is not None}
