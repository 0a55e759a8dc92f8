"""Servicio base compartido por Assistant y Speech to Text.

Responsabilidad:
- Credenciales: basic auth (usuario/password), API key IAM o access token IAM.
- Endpoint configurable y headers por defecto.
- Ejecutar peticiones HTTP y traducir respuestas no exitosas a excepciones.

Nota:
- Un único `httpx.AsyncClient` por servicio; las cookies persisten entre
  llamadas (las sesiones de Speech to Text dependen de ello).
- Usar como `async with` o llamar a `aclose()` al terminar.
"""

from __future__ import annotations

import base64
from typing import Any, Iterable, Mapping

import httpx
import structlog

from adapters.http_client import build_async_client, clean_query, construct_http_url
from adapters.iam_token_manager import IAMTokenManager
from core.config import AppSettings
from core.errors import error_for_status

logger = structlog.get_logger(__name__)

APIKEY_USERNAME = "apikey"


def _has_bad_first_or_last_char(value: str | None) -> bool:
    return value is not None and (value.startswith(("{", '"')) or value.endswith(("}", '"')))


class WatsonService:
    """Base de los clientes de servicio."""

    def __init__(
        self,
        service_name: str,
        default_url: str,
        *,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        iam_apikey: str | None = None,
        iam_access_token: str | None = None,
        iam_url: str | None = None,
        settings: AppSettings | None = None,
        default_headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.service_name = service_name
        self._settings = settings or AppSettings()
        self.url = (url or default_url).rstrip("/")
        self.default_headers: dict[str, str] = dict(default_headers or {})
        self.username: str | None = None
        self.password: str | None = None
        self.token_manager: IAMTokenManager | None = None
        self._iam_url = iam_url
        self._client = client
        self._owns_client = client is None

        # "apikey" como usuario significa que el password es una API key IAM.
        if username == APIKEY_USERNAME and not iam_apikey:
            iam_apikey, username, password = password, None, None

        if iam_apikey or iam_access_token:
            self.set_iam_credentials(apikey=iam_apikey, access_token=iam_access_token, url=iam_url)
        elif username is not None and password is not None:
            self.set_username_and_password(username, password)
        else:
            raise ValueError(
                f"credentials are required for '{service_name}': "
                "provide iam_apikey, iam_access_token or username and password"
            )

    # ------------------------------------------------------------------
    # Configuración
    # ------------------------------------------------------------------

    def set_username_and_password(self, username: str, password: str) -> None:
        if _has_bad_first_or_last_char(username) or _has_bad_first_or_last_char(password):
            raise ValueError(
                "the username and password shouldn't start or end with curly brackets or quotes; "
                "remove any surrounding {, }, or \" characters"
            )
        if username == APIKEY_USERNAME:
            self.set_iam_credentials(apikey=password)
            return
        self.username = username
        self.password = password
        self.token_manager = None

    def set_iam_credentials(
        self,
        *,
        apikey: str | None = None,
        access_token: str | None = None,
        url: str | None = None,
    ) -> None:
        if _has_bad_first_or_last_char(apikey):
            raise ValueError(
                "the apikey shouldn't start or end with curly brackets or quotes; "
                "remove any surrounding {, }, or \" characters"
            )
        self.token_manager = IAMTokenManager(
            apikey=apikey,
            access_token=access_token,
            url=url or self._iam_url,
            settings=self._settings,
            client=self._client,
        )
        self.username = None
        self.password = None

    def set_iam_access_token(self, access_token: str) -> None:
        if self.token_manager is None:
            self.set_iam_credentials(access_token=access_token)
        else:
            self.token_manager.set_access_token(access_token)

    def set_endpoint(self, url: str) -> None:
        self.url = url.rstrip("/")

    def set_default_headers(self, headers: dict[str, str]) -> None:
        self.default_headers = dict(headers)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_async_client(self._settings)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "WatsonService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Peticiones
    # ------------------------------------------------------------------

    async def authorization_header(self) -> dict[str, str]:
        """Header `Authorization` según las credenciales configuradas."""

        if self.token_manager is not None:
            token = await self.token_manager.get_token()
            return {"Authorization": f"Bearer {token}"}
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return {"Authorization": "Basic " + base64.b64encode(raw).decode("ascii")}

    def build_url(self, path_segments: Iterable[str], path_parameters: Iterable[str] | None = None) -> str:
        return construct_http_url(self.url, path_segments, path_parameters)

    async def request(
        self,
        method: str,
        path_segments: Iterable[str],
        path_parameters: Iterable[str] | None = None,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: bytes | str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Ejecuta una petición y devuelve el JSON decodificado (o `None`).

        Lanza una subclase de `ServiceResponseError` si el status >= 300.
        """

        url = self.build_url(path_segments, path_parameters)
        request_headers: dict[str, str] = dict(self.default_headers)
        if headers:
            request_headers.update(headers)
        request_headers.update(await self.authorization_header())

        kwargs: dict[str, Any] = {"params": clean_query(params), "headers": request_headers}
        if json is not None:
            kwargs["json"] = json
        elif content is not None:
            kwargs["content"] = content

        logger.debug("watson_request", service=self.service_name, method=method, url=url)
        response = await self.client.request(method, url, **kwargs)
        logger.debug("watson_response", service=self.service_name, url=url, status_code=response.status_code)

        if response.status_code >= 300:
            body = _decode_body(response)
            logger.warning(
                "watson_error",
                service=self.service_name,
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise error_for_status(response.status_code, body, reason=response.reason_phrase, headers=response.headers)

        return _decode_body(response)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
