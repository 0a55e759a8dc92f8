"""Gestión de tokens IAM.

Responsabilidad:
- Obtener un access token a partir de una API key.
- Refrescarlo cuando ha consumido el 80% de su vida útil.
- Pedir uno nuevo si el refresh token tiene más de 7 días.
- Si el usuario aporta su propio access token, usarlo tal cual (no se
  refresca: es responsabilidad del usuario).
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import structlog

from core.config import AppSettings
from core.errors import error_for_status

logger = structlog.get_logger(__name__)

_APIKEY_GRANT = "urn:ibm:params:oauth:grant-type:apikey"
_REFRESH_GRANT = "refresh_token"
_TOKEN_ENDPOINT_AUTH = ("bx", "bx")
_FRACTION_OF_TTL = 0.8
_REFRESH_TOKEN_TTL_SECONDS = 7 * 24 * 3600


class IAMTokenManager:
    """Obtiene y cachea tokens IAM para un servicio."""

    def __init__(
        self,
        *,
        apikey: str | None = None,
        access_token: str | None = None,
        url: str | None = None,
        settings: AppSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self.apikey = apikey
        self.user_access_token = access_token
        self.url = url or self._settings.iam_url
        self._client = client
        self._token_info: dict[str, Any] = {}
        self._lock = asyncio.Lock()

    def set_access_token(self, access_token: str) -> None:
        """Fija un token gestionado por el usuario."""

        self.user_access_token = access_token

    def set_apikey(self, apikey: str) -> None:
        self.apikey = apikey
        self._token_info = {}

    @property
    def token_info(self) -> dict[str, Any]:
        return dict(self._token_info)

    async def get_token(self) -> str:
        """Devuelve un access token válido."""

        if self.user_access_token:
            return self.user_access_token

        async with self._lock:
            if not self._token_info:
                self._save_token_info(await self._request_token())
            elif self._is_token_expired():
                if self._is_refresh_token_expired():
                    self._save_token_info(await self._request_token())
                else:
                    self._save_token_info(await self._refresh_token())
            return str(self._token_info["access_token"])

    async def _request_token(self) -> dict[str, Any]:
        if not self.apikey:
            raise ValueError("an IAM apikey is required to request an access token")
        logger.debug("iam_token_request", url=self.url)
        return await self._post({"grant_type": _APIKEY_GRANT, "apikey": self.apikey, "response_type": "cloud_iam"})

    async def _refresh_token(self) -> dict[str, Any]:
        logger.debug("iam_token_refresh", url=self.url)
        return await self._post({"grant_type": _REFRESH_GRANT, "refresh_token": self._token_info["refresh_token"]})

    async def _post(self, data: dict[str, str]) -> dict[str, Any]:
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
        if self._client is not None:
            response = await self._client.post(self.url, data=data, headers=headers, auth=_TOKEN_ENDPOINT_AUTH)
        else:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self._settings.http_timeout_seconds)) as client:
                response = await client.post(self.url, data=data, headers=headers, auth=_TOKEN_ENDPOINT_AUTH)

        if response.status_code >= 300:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            logger.warning("iam_token_error", status_code=response.status_code)
            raise error_for_status(response.status_code, body, reason=response.reason_phrase, headers=response.headers)
        return response.json()

    def _save_token_info(self, token_info: dict[str, Any]) -> None:
        self._token_info = dict(token_info)

    def _is_token_expired(self) -> bool:
        expires_in = self._token_info.get("expires_in")
        expiration = self._token_info.get("expiration")
        if not isinstance(expires_in, (int, float)) or not isinstance(expiration, (int, float)):
            return True
        refresh_time = expiration - (expires_in * (1.0 - _FRACTION_OF_TTL))
        return refresh_time < time.time()

    def _is_refresh_token_expired(self) -> bool:
        expiration = self._token_info.get("expiration")
        if not isinstance(expiration, (int, float)) or not self._token_info.get("refresh_token"):
            return True
        return expiration + _REFRESH_TOKEN_TTL_SECONDS < time.time()
