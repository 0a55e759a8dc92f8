"""Excepciones del SDK.

Los errores remotos se exponen tal como los devuelve el proveedor: código
HTTP + mensaje extraído del cuerpo JSON. No hay reintentos ni recuperación
local.
"""

from __future__ import annotations

from typing import Any, Mapping


class WatsonError(Exception):
    """Base de todas las excepciones del SDK."""


class ServiceResponseError(WatsonError):
    """Respuesta HTTP no exitosa (status >= 300)."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        self.headers = dict(headers or {})
        super().__init__(f"Error: {message}, Code: {status_code}")


class BadRequestError(ServiceResponseError):
    pass


class UnauthorizedError(ServiceResponseError):
    pass


class ForbiddenError(ServiceResponseError):
    pass


class NotFoundError(ServiceResponseError):
    pass


class ConflictError(ServiceResponseError):
    pass


class RequestTooLargeError(ServiceResponseError):
    pass


class UnsupportedMediaTypeError(ServiceResponseError):
    pass


class TooManyRequestsError(ServiceResponseError):
    pass


class InternalServerError(ServiceResponseError):
    pass


class ServiceUnavailableError(ServiceResponseError):
    pass


_STATUS_ERRORS: dict[int, type[ServiceResponseError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    413: RequestTooLargeError,
    415: UnsupportedMediaTypeError,
    429: TooManyRequestsError,
    500: InternalServerError,
    503: ServiceUnavailableError,
}


class RecognitionError(WatsonError):
    """Error informado por el servidor dentro de una sesión WebSocket."""


def extract_error_message(body: Any, default: str) -> str:
    """Obtiene el mensaje de error del cuerpo JSON del proveedor.

    Orden: `error` (texto u objeto con `message`), `message`, `errorMessage`,
    `errors[0].message`, `description`.
    """

    if not isinstance(body, dict):
        return default

    error = body.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]

    for key in ("message", "errorMessage"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value

    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        value = errors[0].get("message")
        if isinstance(value, str) and value:
            return value

    description = body.get("description")
    if isinstance(description, str) and description:
        return description
    return default


def error_for_status(
    status_code: int,
    body: Any,
    *,
    reason: str = "",
    headers: Mapping[str, str] | None = None,
) -> ServiceResponseError:
    """Construye la excepción adecuada para un status HTTP."""

    message = extract_error_message(body, reason or f"HTTP {status_code}")
    cls = _STATUS_ERRORS.get(status_code, ServiceResponseError)
    return cls(status_code, message, body=body, headers=headers)
