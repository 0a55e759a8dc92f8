# tests/conftest.py
import json
from typing import Any

import httpx
import pytest

from adapters.assistant import AssistantV1
from adapters.speech_to_text import SpeechToTextV1
from core.config import AppSettings

ASSISTANT_PATH = "/assistant/api"
STT_PATH = "/speech-to-text/api"
IAM_PATH = "/identity/token"


class MockWatson:
    """Fake del proveedor sobre `httpx.MockTransport`.

    Las rutas se registran por (método, path). Cada petición recibida queda
    en `requests` para inspeccionarla después.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[httpx.Response]] = {}

    def add(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        status: int = 200,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if json_body is not None:
            response = httpx.Response(status, json=json_body, headers=headers)
        elif text is not None:
            response = httpx.Response(status, text=text, headers=headers)
        else:
            response = httpx.Response(status, headers=headers)
        self._routes.setdefault((method.upper(), path), []).append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": f"no route for {request.method} {request.url.path}"})
        # La última respuesta registrada se repite.
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, assistant_version="2018-07-10")


@pytest.fixture
def mock_api():
    return MockWatson()


@pytest.fixture
def assistant(mock_api, settings):
    return AssistantV1(
        "2018-07-10",
        username="user",
        password="pass",
        settings=settings,
        client=mock_api.client(),
    )


@pytest.fixture
def speech(mock_api, settings):
    return SpeechToTextV1(
        username="user",
        password="pass",
        settings=settings,
        client=mock_api.client(),
    )
