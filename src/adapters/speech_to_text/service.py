"""Cliente de Watson Speech to Text v1 (REST).

Cubre modelos, sesiones, reconocimiento HTTP, trabajos asíncronos y modelos
de lenguaje personalizados (corpora y palabras). El reconocimiento en
streaming vive en `adapters.speech_to_text.websocket`.
"""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterable, Iterable

import httpx
import structlog

from adapters.speech_to_text.options import (
    AudioSource,
    RecognizeOptions,
    read_audio,
    resolve_content_type,
)
from adapters.speech_to_text.websocket import DEFAULT_CHUNK_SIZE
from adapters.speech_to_text.websocket import recognize_using_websocket as _stream_recognize
from adapters.watson_service import WatsonService
from core.config import DEFAULT_SPEECH_TO_TEXT_URL, AppSettings
from core.domain.models import to_payload
from core.domain.speech import (
    Corpus,
    Customization,
    RecognitionJob,
    SpeechModel,
    SpeechResults,
    SpeechSession,
    SpeechSessionStatus,
    Word,
    WordData,
)
from core.domain.status import SpeechModelName, WordType
from core.interfaces.recognize_callback import RecognizeCallback

logger = structlog.get_logger(__name__)

_CUSTOMIZATIONS = "v1/customizations"


def _require(value: Any, name: str) -> None:
    if value is None or (isinstance(value, str) and not value):
        raise ValueError(f"{name} cannot be None")


def _session_id(session: SpeechSession | str) -> str:
    session_id = session.session_id if isinstance(session, SpeechSession) else session
    _require(session_id, "session_id")
    return session_id


class SpeechToTextV1(WatsonService):
    """Cliente del servicio Speech to Text."""

    def __init__(
        self,
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
        settings = settings or AppSettings()
        has_explicit = any(v is not None for v in (username, password, iam_apikey, iam_access_token))
        if not has_explicit:
            iam_apikey = settings.speech_to_text_apikey
            username = settings.speech_to_text_username
            password = settings.speech_to_text_password

        super().__init__(
            "speech_to_text",
            settings.speech_to_text_url or DEFAULT_SPEECH_TO_TEXT_URL,
            url=url,
            username=username,
            password=password,
            iam_apikey=iam_apikey,
            iam_access_token=iam_access_token,
            iam_url=iam_url,
            settings=settings,
            default_headers=default_headers,
            client=client,
        )

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    async def list_models(self) -> list[SpeechModel]:
        data = await self.request("GET", ["v1/models"])
        return [SpeechModel.model_validate(item) for item in (data or {}).get("models", [])]

    async def get_model(self, model_id: str | SpeechModelName) -> SpeechModel:
        _require(model_id, "model_id")
        name = model_id.value if isinstance(model_id, SpeechModelName) else model_id
        data = await self.request("GET", ["v1/models"], [name])
        return SpeechModel.model_validate(data)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def create_session(self, model: str | SpeechModelName | None = None) -> SpeechSession:
        """Crea una sesión; las siguientes peticiones la usan vía cookie."""

        data = await self.request("POST", ["v1/sessions"], params={"model": model})
        return SpeechSession.model_validate(data)

    async def delete_session(self, session: SpeechSession | str) -> None:
        await self.request("DELETE", ["v1/sessions"], [_session_id(session)])

    async def get_recognize_status(self, session: SpeechSession | str) -> SpeechSessionStatus:
        data = await self.request("GET", ["v1/sessions", "recognize"], [_session_id(session)])
        payload = data.get("session", data) if isinstance(data, dict) else data
        return SpeechSessionStatus.model_validate(payload)

    # ------------------------------------------------------------------
    # Recognition (HTTP)
    # ------------------------------------------------------------------

    async def recognize(
        self,
        audio: AudioSource,
        options: RecognizeOptions | None = None,
        *,
        content_type: str | None = None,
        session: SpeechSession | str | None = None,
    ) -> SpeechResults:
        """Transcribe un audio completo en una sola petición.

        Con `session`, el reconocimiento se hace dentro de esa sesión y los
        parámetros de modelo se ignoran (los fija la sesión).
        """

        _require(audio, "audio")
        options = options or RecognizeOptions()
        options.validate()
        resolved_type = resolve_content_type(audio, options, content_type)
        body = read_audio(audio)

        if session is not None:
            params = options.query_params()
            params.pop("model", None)
            params.pop("customization_id", None)
            data = await self.request(
                "POST",
                ["v1/sessions", "recognize"],
                [_session_id(session)],
                params=params,
                content=body,
                headers={"Content-Type": resolved_type},
            )
        else:
            data = await self.request(
                "POST",
                ["v1/recognize"],
                params=options.query_params(),
                content=body,
                headers={"Content-Type": resolved_type},
            )
        return SpeechResults.model_validate(data or {})

    # ------------------------------------------------------------------
    # Asynchronous recognition jobs
    # ------------------------------------------------------------------

    async def create_recognition_job(
        self,
        audio: AudioSource,
        options: RecognizeOptions | None = None,
        *,
        content_type: str | None = None,
        callback_url: str | None = None,
        events: Iterable[str] | None = None,
        user_token: str | None = None,
        results_ttl: int | None = None,
    ) -> RecognitionJob:
        _require(audio, "audio")
        options = options or RecognizeOptions()
        options.validate()
        resolved_type = resolve_content_type(audio, options, content_type)

        params = options.query_params()
        params.update(
            {
                "callback_url": callback_url,
                "events": list(events) if events is not None else None,
                "user_token": user_token,
                "results_ttl": results_ttl,
            }
        )
        data = await self.request(
            "POST",
            ["v1/recognitions"],
            params=params,
            content=read_audio(audio),
            headers={"Content-Type": resolved_type},
        )
        return RecognitionJob.model_validate(data)

    async def get_recognition_job(self, job_id: str) -> RecognitionJob:
        _require(job_id, "job_id")
        data = await self.request("GET", ["v1/recognitions"], [job_id])
        return RecognitionJob.model_validate(data)

    async def list_recognition_jobs(self) -> list[RecognitionJob]:
        data = await self.request("GET", ["v1/recognitions"])
        return [RecognitionJob.model_validate(item) for item in (data or {}).get("recognitions", [])]

    async def delete_recognition_job(self, job_id: str) -> None:
        _require(job_id, "job_id")
        await self.request("DELETE", ["v1/recognitions"], [job_id])

    async def wait_for_recognition_job(
        self,
        job_id: str,
        *,
        interval: float = 3.0,
        attempts: int = 30,
    ) -> RecognitionJob:
        """Consulta el trabajo hasta que termina (completed/failed) o se agotan los intentos.

        Devuelve el último estado conocido en ambos casos.
        """

        job = await self.get_recognition_job(job_id)
        for _ in range(attempts):
            if job.status.is_terminal():
                break
            await asyncio.sleep(interval)
            job = await self.get_recognition_job(job_id)
        logger.debug("recognition_job_polled", job_id=job_id, status=job.status.value)
        return job

    # ------------------------------------------------------------------
    # Custom language models
    # ------------------------------------------------------------------

    async def create_customization(
        self,
        name: str,
        base_model_name: str | SpeechModelName | None = None,
        *,
        description: str | None = None,
    ) -> Customization:
        _require(name, "name")
        base_model_name = base_model_name or SpeechModelName.default()
        base = base_model_name.value if isinstance(base_model_name, SpeechModelName) else base_model_name
        body: dict[str, Any] = {"name": name, "base_model_name": base}
        if description is not None:
            body["description"] = description
        data = await self.request("POST", [_CUSTOMIZATIONS], json=body)
        return Customization.model_validate(data)

    async def get_customization(self, customization_id: str) -> Customization:
        _require(customization_id, "customization_id")
        data = await self.request("GET", [_CUSTOMIZATIONS], [customization_id])
        return Customization.model_validate(data)

    async def list_customizations(self, language: str | None = None) -> list[Customization]:
        data = await self.request("GET", [_CUSTOMIZATIONS], params={"language": language})
        return [Customization.model_validate(item) for item in (data or {}).get("customizations", [])]

    async def delete_customization(self, customization_id: str) -> None:
        _require(customization_id, "customization_id")
        await self.request("DELETE", [_CUSTOMIZATIONS], [customization_id])

    async def train_customization(
        self,
        customization_id: str,
        word_type_to_add: WordType | str | None = None,
    ) -> None:
        _require(customization_id, "customization_id")
        await self.request(
            "POST",
            [_CUSTOMIZATIONS, "train"],
            [customization_id],
            params={"word_type_to_add": word_type_to_add},
        )

    async def reset_customization(self, customization_id: str) -> None:
        _require(customization_id, "customization_id")
        await self.request("POST", [_CUSTOMIZATIONS, "reset"], [customization_id])

    async def upgrade_customization(self, customization_id: str) -> None:
        _require(customization_id, "customization_id")
        await self.request("POST", [_CUSTOMIZATIONS, "upgrade_model"], [customization_id])

    # ------------------------------------------------------------------
    # Corpora
    # ------------------------------------------------------------------

    async def list_corpora(self, customization_id: str) -> list[Corpus]:
        _require(customization_id, "customization_id")
        data = await self.request("GET", [_CUSTOMIZATIONS, "corpora"], [customization_id])
        return [Corpus.model_validate(item) for item in (data or {}).get("corpora", [])]

    async def get_corpus(self, customization_id: str, corpus_name: str) -> Corpus:
        _require(customization_id, "customization_id")
        _require(corpus_name, "corpus_name")
        data = await self.request("GET", [_CUSTOMIZATIONS, "corpora"], [customization_id, corpus_name])
        return Corpus.model_validate(data)

    async def add_corpus(
        self,
        customization_id: str,
        corpus_name: str,
        text: str | bytes | None,
        *,
        allow_overwrite: bool | None = None,
    ) -> None:
        """Añade (o reemplaza con `allow_overwrite`) un corpus de texto plano."""

        _require(customization_id, "customization_id")
        _require(corpus_name, "corpus_name")
        if text is None:
            raise ValueError("corpus text cannot be None")
        content = text.encode("utf-8") if isinstance(text, str) else text
        await self.request(
            "POST",
            [_CUSTOMIZATIONS, "corpora"],
            [customization_id, corpus_name],
            params={"allow_overwrite": allow_overwrite},
            content=content,
            headers={"Content-Type": "text/plain"},
        )

    async def delete_corpus(self, customization_id: str, corpus_name: str) -> None:
        _require(customization_id, "customization_id")
        _require(corpus_name, "corpus_name")
        await self.request("DELETE", [_CUSTOMIZATIONS, "corpora"], [customization_id, corpus_name])

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    async def list_words(
        self,
        customization_id: str,
        word_type: WordType | str | None = WordType.ALL,
        *,
        sort: str | None = None,
    ) -> list[WordData]:
        _require(customization_id, "customization_id")
        data = await self.request(
            "GET",
            [_CUSTOMIZATIONS, "words"],
            [customization_id],
            params={"word_type": word_type, "sort": sort},
        )
        return [WordData.model_validate(item) for item in (data or {}).get("words", [])]

    async def get_word(self, customization_id: str, word: str) -> WordData:
        _require(customization_id, "customization_id")
        _require(word, "word")
        data = await self.request("GET", [_CUSTOMIZATIONS, "words"], [customization_id, word])
        return WordData.model_validate(data)

    async def add_words(self, customization_id: str, words: Iterable[Word]) -> None:
        _require(customization_id, "customization_id")
        items = list(words)
        if not items:
            raise ValueError("words cannot be empty")
        await self.request(
            "POST",
            [_CUSTOMIZATIONS, "words"],
            [customization_id],
            json={"words": to_payload(items)},
        )

    async def add_word(
        self,
        customization_id: str,
        word: str,
        *,
        sounds_like: list[str] | None = None,
        display_as: str | None = None,
    ) -> None:
        _require(customization_id, "customization_id")
        _require(word, "word")
        body: dict[str, Any] = {}
        if sounds_like is not None:
            body["sounds_like"] = sounds_like
        if display_as is not None:
            body["display_as"] = display_as
        await self.request("PUT", [_CUSTOMIZATIONS, "words"], [customization_id, word], json=body)

    async def delete_word(self, customization_id: str, word: str) -> None:
        _require(customization_id, "customization_id")
        _require(word, "word")
        await self.request("DELETE", [_CUSTOMIZATIONS, "words"], [customization_id, word])

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    async def recognize_using_websocket(
        self,
        audio: AudioSource | AsyncIterable[bytes],
        callback: RecognizeCallback,
        options: RecognizeOptions | None = None,
        *,
        content_type: str | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Reconocimiento en streaming; ver `adapters.speech_to_text.websocket`."""

        await _stream_recognize(
            self, audio, callback, options, content_type=content_type, chunk_size=chunk_size
        )
