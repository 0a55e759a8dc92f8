"""Opciones de reconocimiento y utilidades de audio.

`RecognizeOptions` es común al reconocimiento HTTP, a los trabajos
asíncronos y al WebSocket. `model` y `customization_id` van siempre en la
URL; el resto se envía como query (HTTP) o dentro de la acción `start`
(WebSocket).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Union

from core.domain.status import SpeechModelName

AudioSource = Union[bytes, bytearray, str, Path, BinaryIO]

AUDIO_CONTENT_TYPES: dict[str, str] = {
    ".wav": "audio/wav",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".opus": "audio/ogg;codecs=opus",
    ".mp3": "audio/mp3",
    ".mpeg": "audio/mpeg",
    ".webm": "audio/webm",
    ".l16": "audio/l16",
    ".raw": "audio/l16",
    ".mulaw": "audio/mulaw",
    ".basic": "audio/basic",
}

_URL_OPTIONS = ("model", "customization_id")


@dataclass
class RecognizeOptions:
    """Parámetros de un reconocimiento."""

    model: str | SpeechModelName | None = None
    customization_id: str | None = None
    content_type: str | None = None
    continuous: bool | None = None
    inactivity_timeout: int | None = None
    keywords: list[str] | None = None
    keywords_threshold: float | None = None
    max_alternatives: int | None = None
    word_alternatives_threshold: float | None = None
    word_confidence: bool | None = None
    timestamps: bool | None = None
    profanity_filter: bool | None = None
    smart_formatting: bool | None = None
    speaker_labels: bool | None = None
    interim_results: bool | None = None

    def validate(self) -> None:
        """Comprueba combinaciones que el servicio rechazaría."""

        if self.keywords and self.keywords_threshold is None:
            raise ValueError("keywords_threshold is required when keywords are given")
        for name in ("keywords_threshold", "word_alternatives_threshold"):
            value = getattr(self, name)
            if value is not None and not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1")
        if self.max_alternatives is not None and self.max_alternatives < 1:
            raise ValueError("max_alternatives must be a positive integer")

    def _values(self, *, exclude: tuple[str, ...]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            if f.name in exclude:
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = value
        return out

    def url_params(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in _URL_OPTIONS if getattr(self, name) is not None}

    def query_params(self) -> dict[str, Any]:
        """Parámetros para `POST /v1/recognize` y `/v1/recognitions`."""

        # interim_results solo existe en el WebSocket.
        return self._values(exclude=("content_type", "interim_results"))

    def start_message(self, content_type: str) -> dict[str, Any]:
        """Acción `start` del protocolo WebSocket."""

        message: dict[str, Any] = {"action": "start", "content-type": content_type}
        message.update(self._values(exclude=_URL_OPTIONS + ("content_type",)))
        return message


def guess_content_type(audio: AudioSource) -> str | None:
    """Deduce el content type a partir de la extensión del fichero."""

    name: str | None = None
    if isinstance(audio, (str, Path)):
        name = str(audio)
    else:
        name = getattr(audio, "name", None)
    if not isinstance(name, str):
        return None
    return AUDIO_CONTENT_TYPES.get(Path(name).suffix.lower())


def resolve_content_type(audio: AudioSource, options: RecognizeOptions | None, content_type: str | None) -> str:
    resolved = content_type or (options.content_type if options else None) or guess_content_type(audio)
    if not resolved:
        raise ValueError("content_type cannot be None: it could not be inferred from the audio source")
    return resolved


def read_audio(audio: AudioSource) -> bytes:
    """Lee todo el audio en memoria."""

    if isinstance(audio, (bytes, bytearray)):
        return bytes(audio)
    if isinstance(audio, (str, Path)):
        return Path(audio).read_bytes()
    data = audio.read()
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError("audio file objects must be opened in binary mode")
    return bytes(data)


def iter_audio_chunks(audio: AudioSource, chunk_size: int) -> Iterator[bytes]:
    """Trocea el audio en bloques de `chunk_size` bytes."""

    if chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")
    if isinstance(audio, (str, Path)):
        with Path(audio).open("rb") as handle:
            yield from iter_audio_chunks(handle, chunk_size)
        return
    if isinstance(audio, (bytes, bytearray)):
        for start in range(0, len(audio), chunk_size):
            yield bytes(audio[start : start + chunk_size])
        return
    while True:
        chunk = audio.read(chunk_size)
        if not chunk:
            return
        yield bytes(chunk)
