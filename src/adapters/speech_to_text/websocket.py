"""Reconocimiento en streaming sobre WebSocket.

Secuencia:
1. Conectar a `wss://…/v1/recognize?model=&customization_id=` con el header
   de autenticación del servicio.
2. Enviar la acción `start` (JSON) y el audio en bloques binarios.
3. Enviar `{"action": "stop"}`.
4. El servidor responde `{"state": "listening"}` dos veces: al aceptar el
   `start` y al terminar de procesar el audio. El segundo marca el final.

Los eventos se entregan a un `RecognizeCallback`. La corrutina termina cuando
la sesión acaba; quien necesite un límite de espera puede envolverla en
`asyncio.wait_for`.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import TYPE_CHECKING, Any, AsyncIterable, Iterator
from urllib.parse import urlencode

import structlog
from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from adapters.http_client import clean_query
from adapters.speech_to_text.options import (
    AudioSource,
    RecognizeOptions,
    iter_audio_chunks,
    resolve_content_type,
)
from core.domain.speech import SpeechResults
from core.errors import RecognitionError
from core.interfaces.recognize_callback import RecognizeCallback

if TYPE_CHECKING:
    from adapters.speech_to_text.service import SpeechToTextV1

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 8192
STOP_MESSAGE = json.dumps({"action": "stop"})


def websocket_url(base_url: str, options: RecognizeOptions) -> str:
    """Convierte la URL HTTP(S) del servicio en la URL WebSocket de `/v1/recognize`."""

    if base_url.startswith("https://"):
        ws_base = "wss://" + base_url[len("https://") :]
    elif base_url.startswith("http://"):
        ws_base = "ws://" + base_url[len("http://") :]
    else:
        ws_base = base_url
    url = ws_base.rstrip("/") + "/v1/recognize"
    query = clean_query(options.url_params())
    if query:
        url += "?" + urlencode(query)
    return url


async def _iter_stream(audio: AudioSource | AsyncIterable[bytes], chunk_size: int) -> AsyncIterable[bytes]:
    if hasattr(audio, "__aiter__"):
        async for chunk in audio:  # type: ignore[union-attr]
            if chunk:
                yield bytes(chunk)
        return
    chunks: Iterator[bytes] = iter_audio_chunks(audio, chunk_size)  # type: ignore[arg-type]
    for chunk in chunks:
        yield chunk


async def _send_audio(ws: Any, audio: AudioSource | AsyncIterable[bytes], chunk_size: int) -> None:
    sent = 0
    async for chunk in _iter_stream(audio, chunk_size):
        await ws.send(chunk)
        sent += len(chunk)
    await ws.send(STOP_MESSAGE)
    logger.debug("stt_ws_audio_sent", bytes=sent)


def _dispatch(message: dict[str, Any], callback: RecognizeCallback, listening_count: int) -> tuple[int, bool]:
    """Procesa un mensaje JSON del servidor.

    Devuelve el número de `listening` vistos y si la sesión ha terminado.
    """

    if "error" in message:
        text = str(message["error"])
        error = RecognitionError(text)
        if "inactivity" in text.lower():
            callback.on_inactivity_timeout(error)
        else:
            callback.on_error(error)
        return listening_count, True

    if message.get("state") == "listening":
        listening_count += 1
        if listening_count == 1:
            callback.on_listening()
            return listening_count, False
        return listening_count, True

    if "results" in message or "speaker_labels" in message:
        callback.on_transcription(SpeechResults.model_validate(message))

    return listening_count, False


async def recognize_using_websocket(
    service: "SpeechToTextV1",
    audio: AudioSource | AsyncIterable[bytes],
    callback: RecognizeCallback,
    options: RecognizeOptions | None = None,
    *,
    content_type: str | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Transcribe `audio` en streaming, notificando a `callback`.

    `audio` puede ser bytes, una ruta, un fichero binario o un iterable
    asíncrono de bloques (micrófono, otra conexión...). Con un iterable
    asíncrono hace falta indicar `content_type`.

    Los errores de validación (`ValueError`) se lanzan antes de conectar. Los
    errores de conexión y los informados por el servidor se entregan a
    `callback.on_error`; `callback.on_disconnected` se llama siempre que se
    haya intentado conectar.
    """

    if audio is None:
        raise ValueError("audio cannot be None")
    if callback is None:
        raise ValueError("callback cannot be None")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")

    options = options or RecognizeOptions()
    options.validate()
    if hasattr(audio, "__aiter__"):
        resolved_type = content_type or options.content_type
        if not resolved_type:
            raise ValueError("content_type cannot be None for streamed audio")
    else:
        resolved_type = resolve_content_type(audio, options, content_type)  # type: ignore[arg-type]

    url = websocket_url(service.url, options)
    timeout = service.settings.websocket_timeout_seconds
    log = logger.bind(url=url)

    sender: asyncio.Task[None] | None = None
    receiver: asyncio.Future[Any] | None = None
    try:
        headers = dict(service.default_headers)
        headers.update(await service.authorization_header())
        async with connect(url, additional_headers=headers, open_timeout=timeout) as ws:
            log.debug("stt_ws_connected")
            callback.on_connected()
            await ws.send(json.dumps(options.start_message(resolved_type)))
            sender = asyncio.create_task(_send_audio(ws, audio, chunk_size))

            listening_count = 0
            while True:
                if receiver is None:
                    receiver = asyncio.ensure_future(ws.recv())
                idle_sender = sender.done() and sender.exception() is None
                waiting = {receiver} if idle_sender else {receiver, sender}
                done, _ = await asyncio.wait(waiting, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
                if not done:
                    raise asyncio.TimeoutError(f"no message from the server in {timeout}s")

                # Si la fuente de audio falla, `stop` no llegará a enviarse.
                if sender in done and sender.exception() is not None:
                    failure = sender.exception()
                    log.warning("stt_ws_audio_failed", error=str(failure))
                    callback.on_error(failure)  # type: ignore[arg-type]
                    break
                if receiver not in done:
                    continue

                finished, receiver = receiver, None
                try:
                    raw = finished.result()
                except ConnectionClosed:
                    log.debug("stt_ws_closed_by_server")
                    break
                if isinstance(raw, (bytes, bytearray)):
                    continue
                try:
                    message = json.loads(raw)
                except ValueError:
                    log.warning("stt_ws_invalid_frame")
                    continue
                listening_count, done_session = _dispatch(message, callback, listening_count)
                if done_session:
                    break
    except (OSError, WebSocketException, asyncio.TimeoutError) as exc:
        log.warning("stt_ws_error", error=str(exc))
        callback.on_error(exc)
    finally:
        for task in (receiver, sender):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        callback.on_disconnected()

