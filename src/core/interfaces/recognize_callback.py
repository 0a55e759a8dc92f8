"""Contrato de callbacks para el reconocimiento por WebSocket.

`RecognizeCallback` es un Protocol (duck typing): cualquier objeto con estos
métodos sirve. `BaseRecognizeCallback` ofrece implementaciones vacías para
sobrescribir solo lo necesario.

Reglas:
- Los métodos son síncronos y se invocan desde el bucle de lectura del socket;
  no deben bloquear.
- `on_disconnected` se llama siempre, también tras un error.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.speech import SpeechResults


@runtime_checkable
class RecognizeCallback(Protocol):
    def on_connected(self) -> None:
        """Conexión WebSocket abierta."""

        ...

    def on_listening(self) -> None:
        """El servicio aceptó la acción `start` y espera audio."""

        ...

    def on_transcription(self, results: SpeechResults) -> None:
        """Resultado intermedio o final."""

        ...

    def on_inactivity_timeout(self, error: Exception) -> None:
        ...

    def on_error(self, error: Exception) -> None:
        ...

    def on_disconnected(self) -> None:
        ...


class BaseRecognizeCallback:
    """Implementación no-op de `RecognizeCallback`."""

    def on_connected(self) -> None:
        pass

    def on_listening(self) -> None:
        pass

    def on_transcription(self, results: SpeechResults) -> None:
        pass

    def on_inactivity_timeout(self, error: Exception) -> None:
        pass

    def on_error(self, error: Exception) -> None:
        pass

    def on_disconnected(self) -> None:
        pass
