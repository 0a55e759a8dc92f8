"""Modelos de Speech to Text v1.

Notas de formato:
- `timestamps` llega como listas `["palabra", inicio, fin]`.
- `word_confidence` llega como listas `["palabra", confianza]`.
Ambos se normalizan a modelos con campos nombrados.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from core.domain.models import WatsonModel
from core.domain.status import CorpusStatus, CustomizationStatus, RecognitionJobStatus


class SupportedFeatures(WatsonModel):
    custom_language_model: bool | None = None
    speaker_labels: bool | None = None


class SpeechModel(WatsonModel):
    name: str
    rate: int | None = None
    language: str | None = None
    url: str | None = None
    description: str | None = None
    sessions: str | None = None
    supported_features: SupportedFeatures | None = None


class SpeechSession(WatsonModel):
    """Sesión de reconocimiento (atada a la cookie del cliente HTTP)."""

    session_id: str
    new_session_uri: str | None = None
    recognize: str | None = None
    recognize_ws: str | None = Field(default=None, alias="recognizeWS")
    observe_result: str | None = None


class SpeechSessionStatus(WatsonModel):
    state: str | None = None
    model: str | None = None
    recognize: str | None = None
    recognize_ws: str | None = Field(default=None, alias="recognizeWS")
    observe_result: str | None = None


class SpeechTimestamp(WatsonModel):
    word: str
    start_time: float
    end_time: float


class SpeechWordConfidence(WatsonModel):
    word: str
    confidence: float


class SpeechAlternative(WatsonModel):
    transcript: str
    confidence: float | None = None
    timestamps: list[SpeechTimestamp] | None = None
    word_confidence: list[SpeechWordConfidence] | None = None

    @field_validator("timestamps", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        out: list[Any] = []
        for item in value:
            if isinstance(item, (list, tuple)) and len(item) == 3:
                out.append({"word": item[0], "start_time": item[1], "end_time": item[2]})
            else:
                out.append(item)
        return out

    @field_validator("word_confidence", mode="before")
    @classmethod
    def _parse_word_confidence(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        out: list[Any] = []
        for item in value:
            if isinstance(item, (list, tuple)) and len(item) == 2:
                out.append({"word": item[0], "confidence": item[1]})
            else:
                out.append(item)
        return out


class KeywordsResult(WatsonModel):
    normalized_text: str
    start_time: float
    end_time: float
    confidence: float


class WordAlternative(WatsonModel):
    word: str
    confidence: float


class SpeechWordAlternatives(WatsonModel):
    start_time: float
    end_time: float
    alternatives: list[WordAlternative] = Field(default_factory=list)


class Transcript(WatsonModel):
    is_final: bool = Field(default=False, alias="final")
    alternatives: list[SpeechAlternative] = Field(default_factory=list)
    keywords_result: dict[str, list[KeywordsResult]] | None = None
    word_alternatives: list[SpeechWordAlternatives] | None = None


class SpeakerLabel(WatsonModel):
    from_: float = Field(..., alias="from")
    to: float
    speaker: int
    confidence: float | None = None
    is_final: bool | None = Field(default=None, alias="final")


class SpeechResults(WatsonModel):
    """Resultado de un reconocimiento (HTTP o evento WebSocket)."""

    results: list[Transcript] = Field(default_factory=list)
    result_index: int = 0
    speaker_labels: list[SpeakerLabel] | None = None
    warnings: list[str] | None = None

    @property
    def is_final(self) -> bool:
        """True cuando el último transcript recibido es final."""

        return bool(self.results) and self.results[-1].is_final

    @property
    def transcript(self) -> str:
        """Concatena la mejor alternativa de cada resultado."""

        parts = [r.alternatives[0].transcript.strip() for r in self.results if r.alternatives]
        return " ".join(p for p in parts if p)


class RecognitionJob(WatsonModel):
    id: str
    status: RecognitionJobStatus
    created: datetime | None = None
    updated: datetime | None = None
    url: str | None = None
    user_token: str | None = None
    results: list[SpeechResults] | None = None
    warnings: list[str] | None = None


class Customization(WatsonModel):
    """Modelo de lenguaje personalizado."""

    id: str = Field(..., alias="customization_id")
    name: str | None = None
    description: str | None = None
    language: str | None = None
    base_model_name: str | None = None
    owner: str | None = None
    status: CustomizationStatus | None = None
    progress: int | None = None
    created: datetime | None = None
    versions: list[str] | None = None
    warnings: str | None = None


class Corpus(WatsonModel):
    name: str
    total_words: int | None = None
    out_of_vocabulary_words: int | None = None
    status: CorpusStatus | None = None
    error: str | None = None


class Word(WatsonModel):
    """Palabra a añadir a un modelo personalizado."""

    word: str
    sounds_like: list[str] | None = None
    display_as: str | None = None


class WordData(Word):
    source: list[str] | None = None
    count: int | None = None
    error: list[dict[str, Any]] | None = None
