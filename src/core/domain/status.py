"""Enumeraciones de estado y constantes de Speech to Text.

Centralizar estos valores en el dominio permite que la CLI y los adaptadores
compartan una única fuente de verdad.
"""

from __future__ import annotations

from enum import Enum


class RecognitionJobStatus(str, Enum):
    """Estado de un trabajo de reconocimiento asíncrono."""

    WAITING = "waiting"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        return self in (RecognitionJobStatus.COMPLETED, RecognitionJobStatus.FAILED)


class CustomizationStatus(str, Enum):
    """Estado de un modelo de lenguaje personalizado."""

    PENDING = "pending"
    READY = "ready"
    TRAINING = "training"
    AVAILABLE = "available"
    UPGRADING = "upgrading"
    FAILED = "failed"


class CorpusStatus(str, Enum):
    ANALYZED = "analyzed"
    BEING_PROCESSED = "being_processed"
    UNDETERMINED = "undetermined"


class WordType(str, Enum):
    """Filtro de palabras de un modelo personalizado."""

    ALL = "all"
    USER = "user"
    CORPORA = "corpora"


class SpeechModelName(str, Enum):
    """Modelos base de reconocimiento más habituales."""

    AR_AR_BROADBANDMODEL = "ar-AR_BroadbandModel"
    DE_DE_BROADBANDMODEL = "de-DE_BroadbandModel"
    DE_DE_NARROWBANDMODEL = "de-DE_NarrowbandModel"
    EN_GB_BROADBANDMODEL = "en-GB_BroadbandModel"
    EN_GB_NARROWBANDMODEL = "en-GB_NarrowbandModel"
    EN_US_BROADBANDMODEL = "en-US_BroadbandModel"
    EN_US_NARROWBANDMODEL = "en-US_NarrowbandModel"
    ES_ES_BROADBANDMODEL = "es-ES_BroadbandModel"
    ES_ES_NARROWBANDMODEL = "es-ES_NarrowbandModel"
    FR_FR_BROADBANDMODEL = "fr-FR_BroadbandModel"
    JA_JP_BROADBANDMODEL = "ja-JP_BroadbandModel"
    JA_JP_NARROWBANDMODEL = "ja-JP_NarrowbandModel"
    PT_BR_BROADBANDMODEL = "pt-BR_BroadbandModel"
    PT_BR_NARROWBANDMODEL = "pt-BR_NarrowbandModel"
    ZH_CN_BROADBANDMODEL = "zh-CN_BroadbandModel"
    ZH_CN_NARROWBANDMODEL = "zh-CN_NarrowbandModel"

    @classmethod
    def default(cls) -> "SpeechModelName":
        """Modelo usado por el servicio cuando no se indica ninguno."""

        return cls.EN_US_BROADBANDMODEL
