"""Cliente de Watson Assistant v1."""

from adapters.assistant.service import AssistantV1

__all__ = ["AssistantV1"]
