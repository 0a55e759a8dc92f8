"""Cliente de Watson Speech to Text v1 (REST + WebSocket)."""

from adapters.speech_to_text.options import RecognizeOptions
from adapters.speech_to_text.service import SpeechToTextV1
from adapters.speech_to_text.websocket import recognize_using_websocket

__all__ = ["RecognizeOptions", "SpeechToTextV1", "recognize_using_websocket"]
