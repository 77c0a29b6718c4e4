"""Text-to-speech requests."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from oaiclient.api_request import ApiRequest, RequestBuilder

_BUILDER = RequestBuilder()


class SpeechModel(str, enum.Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY_TTS = "canary-tts"


class SpeechVoice(str, enum.Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, enum.Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"


class InvalidSpeechModelError(ValueError):
    """Raised when a speech request names an unknown model."""

    def __init__(self) -> None:
        super().__init__("invalid speech model")


class InvalidVoiceError(ValueError):
    """Raised when a speech request names an unknown voice."""

    def __init__(self) -> None:
        super().__init__("invalid voice")


def _text(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


@dataclass
class CreateSpeechRequest:
    model: SpeechModel | str = ""
    input: str = ""
    voice: SpeechVoice | str = ""
    response_format: SpeechResponseFormat | str = ""  # server default: mp3
    speed: float = 0.0  # server default: 1.0

    def to_dict(self) -> dict[str, Any]:
        """The request body; unset optional fields are left out."""
        result: dict[str, Any] = {
            "model": _text(self.model),
            "input": self.input,
            "voice": _text(self.voice),
        }
        if self.response_format:
            result["response_format"] = _text(self.response_format)
        if self.speed:
            result["speed"] = self.speed
        return result


def is_valid_speech_model(model: SpeechModel | str) -> bool:
    return _text(model) in {item.value for item in SpeechModel}


def is_valid_voice(voice: SpeechVoice | str) -> bool:
    return _text(voice) in {item.value for item in SpeechVoice}


def create_speech(request: CreateSpeechRequest) -> ApiRequest:
    """Request that turns text into audio; the response body is the audio itself."""
    if not is_valid_speech_model(request.model):
        raise InvalidSpeechModelError()
    if not is_valid_voice(request.voice):
        raise InvalidVoiceError()
    return _BUILDER.build(
        "POST",
        "/audio/speech",
        request,
        {"Content-Type": "application/json; charset=utf-8"},
    )