"""Configuration loading and management."""

import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError, InvalidArgumentError
from .voices import VOICE_MODELS, VoiceModel, find_voice, list_available_voices
from .wav import AudioFormat

DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_KEY_CHECK_MODEL = "gemini-2.5-flash-lite"
CONFIG_ENV_VAR = "VERA_VOICE_CONFIG"

EXPRESSION_INSTRUCTIONS = {
    "professional_neutral": (
        "Speak in a professional and neutral tone. Maintain a formal, business-like "
        "demeanor with clear articulation. Use precise language, avoid emotional "
        "expressions, and keep your delivery measured and objective. This tone is "
        "appropriate for corporate communications, technical explanations, and formal "
        "interactions where clarity and professionalism are paramount."
    ),
    "warm_friendly": (
        "Speak in a warm and friendly tone. Use a conversational, approachable style "
        "with genuine warmth in your voice. Show empathy and understanding, use "
        "friendly language, and maintain a positive, welcoming demeanor. This tone is "
        "ideal for customer service, personal interactions, and situations where "
        "building rapport and making the user feel comfortable is important."
    ),
}

SAMPLE_TEXTS = {
    "greeting": (
        "Hi, you're through to [Business Name]. My name's Vera — how may I help you today?"
    ),
    "business": (
        "Thank you for calling. We're currently experiencing high call volumes. "
        "Your call is important to us, and we'll be with you as soon as possible. "
        "Please hold the line."
    ),
    "customer": (
        "I understand your concern, and I'm here to help resolve this for you. "
        "Let me look into that right away. Could you please provide me with your "
        "account number?"
    ),
    "announcement": (
        "Good morning, everyone. This is an important announcement. Please ensure "
        "all safety protocols are followed. Thank you for your attention."
    ),
}


def get_config_dir() -> Path:
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "vera-voice"


def get_config_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return get_config_dir() / "config.toml"


class Config(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    voice_models: tuple[VoiceModel, ...] = Field(default=VOICE_MODELS, min_length=1)
    expressions: tuple[str, ...] = Field(default=tuple(EXPRESSION_INSTRUCTIONS))
    expression_instructions: dict[str, str] = Field(
        default_factory=lambda: dict(EXPRESSION_INSTRUCTIONS)
    )
    default_voice: str = Field(default="Puck")
    default_expression: str = Field(default="professional_neutral")
    audio: AudioFormat = Field(default_factory=AudioFormat)
    accent_instruction: str = Field(
        default="Say with a natural British English (UK) accent:"
    )
    model_name_placeholder: str = Field(default="<modelname>", min_length=1)
    tts_model: str = Field(default=DEFAULT_TTS_MODEL)
    key_check_model: str = Field(default=DEFAULT_KEY_CHECK_MODEL)
    max_text_length: int = Field(default=5000, gt=0)
    sample_texts: dict[str, str] = Field(default_factory=lambda: dict(SAMPLE_TEXTS))
    audio_filename_prefix: str = Field(default="vera_voice_")
    player_command: Optional[str] = Field(default=None)
    cors_origins: tuple[str, ...] = Field(default=("*",))
    log_level: str = Field(default="INFO")

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        path = config_path or get_config_path()
        if not path.exists():
            return cls()

        try:
            import tomllib
        except ImportError:
            import tomli as tomllib  # type: ignore[import-not-found,no-redef]

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            return cls(**data)
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {path}", detail=str(e)) from e

    def voice_names(self) -> list[str]:
        return list_available_voices(self.voice_models)

    def get_voice(self, name: str) -> VoiceModel:
        voice = find_voice(name, self.voice_models)
        if voice is None:
            raise InvalidArgumentError(
                f"Invalid model_name. Must be one of: {', '.join(self.voice_names())}"
            )
        return voice

    def get_expression_instruction(
        self, expression: str, instructions: Optional[dict[str, str]] = None
    ) -> str:
        table = instructions if instructions is not None else self.expression_instructions
        if not table.get(expression):
            raise InvalidArgumentError(
                f"Invalid expression: {expression}. "
                f"Available expressions: {', '.join(table)}"
            )
        return table[expression]
