"""Speech generation through the Gemini API."""

import base64
import binascii
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from google import genai
from google.genai import errors, types

from .config import Config
from .exceptions import (
    AccessForbiddenError,
    AuthenticationError,
    InvalidArgumentError,
    ModelNotFoundError,
    QuotaExceededError,
    SynthesisError,
    UpstreamAPIError,
    VeraVoiceError,
)
from .prompt import build_prompt, replace_model_name
from .wav import AudioFormat, is_frame_aligned, pcm_duration

logger = logging.getLogger(__name__)

MAX_DETAIL_CHARS = 500
RETRY_DELAY_PATTERN = re.compile(r"retry in (\d+(?:\.\d+)?)s", re.IGNORECASE)

QUOTA_MESSAGE = (
    "API quota exceeded. You have reached your usage limit for this model. "
    "Please wait a moment and try again, or check your billing plan."
)
QUOTA_DETAIL = (
    "The free tier has limited requests. "
    "Consider upgrading your plan or waiting before retrying."
)
AUTH_MESSAGE = (
    "Invalid API key or authentication failed. Please check your API key in settings."
)
NOT_FOUND_MESSAGE = "Model not found or unavailable. Please try a different model."

ClientFactory = Callable[[str], Any]


@dataclass
class SynthesisResult:
    wav: bytes
    audio_format: AudioFormat
    voice: str
    expression: str
    model_id: str
    text_length: int
    duration: float


def create_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def build_generation_config(voice: str) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_modalities=["AUDIO"],
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
            )
        ),
    )


def parse_retry_delay(message: str) -> Optional[int]:
    match = RETRY_DELAY_PATTERN.search(message)
    if match:
        return math.ceil(float(match.group(1)))
    return None


def classify_upstream_error(exc: Exception) -> SynthesisError:
    """Map an upstream failure to a user-facing error.

    API errors carrying an HTTP code are classified by that code. Anything
    else falls back to matching well-known phrases in the message.
    """
    message = str(exc) or "Voice synthesis failed"
    lowered = message.lower()
    code = exc.code if isinstance(exc, errors.APIError) else None

    if code == 429 or any(s in lowered for s in ("429", "quota", "rate limit")):
        return QuotaExceededError(
            QUOTA_MESSAGE, detail=QUOTA_DETAIL, retry_delay=parse_retry_delay(message)
        )

    if code in (401, 403) or any(
        s in lowered for s in ("401", "403", "api key", "authentication", "unauthorized")
    ):
        return AuthenticationError(AUTH_MESSAGE)

    if (
        code == 404
        or "404" in lowered
        or "not found" in lowered
        or ("model" in lowered and "not available" in lowered)
    ):
        return ModelNotFoundError(NOT_FOUND_MESSAGE)

    return SynthesisError("Voice synthesis failed", detail=message[:MAX_DETAIL_CHARS])


def extract_audio_data(response: Any) -> Optional[Union[bytes, str]]:
    """Return the first inline audio payload in a generate_content response."""
    candidates = getattr(response, "candidates", None) or []
    logger.debug("Analyzing response: candidates=%d", len(candidates))
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            return inline_data.data
    return None


def decode_audio_data(data: Union[bytes, bytearray, str]) -> bytes:
    """Decode an inline payload to raw PCM; strings are base64."""
    if isinstance(data, str):
        try:
            return base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise SynthesisError("Failed to decode audio data", detail=str(e)) from e
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise SynthesisError(
        "Failed to decode audio data",
        detail=f"Invalid audio data type: {type(data).__name__}",
    )


def validate_text(text: Optional[str], max_length: int) -> str:
    if not text or not isinstance(text, str) or not text.strip():
        raise InvalidArgumentError("Text is required")
    if len(text) > max_length:
        raise InvalidArgumentError(
            f"Text is too long ({len(text)} characters, max {max_length})"
        )
    return text


def synthesize_speech(
    text: str,
    voice: str,
    expression: str,
    api_key: str,
    model_id: Optional[str] = None,
    config: Optional[Config] = None,
    audio_format: Optional[AudioFormat] = None,
    accent_instruction: Optional[str] = None,
    model_name_placeholder: Optional[str] = None,
    expression_instructions: Optional[dict[str, str]] = None,
    client: Optional[Any] = None,
    client_factory: ClientFactory = create_client,
) -> SynthesisResult:
    """Synthesize text to speech and return it as WAV.

    Args:
        text: Text to speak
        voice: Prebuilt voice name (e.g., 'Puck')
        expression: Expression style key (e.g., 'warm_friendly')
        api_key: Gemini API key
        model_id: Gemini TTS model, defaults to ``config.tts_model``
        config: Configuration object
        audio_format: Override for the PCM format the model returns
        accent_instruction: Override for the accent instruction
        model_name_placeholder: Override for the voice-name placeholder
        expression_instructions: Override for the expression instruction table
        client: Pre-built genai client; created from ``api_key`` if omitted
        client_factory: Builds a client from an API key

    Raises:
        InvalidArgumentError: If the text, voice or expression is invalid
        SynthesisError: If the upstream call fails or returns no audio
    """
    cfg = config or Config.load()
    if not api_key:
        raise InvalidArgumentError(
            "API key is required. Please configure it in the setup."
        )
    model_id = model_id or cfg.tts_model
    audio_format = audio_format or cfg.audio

    validate_text(text, cfg.max_text_length)
    cfg.get_voice(voice)
    if expression not in cfg.expressions:
        raise InvalidArgumentError(
            f"Invalid expression. Must be one of: {', '.join(cfg.expressions)}"
        )

    spoken_text = replace_model_name(
        text, voice, model_name_placeholder or cfg.model_name_placeholder
    )
    instruction = cfg.get_expression_instruction(expression, expression_instructions)
    prompt = build_prompt(
        accent_instruction or cfg.accent_instruction, instruction, spoken_text
    )
    logger.debug(
        "Prompt constructed: length=%d expression=%s", len(prompt), expression
    )

    if client is None:
        client = client_factory(api_key)

    logger.info(
        "Calling Gemini for speech: model=%s voice=%s prompt_length=%d",
        model_id,
        voice,
        len(prompt),
    )
    try:
        response = client.models.generate_content(
            model=model_id,
            contents=prompt,
            config=build_generation_config(voice),
        )
    except VeraVoiceError:
        raise
    except Exception as e:
        logger.warning("Gemini speech request failed: %s", str(e)[:200])
        raise classify_upstream_error(e) from e

    audio_data = extract_audio_data(response)
    if not audio_data:
        raise SynthesisError("No audio data found in Gemini response")

    pcm = decode_audio_data(audio_data)
    if not is_frame_aligned(pcm, audio_format.channels, audio_format.sample_width):
        logger.warning(
            "PCM length %d is not a whole number of %d-byte frames",
            len(pcm),
            audio_format.block_align,
        )

    wav = audio_format.encode(pcm)
    duration = pcm_duration(len(pcm), audio_format)
    logger.info(
        "Synthesis complete: voice=%s pcm_bytes=%d wav_bytes=%d duration=%.2fs",
        voice,
        len(pcm),
        len(wav),
        duration,
    )

    return SynthesisResult(
        wav=wav,
        audio_format=audio_format,
        voice=voice,
        expression=expression,
        model_id=model_id,
        text_length=len(text),
        duration=duration,
    )


def check_api_key(
    api_key: str,
    config: Optional[Config] = None,
    client: Optional[Any] = None,
    client_factory: ClientFactory = create_client,
) -> str:
    """Validate an API key with a minimal generation request.

    Returns:
        A confirmation message

    Raises:
        InvalidArgumentError: If the key is empty
        AuthenticationError: If the key is rejected (401) or forbidden (403)
        QuotaExceededError: If the key is rate limited
        UpstreamAPIError: For any other upstream API error
        SynthesisError: If the API cannot be reached
    """
    if not api_key or not isinstance(api_key, str):
        raise InvalidArgumentError("API key is required")

    cfg = config or Config.load()
    if client is None:
        client = client_factory(api_key)

    logger.info("Validating API key: key_length=%d", len(api_key))
    try:
        client.models.generate_content(model=cfg.key_check_model, contents="test")
    except errors.APIError as e:
        if e.code == 401:
            raise AuthenticationError(
                "Your API key is invalid or expired. Please check your key and try again."
            ) from e
        if e.code == 429:
            raise QuotaExceededError(
                "Rate limit exceeded. Please try again later.",
                retry_delay=parse_retry_delay(str(e)),
            ) from e
        if e.code == 403:
            raise AccessForbiddenError(
                "Access forbidden. Your API key may not have the required permissions."
            ) from e
        reason = e.message or e.status or "Unknown error occurred"
        raise UpstreamAPIError(
            f"Gemini API error: {reason}", status_code=e.code or 500
        ) from e
    except Exception as e:
        logger.error("Key validation could not reach Gemini: %s", e)
        raise SynthesisError(
            "Failed to connect to Gemini API. "
            "Please check your internet connection and try again."
        ) from e

    logger.info("API key is valid")
    return "Your Gemini key is valid and working!"
