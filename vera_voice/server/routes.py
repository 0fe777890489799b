"""HTTP route handlers for vera-voice server."""

import asyncio
import base64
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from .. import __version__
from ..config import Config
from ..exceptions import InvalidArgumentError
from ..synthesis import ClientFactory, check_api_key, synthesize_speech
from ..wav import AudioFormat, check_header_fields
from .dependencies import get_client_factory, get_config
from .schemas import (
    AudioFormatResponse,
    AudioSettings,
    CheckKeyRequest,
    CheckKeyResponse,
    ErrorResponse,
    HealthResponse,
    ModelsResponse,
    ServerInfoResponse,
    SynthesizeRequest,
    SynthesizeResponse,
    VoiceModelResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Authentication failed"},
    404: {"model": ErrorResponse, "description": "Model not found"},
    429: {"model": ErrorResponse, "description": "Quota exceeded"},
    500: {"model": ErrorResponse, "description": "Synthesis error"},
}


def resolve_audio_format(settings: Optional[AudioSettings], default: AudioFormat) -> AudioFormat:
    """Validate a client audio override, falling back to the configured format."""
    if settings is None:
        return default

    values = {}
    for field in ("sampleRate", "channels", "sampleWidth"):
        value = getattr(settings, field)
        # Integral JSON floats such as 24000.0 count as integers.
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidArgumentError(f"Invalid {field}: must be a positive integer")
        values[field] = value
    if not settings.format or not isinstance(settings.format, str):
        raise InvalidArgumentError("Invalid format: must be a string")

    check_header_fields(values["sampleRate"], values["channels"], values["sampleWidth"])

    return AudioFormat(
        sample_rate=values["sampleRate"],
        channels=values["channels"],
        sample_width=values["sampleWidth"],
        format=settings.format,
    )


@router.get("/api/models", response_model=ModelsResponse)
async def models(config: Config = Depends(get_config)) -> ModelsResponse:
    """List voices, expressions and sample texts."""
    return ModelsResponse(
        voice_models=config.voice_names(),
        voice_models_with_gender=[
            VoiceModelResponse(name=v.name, gender=v.gender, trait=v.trait)
            for v in config.voice_models
        ],
        expressions=list(config.expressions),
        expression_instructions=dict(config.expression_instructions),
        default_model=config.default_voice,
        default_expression=config.default_expression,
        sample_texts=dict(config.sample_texts),
    )


@router.post(
    "/api/synthesize",
    response_model=SynthesizeResponse,
    responses=ERROR_RESPONSES,
)
async def synthesize(
    body: SynthesizeRequest,
    config: Config = Depends(get_config),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> SynthesizeResponse:
    """Synthesize text to speech and return base64 WAV in a JSON envelope."""
    logger.info(
        "Processing synthesis request: voice=%s expression=%s text_length=%d has_settings=%s",
        body.model_name,
        body.expression,
        len(body.text or ""),
        body.settings is not None,
    )

    if not body.api_key:
        raise InvalidArgumentError("API key is required. Please configure it in the setup.")
    if not body.model_id:
        raise InvalidArgumentError("Model ID is required. Please configure it in the setup.")

    settings = body.settings
    audio_format = resolve_audio_format(settings.audio if settings else None, config.audio)

    result = await asyncio.to_thread(
        synthesize_speech,
        text=body.text or "",
        voice=body.model_name or "",
        expression=body.expression or "",
        api_key=body.api_key,
        model_id=body.model_id,
        config=config,
        audio_format=audio_format,
        accent_instruction=settings.accentInstruction if settings else None,
        model_name_placeholder=settings.modelNamePlaceholder if settings else None,
        expression_instructions=settings.expressionInstructions if settings else None,
        client_factory=client_factory,
    )

    return SynthesizeResponse(
        message=f"Voice synthesis completed successfully using {result.voice} model",
        file_type=result.audio_format.format,
        file_data=base64.b64encode(result.wav).decode("ascii"),
        model_used=result.voice,
        expression_used=result.expression,
        text_length=result.text_length,
    )


@router.post(
    "/api/check-key",
    response_model=CheckKeyResponse,
    responses=ERROR_RESPONSES,
)
async def check_key(
    body: CheckKeyRequest,
    config: Config = Depends(get_config),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> CheckKeyResponse:
    """Validate a Gemini API key."""
    message = await asyncio.to_thread(
        check_api_key,
        body.key or "",
        config=config,
        client_factory=client_factory,
    )
    return CheckKeyResponse(message=message, valid=True)


@router.get("/info", response_model=ServerInfoResponse)
async def info(config: Config = Depends(get_config)) -> ServerInfoResponse:
    """Get server information."""
    return ServerInfoResponse(
        version=__version__,
        tts_model=config.tts_model,
        audio=AudioFormatResponse(
            sample_rate=config.audio.sample_rate,
            channels=config.audio.channels,
            sample_width=config.audio.sample_width,
            format=config.audio.format,
        ),
        voices=len(config.voice_models),
        expressions=list(config.expressions),
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)
