"""Pydantic request/response models for the server API.

Request field names follow the browser client's JSON (``apiKey``,
``modelId``, ``accentInstruction``...). Most request fields are optional here
and checked by the route so that missing values produce the same 400 messages
the client already knows how to display.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AudioSettings(BaseModel):
    """Audio format override sent by the client (camelCase keys)."""

    sampleRate: Any = None
    channels: Any = None
    sampleWidth: Any = None
    format: Any = None


class SynthesisSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    audio: Optional[AudioSettings] = None
    accentInstruction: Optional[str] = None
    modelNamePlaceholder: Optional[str] = None
    expressionInstructions: Optional[dict[str, str]] = None


class SynthesizeRequest(BaseModel):
    """Request model for text-to-speech synthesis."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    text: Optional[str] = None
    model_name: Optional[str] = Field(default=None, description="Voice name (e.g., 'Puck')")
    expression: Optional[str] = None
    settings: Optional[SynthesisSettings] = None
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    model_id: Optional[str] = Field(default=None, alias="modelId")


class SynthesizeResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    message: str
    file_type: str
    file_data: str = Field(..., description="Base64-encoded audio file")
    model_used: str
    expression_used: str
    text_length: int


class VoiceModelResponse(BaseModel):
    name: str
    gender: str
    trait: str


class ModelsResponse(BaseModel):
    voice_models: list[str]
    voice_models_with_gender: list[VoiceModelResponse]
    expressions: list[str]
    expression_instructions: dict[str, str]
    default_model: str
    default_expression: str
    sample_texts: dict[str, str]


class CheckKeyRequest(BaseModel):
    key: Optional[str] = None


class CheckKeyResponse(BaseModel):
    message: str
    valid: bool


class AudioFormatResponse(BaseModel):
    sample_rate: int
    channels: int
    sample_width: int
    format: str


class ServerInfoResponse(BaseModel):
    """Response model for server info endpoint."""

    version: str
    tts_model: str
    audio: AudioFormatResponse
    voices: int
    expressions: list[str]


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Response model for error responses."""

    error: str
    errorType: Optional[str] = None
    detail: Optional[str] = None
    retryDelay: Optional[int] = None
