"""Server package for vera-voice HTTP API."""

from .app import create_app
from .schemas import (
    CheckKeyRequest,
    ErrorResponse,
    HealthResponse,
    ModelsResponse,
    ServerInfoResponse,
    SynthesizeRequest,
    SynthesizeResponse,
)

__all__ = [
    "create_app",
    "SynthesizeRequest",
    "SynthesizeResponse",
    "CheckKeyRequest",
    "ModelsResponse",
    "ServerInfoResponse",
    "HealthResponse",
    "ErrorResponse",
]
