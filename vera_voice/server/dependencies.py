"""FastAPI dependency injection for vera-voice server."""

from fastapi import Request

from ..config import Config
from ..synthesis import ClientFactory, create_client


def get_config(request: Request) -> Config:
    """Get the configuration from app state."""
    return request.app.state.config


def get_client_factory() -> ClientFactory:
    """Return the callable that builds a Gemini client from an API key.

    Overridden in tests to inject fake clients.
    """
    return create_client
