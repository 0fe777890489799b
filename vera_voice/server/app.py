"""FastAPI application factory for vera-voice server."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..config import Config
from ..log import setup_logging
from .middleware import setup_middleware
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Config = app.state.config
    logger.info(
        "vera-voice %s ready: tts_model=%s voices=%d audio=%dHz/%dch/%dbit",
        __version__,
        config.tts_model,
        len(config.voice_models),
        config.audio.sample_rate,
        config.audio.channels,
        config.audio.bits_per_sample,
    )
    yield
    logger.info("Server shutting down.")


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration object, loaded from disk if omitted

    Returns:
        Configured FastAPI application
    """
    cfg = config or Config.load()
    setup_logging(cfg.log_level)

    app = FastAPI(
        title="vera-voice Server",
        description="Text-to-Speech API using Gemini prebuilt voices",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg

    setup_middleware(app, allow_origins=cfg.cors_origins)
    app.include_router(router)

    return app
