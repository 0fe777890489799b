"""Logging setup shared by the server and CLI."""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(name)-20s %(levelname)-8s %(message)s"

NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "urllib3")


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging once; repeated calls only change the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not any(getattr(h, "_vera_voice", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._vera_voice = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
