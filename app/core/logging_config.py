"""Process-wide logging setup driven by settings."""

from __future__ import annotations

import logging

from app.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Install the root handler and quiet loggers that echo request URLs."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request URL at INFO, and ours carry the api_key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
