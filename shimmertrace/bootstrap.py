"""Process-level setup for hosts embedding shimmertrace."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from shimmertrace.config import Settings, settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(config: Settings | None = None) -> int:
    """Load ``.env`` and configure root logging. Returns the level applied."""
    load_dotenv()
    config = config or settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("shimmertrace").setLevel(level)
    return level
