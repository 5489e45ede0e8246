"""Stdlib logging setup for the HTTP interface layer.

Domain and application code report through Logfire; routes and middleware
use module loggers configured here.
"""

import logging
import sys

from atlas.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncpg", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from settings.

    DEBUG in debug mode, INFO otherwise. SQL echo is controlled by the engine
    and is left alone here.
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )
