#!/usr/bin/env python3
"""Run the Atlas API under uvicorn.

Logfire and logging are configured before the app module is imported so
that errors raised while building the app are reported.
"""

import sys

import logfire
import uvicorn

from atlas.config import Settings
from atlas.util.logging import setup_logging
from atlas.util.observability import configure_logfire

APP_PATH = "atlas.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting Atlas API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )

    try:
        uvicorn.run(
            APP_PATH,
            host="0.0.0.0",
            port=settings.port,
            # TLS is terminated by the reverse proxy
            proxy_headers=True,
            log_config=None,
        )
    except Exception as e:
        logfire.error(
            "Atlas API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
