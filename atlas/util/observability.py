"""Logfire configuration and instrumentation.

Usage:
    import logfire

    logfire.info("Identity linked to existing account", account_id=str(account.id))

    with logfire.span("account_linking_service.link_identity", provider=provider):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from atlas.config import Settings

SERVICE_NAME = "atlas-api"

# Session tokens and profile cookies never leave the process
SCRUB_PATTERNS = ["jwt", "user_info", "access_token", "code_verifier"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire.

    Data is sent to Logfire cloud when ``observability.send_to_logfire`` is
    true, or when it is unset and a token is configured. Otherwise output
    goes to the console only.
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request. Headers are not captured: they carry cookies."""

    def _request_attributes(request, attributes):
        return {
            **attributes,
            "method": request.method,
            "path": request.url.path,
        }

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound identity provider calls."""
    logfire.instrument_httpx()
