"""Session cookie handling.

The session token travels in an http-only cookie. A second, script-readable
cookie carries a URL-encoded JSON snapshot of the account for the front end's
navigation bar; it is informational only and never trusted by the server.
"""

import json
import logging
from urllib.parse import quote, quote_plus

from starlette.responses import Response

from atlas.config import Settings
from atlas.domain.model.account import Account

logger = logging.getLogger(__name__)


def profile_snapshot(account: Account) -> dict:
    """Account fields exposed to the front end."""
    return {
        "id": account.id,
        "email": account.email,
        "name": account.full_name,
        "firstName": account.first_name,
        "lastName": account.last_name,
        "profilePicture": account.avatar_url if account.avatar_url is not None else "",
    }


def encode_profile_cookie(account: Account) -> str:
    """Compact JSON snapshot, form-URL-encoded so it is a legal cookie value."""
    payload = json.dumps(profile_snapshot(account), separators=(",", ":"))
    return quote_plus(payload)


def set_session_cookies(
    response: Response, token: str, account: Account, settings: Settings
) -> None:
    """Attach the session credential (and the profile snapshot) to a response.

    Failing to write the profile cookie is logged and ignored; the session
    cookie is always written.
    """
    auth = settings.auth

    response.set_cookie(
        key=auth.cookie_name,
        value=token,
        max_age=auth.cookie_max_age,
        path="/",
        domain=auth.cookie_domain,
        secure=bool(auth.cookie_secure),
        httponly=True,
        samesite=auth.cookie_samesite,
    )
    logger.info(f"Session cookie set for account: id={account.id}")

    if not auth.profile_cookie_enabled:
        return

    try:
        response.set_cookie(
            key=auth.profile_cookie_name,
            value=encode_profile_cookie(account),
            max_age=auth.cookie_max_age,
            path="/",
            domain=auth.cookie_domain,
            secure=bool(auth.cookie_secure),
            httponly=False,
            samesite=auth.cookie_samesite,
        )
    except Exception:
        logger.exception(f"Failed to set profile cookie for account: id={account.id}")


def clear_session_cookies(response: Response, settings: Settings) -> None:
    """Expire both cookies with the same path and domain they were set with."""
    auth = settings.auth

    for key, httponly in (
        (auth.cookie_name, True),
        (auth.profile_cookie_name, False),
    ):
        response.set_cookie(
            key=key,
            value="",
            max_age=0,
            path="/",
            domain=auth.cookie_domain,
            secure=bool(auth.cookie_secure),
            httponly=httponly,
            samesite=auth.cookie_samesite,
        )


def resolve_redirect_url(settings: Settings, referrer: str | None) -> str:
    """Front-end URL to send the browser to after a login attempt.

    Order: the configured front-end URL (normalized to end with ``/``), then a
    known development origin found in the referrer, then the fallback URL.
    """
    configured = settings.frontend.url
    if configured and configured.strip():
        configured = configured.strip()
        return configured if configured.endswith("/") else configured + "/"

    if referrer:
        for marker, origin in settings.frontend.dev_origins.items():
            if marker in referrer:
                return origin

    return settings.frontend.fallback_url


def error_redirect_url(settings: Settings, referrer: str | None, message: str) -> str:
    """Front-end error page URL carrying the failure message."""
    target = resolve_redirect_url(settings, referrer)
    return f"{target}oauth-error?error={quote(message, safe='')}"
