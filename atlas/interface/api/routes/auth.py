"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from atlas.application.usecase.auth import LoginUseCase, LogoutUseCase
from atlas.application.usecase.auth.login import LoginRequest
from atlas.application.usecase.auth.logout import LogoutRequest
from atlas.config import Settings
from atlas.domain.service import AuthService
from atlas.domain.value import AuthProvider
from atlas.interface.api.session_cookies import (
    clear_session_cookies,
    error_redirect_url,
    resolve_redirect_url,
    set_session_cookies,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"], route_class=DishkaRoute)


class LogoutResponse(BaseModel):
    """Logout response."""

    message: str


@router.get("/oauth2/authorization/google")
async def initiate_google_login(auth_service: FromDishka[AuthService]):
    """Start the Google login flow.

    Returns:
        HTTP 302 redirect to Google's authorization endpoint
    """
    state = secrets.token_urlsafe(32)
    logger.info("Initiating google login")

    auth_url = await auth_service.initiate_login(AuthProvider.GOOGLE, state)
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/login/oauth2/code/google")
async def google_callback(
    request: Request,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """Handle the Google OAuth callback and complete login.

    On success the session cookies are written on the redirect to the front
    end. On any failure the browser is sent to the front end's error page and
    no cookie is written.

    Example:
        GET /login/oauth2/code/google?code=abc123&state=xyz789

        Redirects to: http://localhost:3000/
        Sets cookies: jwt, user_info
    """
    referrer = request.headers.get("referer")

    if error or not code or not state:
        message = error or "Missing authorization code"
        logger.error(f"OAuth2 authentication failed: {message}")
        return RedirectResponse(
            url=error_redirect_url(settings, referrer, message),
            status_code=status.HTTP_302_FOUND,
        )

    try:
        login_response = await login_use_case.execute(
            LoginRequest(provider=AuthProvider.GOOGLE, code=code, state=state)
        )
    except Exception as e:
        logger.exception(f"OAuth2 authentication failed: {str(e)}")
        return RedirectResponse(
            url=error_redirect_url(settings, referrer, str(e)),
            status_code=status.HTTP_302_FOUND,
        )

    redirect_url = resolve_redirect_url(settings, referrer)
    redirect_response = RedirectResponse(
        url=redirect_url, status_code=status.HTTP_302_FOUND
    )

    # Cookies must be set on the returned response object itself
    set_session_cookies(
        redirect_response, login_response.token, login_response.account, settings
    )

    logger.info(
        f"Login successful for account: id={login_response.account.id}, "
        f"redirecting to: {redirect_url}"
    )
    return redirect_response


@router.post("/api/logout", response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Log out by clearing the session cookies.

    Always succeeds; recording the LOGOUT event is best effort.
    """
    clear_session_cookies(response, settings)

    await logout_use_case.execute(
        LogoutRequest(token=request.cookies.get(settings.auth.cookie_name))
    )

    return LogoutResponse(message="Logged out successfully")
