"""FastAPI dependencies for request authentication."""

from fastapi import Depends, HTTPException, Request, status

from atlas.application.usecase.auth import Anonymous, Authenticated, AuthOutcome
from atlas.domain.model.account import Account


def get_auth_outcome(request: Request) -> AuthOutcome:
    """Auth outcome stored by the authentication middleware."""
    return getattr(request.state, "auth", Anonymous())


def require_account(outcome: AuthOutcome = Depends(get_auth_outcome)) -> Account:
    """Authenticated account, or 401 for anonymous callers."""
    if not isinstance(outcome, Authenticated):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return outcome.principal.account
