"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends

from atlas.application.usecase.auth import GetCurrentUserUseCase
from atlas.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from atlas.domain.model.account import Account
from atlas.interface.api.dependencies import require_account

router = APIRouter(prefix="/api/user", tags=["users"], route_class=DishkaRoute)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    account: Account = Depends(require_account),
) -> GetCurrentUserResponse:
    """Get the authenticated account and its linked identities.

    Raises:
        HTTPException: 401 if the request is not authenticated
    """
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(account_id=account.saved_id)
    )
