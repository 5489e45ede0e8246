"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from atlas.domain.service import AccountService, IdentityLinkService
from atlas.domain.value import AccountId, AuthProvider

from ..base import BaseUseCase


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    account_id: AccountId  # Authenticated principal's account


class IdentityLinkInfo(BaseModel):
    """Linked identity information for response."""

    provider: AuthProvider
    provider_email: str | None
    is_primary: bool
    linked_at: datetime
    last_used_at: datetime


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    id: int
    email: str
    name: str
    first_name: str
    last_name: str
    profile_picture: str | None
    last_login_at: datetime | None
    identities: list[IdentityLinkInfo]


class GetCurrentUserUseCase(
    BaseUseCase[GetCurrentUserRequest, GetCurrentUserResponse]
):
    """Use case for getting the current authenticated account."""

    def __init__(
        self,
        account_service: AccountService,
        identity_link_service: IdentityLinkService,
    ) -> None:
        """Initialize get current user use case.

        Args:
            account_service: Account domain service
            identity_link_service: Identity link domain service
        """
        self.account_service = account_service
        self.identity_link_service = identity_link_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Load the account and its linked identities.

        Raises:
            NotFoundError: If the account no longer exists
        """
        account = await self.account_service.get_by_id(request.account_id)
        links = await self.identity_link_service.get_links_for_account(request.account_id)

        return GetCurrentUserResponse(
            id=request.account_id,
            email=account.email,
            name=account.full_name,
            first_name=account.first_name,
            last_name=account.last_name,
            profile_picture=account.avatar_url,
            last_login_at=account.last_login_at,
            identities=[
                IdentityLinkInfo(
                    provider=link.provider,
                    provider_email=link.provider_email,
                    is_primary=link.is_primary,
                    linked_at=link.linked_at,
                    last_used_at=link.last_used_at,
                )
                for link in links
            ],
        )
