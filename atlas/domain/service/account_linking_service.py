"""Account linking domain service.

Resolves a verified identity assertion to a local account, creating the
account and/or the federated identity link as needed.
"""

from datetime import datetime, timezone
from typing import Callable

import logfire

from atlas.domain.error import NotFoundError, UniqueConstraintViolationError
from atlas.domain.model.account import Account
from atlas.domain.model.identity_link import IdentityLink
from atlas.domain.repository import (
    AccountRepository,
    IdentityLinkRepository,
    TransactionManager,
)
from atlas.domain.value import AccountId, IdentityAssertion, PersonName


# A lost creation race is re-resolved against the winner's rows
MAX_LINK_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountLinkingService:
    """Domain service binding federated identities to accounts.

    Resolution order:
    1. A link exists for (provider, subject): the owning account logs in.
    2. No link, but an account owns the asserted email: a new link is
       attached to that account.
    3. Neither: a new account is created together with its primary link.

    Each attempt runs in one unit of work: an attempt that fails leaves no
    account or link behind.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        identity_link_repository: IdentityLinkRepository,
        transaction_manager: TransactionManager,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize account linking service.

        Args:
            account_repository: Account repository
            identity_link_repository: Identity link repository
            transaction_manager: Unit of work spanning both repositories
            clock: Returns the current timezone-aware time
        """
        self.account_repository = account_repository
        self.identity_link_repository = identity_link_repository
        self.transaction_manager = transaction_manager
        self.clock = clock or _utcnow

    async def link_identity(self, assertion: IdentityAssertion) -> Account:
        """Resolve an identity assertion to a persisted account.

        Args:
            assertion: Verified identity from the provider

        Returns:
            The logged-in account, with its ID assigned

        Raises:
            NotFoundError: If a link points at a missing account
            UniqueConstraintViolationError: If uniqueness conflicts persist
                after all attempts
        """
        with logfire.span(
            "account_linking_service.link_identity",
            provider=assertion.provider.value,
            provider_user_id=assertion.provider_user_id,
        ):
            attempt = 1
            while True:
                try:
                    async with self.transaction_manager.atomic():
                        return await self._resolve(assertion)
                except UniqueConstraintViolationError as e:
                    if attempt == MAX_LINK_ATTEMPTS:
                        logfire.error(
                            "Identity linking conflict not resolved",
                            attempts=attempt,
                            error=str(e),
                        )
                        raise
                    logfire.warn(
                        "Concurrent identity linking detected, retrying",
                        attempt=attempt,
                        error=str(e),
                    )
                    attempt += 1

    async def _resolve(self, assertion: IdentityAssertion) -> Account:
        now = self.clock()

        link = await self.identity_link_repository.find_by_provider(
            assertion.provider, assertion.provider_user_id
        )
        if link:
            return await self._login_linked(link, assertion, now)

        account = await self.account_repository.find_by_email(assertion.email)
        if account:
            return await self._link_existing(account, assertion, now)

        return await self._create_linked(assertion, now)

    async def _login_linked(
        self, link: IdentityLink, assertion: IdentityAssertion, now: datetime
    ) -> Account:
        account = await self.account_repository.find_by_id(link.account_id)
        if not account:
            logfire.error(
                "Identity link points at missing account",
                link_id=str(link.id),
                account_id=str(link.account_id),
            )
            raise NotFoundError("Account", str(link.account_id))

        await self.identity_link_repository.save(
            link.evolve(last_used_at=now)
        )
        saved = await self.account_repository.save(
            self._refresh(account, assertion, now)
        )

        logfire.info(
            "Existing identity logged in",
            account_id=str(saved.id),
            provider=assertion.provider.value,
        )
        return saved

    async def _link_existing(
        self, account: Account, assertion: IdentityAssertion, now: datetime
    ) -> Account:
        saved = await self.account_repository.save(
            self._refresh(account, assertion, now)
        )
        existing_links = await self.identity_link_repository.find_all_by_account_id(
            saved.saved_id
        )
        await self.identity_link_repository.save(
            self._new_link(saved.saved_id, assertion, now, is_primary=not existing_links)
        )

        logfire.info(
            "Identity linked to existing account",
            account_id=str(saved.id),
            provider=assertion.provider.value,
            is_primary=not existing_links,
        )
        return saved

    async def _create_linked(self, assertion: IdentityAssertion, now: datetime) -> Account:
        name = PersonName.parse(assertion.name)

        saved = await self.account_repository.save(
            Account(
                email=assertion.email,
                first_name=name.first_name,
                last_name=name.last_name,
                avatar_url=assertion.avatar_url,
                created_at=now,
                updated_at=now,
                last_login_at=now,
            )
        )
        await self.identity_link_repository.save(
            self._new_link(saved.saved_id, assertion, now, is_primary=True)
        )

        logfire.info(
            "Account created from federated identity",
            account_id=str(saved.id),
            provider=assertion.provider.value,
        )
        return saved

    @staticmethod
    def _refresh(account: Account, assertion: IdentityAssertion, now: datetime) -> Account:
        """Copy provider-reported profile data onto the account.

        Fields the assertion does not carry are left untouched.
        """
        updates: dict = {"last_login_at": now, "updated_at": now}

        if assertion.name is not None:
            name = PersonName.parse(assertion.name)
            updates["first_name"] = name.first_name
            updates["last_name"] = name.last_name

        if assertion.avatar_url is not None:
            updates["avatar_url"] = assertion.avatar_url

        return account.evolve(**updates)

    @staticmethod
    def _new_link(
        account_id: AccountId,
        assertion: IdentityAssertion,
        now: datetime,
        is_primary: bool,
    ) -> IdentityLink:
        return IdentityLink(
            account_id=account_id,
            provider=assertion.provider,
            provider_user_id=assertion.provider_user_id,
            provider_email=assertion.email,
            provider_username=assertion.provider_username,
            is_primary=is_primary,
            linked_at=now,
            last_used_at=now,
        )
