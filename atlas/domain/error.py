"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UniqueConstraintViolationError(DomainError):
    """Raised by a store when a create would break a uniqueness rule.

    Recoverable: the caller is expected to re-query and continue.
    """

    pass


class DuplicateAccountError(UniqueConstraintViolationError):
    """Another account already owns this email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Account already exists for email: {email}")


class DuplicateIdentityLinkError(UniqueConstraintViolationError):
    """Another link already claims this provider identity."""

    def __init__(self, provider: str, provider_user_id: str):
        self.provider = provider
        self.provider_user_id = provider_user_id
        super().__init__(
            f"Identity already linked: {provider}:{provider_user_id}"
        )


class DuplicatePrimaryLinkError(UniqueConstraintViolationError):
    """The account already has a primary link."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account already has a primary link: {account_id}")


class UnsavedEntityError(DomainError):
    """Raised when a store-assigned ID is read from an entity never saved."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} has not been saved")
