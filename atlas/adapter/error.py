"""Adapter layer errors."""


class AdapterError(Exception):
    """Failure while talking to an external system."""

    pass


class ProviderError(AdapterError):
    """An identity provider rejected or failed an exchange.

    Attributes:
        provider: Canonical provider name, if known
        status_code: HTTP status returned by the provider, if any
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)
