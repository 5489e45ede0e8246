"""Domain value objects for Atlas.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

UNKNOWN_FIRST_NAME = "Unknown"


class ValueObject(BaseModel):
    """Immutable value, compared by its fields."""

    model_config = ConfigDict(frozen=True)


class AuthProvider(str, Enum):
    """Supported identity providers (canonical provider names)."""

    GOOGLE = "google"
    GITHUB = "github"
    APPLE = "apple"


class MetricEventType(str, Enum):
    """Kind of recorded metric/audit event."""

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    BUTTON_CLICK = "BUTTON_CLICK"
    PAGE_VIEW = "PAGE_VIEW"


class PersonName(ValueObject):
    """Given and family name of an account holder."""

    first_name: str
    last_name: str

    @classmethod
    def parse(cls, full_name: str | None) -> "PersonName":
        """Split a provider-reported full name.

        The name is split on the first run of whitespace into at most two
        parts: the first part is the given name, the remainder (possibly
        empty) the family name. ``None`` or an all-whitespace name yields
        ``Unknown`` / ``""``.

        Examples:
            >>> PersonName.parse("Ann Lee")
            PersonName(first_name='Ann', last_name='Lee')
            >>> PersonName.parse("  Mary  Ann   Smith ")
            PersonName(first_name='Mary', last_name='Ann   Smith')
        """
        if full_name is None or not full_name.strip():
            return cls(first_name=UNKNOWN_FIRST_NAME, last_name="")

        parts = full_name.strip().split(None, 1)
        first_name = parts[0]
        last_name = parts[1] if len(parts) > 1 else ""

        return cls(first_name=first_name, last_name=last_name)

    @property
    def full_name(self) -> str:
        """Display name."""
        return f"{self.first_name} {self.last_name}"


class IdentityAssertion(ValueObject):
    """Verified identity handed over by an identity provider.

    Values are trusted as-is once the provider client has completed its own
    protocol-level verification.
    """

    provider: AuthProvider
    provider_user_id: str  # Stable subject id ("sub") from the provider
    email: str
    name: str | None = None
    avatar_url: str | None = None
    email_verified: bool = False
    provider_username: str | None = None

    @field_validator("provider_user_id", "email")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Subject id and email are required to link an identity."""
        if not v or not v.strip():
            raise ValueError("Identity assertion requires a subject id and email")
        return v
