"""Base model for domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Entities are never mutated in place; a changed entity is a new instance
    produced by :meth:`evolve` and handed to its repository.
    """

    model_config = ConfigDict(frozen=True)

    def evolve(self, **changes: Any) -> Self:
        """Copy with ``changes`` applied, validated like a new instance.

        Unlike ``model_copy(update=...)`` the result is validated, so a bad
        value fails here rather than in the store.
        """
        return self.model_validate({**self.model_dump(), **changes})
