"""Base class for dependency injection providers.

Concrete wiring (config, services, use cases) lives in providers without
subclasses. Swappable infrastructure is declared as a component base class
with exactly one production and one mock subclass; containers pick one of
the two per component.
"""

from typing import ClassVar, Literal, Type

from dishka import Provider

Component = Literal["google", "persistence"]


class ProviderBase(Provider):
    """Provider with component metadata.

    Attributes:
        __mock_component__: Component name on a component base class, None
            for concrete providers
        __is_mock__: Whether a subclass is the mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_component(cls) -> bool:
        """Whether this is a component base with selectable implementations."""
        return bool(cls.__subclasses__())

    @classmethod
    def select(cls, use_mock: bool = False) -> Type["ProviderBase"]:
        """Implementation class to instantiate for this provider.

        Concrete providers select themselves.

        Raises:
            ValueError: If the component has no implementation of that kind
        """
        if not cls.is_component():
            return cls

        for impl in cls.__subclasses__():
            if impl.__is_mock__ == use_mock:
                return impl

        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {cls.__mock_component__}")
