"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A required setting is missing or unusable.

    Attributes:
        setting: Dotted settings path, as used in environment variables
            with ``__`` separators (e.g. ``auth.google.client_id``)
    """

    def __init__(self, setting: str, message: str) -> None:
        self.setting = setting
        super().__init__(f"{setting}: {message}")
