"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Required configuration is missing or malformed."""

    def __init__(self, key: str, reason: str = "missing"):
        self.key = key
        super().__init__(f"Configuration {key} is {reason}")
