"""
Custom exception types for Recital.

Every exception carries a machine-readable code so callers can
handle specific failure modes programmatically.
"""


class RecitalError(Exception):
    """Base exception for all Recital errors."""

    def __init__(self, message: str, code: str = "RECITAL_ERROR"):
        self.code = code
        super().__init__(message)


class InvalidArgumentError(RecitalError):
    """Raised when a budget, event, relation or strategy is out of range."""

    def __init__(self, message: str, field: str | None = None, code: str = "INVALID_ARGUMENT"):
        self.field = field
        super().__init__(message, code=code)


class InvalidKeyError(InvalidArgumentError):
    """Raised when a musical key string cannot be parsed."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        msg = f"Invalid musical key '{key}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, field="key", code="INVALID_KEY")


class EventFileError(RecitalError):
    """Raised when an events file is missing or malformed."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message, code="EVENT_FILE_ERROR")


class ConfigError(RecitalError):
    """Raised when a config file cannot be read."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message, code="CONFIG_ERROR")
