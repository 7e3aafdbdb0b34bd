"""Core types shared by the festival and modulation layers."""

from recital.core.exceptions import (
    ConfigError,
    EventFileError,
    InvalidArgumentError,
    InvalidKeyError,
    RecitalError,
)

__all__ = [
    "RecitalError",
    "InvalidArgumentError",
    "InvalidKeyError",
    "EventFileError",
    "ConfigError",
]
