"""Configuration for the bucket manager."""

from .base import Configuration, ConfigValidationResult, ConfigurationError, ValidationError, SerializationError
from .client import ClientConfig, KNOWN_REGIONS, DEFAULT_REGION

__all__ = [
    "Configuration",
    "ConfigValidationResult",
    "ConfigurationError",
    "ValidationError",
    "SerializationError",
    "ClientConfig",
    "KNOWN_REGIONS",
    "DEFAULT_REGION",
]
