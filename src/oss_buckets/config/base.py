"""Base configuration classes and validation framework.

Every configuration type implements ``validate()`` returning a
``ConfigValidationResult`` and can round-trip through plain dictionaries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List


class ConfigurationError(Exception):
    """Root of the configuration error hierarchy."""

    pass


class ValidationError(ConfigurationError):
    """Raised when configuration values are missing or malformed."""

    pass


class SerializationError(ConfigurationError):
    """Raised when configuration cannot be converted to or from a dictionary."""

    pass


@dataclass
class ConfigValidationResult:
    """Result of configuration validation.

    Attributes:
        success: True if validation passed, False otherwise
        errors: Messages describing each failed check
    """

    success: bool
    errors: List[str]

    @property
    def is_valid(self) -> bool:
        return self.success

    def add_error(self, error: str) -> None:
        """Record an error and mark validation as failed."""
        self.errors.append(error)
        self.success = False

    @classmethod
    def success_result(cls) -> ConfigValidationResult:
        return cls(success=True, errors=[])

    @classmethod
    def failure_result(cls, errors: List[str]) -> ConfigValidationResult:
        return cls(success=False, errors=errors.copy())


class Configuration(ABC):
    """Abstract base class for configuration types.

    Subclasses must implement:
    - validate(): Perform configuration-specific validation
    - to_dict(): Convert configuration to a JSON-compatible dictionary
    - from_dict(): Create configuration from a dictionary (class method)
    """

    @abstractmethod
    def validate(self) -> ConfigValidationResult:
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> Configuration:
        pass

    def is_valid(self) -> bool:
        return self.validate().success

    def validate_or_raise(self) -> None:
        """Validate configuration and raise ValidationError if invalid.

        Raises:
            ValidationError: If configuration validation fails
        """
        result = self.validate()
        if not result.success:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in result.errors)
            raise ValidationError(error_msg)
