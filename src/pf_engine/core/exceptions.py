"""Custom exception hierarchy for the Pathfinder progression engine.

All exceptions inherit from PfEngineError, enabling unified error handling
at the boundary of the calling application while preserving the context of
the operation that failed.

Example:
    >>> from pf_engine.core.exceptions import ValidationError
    >>> raise ValidationError("Level must be between 1 and 20", field_name="level", invalid_value=21)
"""

from __future__ import annotations

from typing import Any


class PfEngineError(Exception):
    """Base exception for all engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Rules Computation Exceptions
# =============================================================================


class ValidationError(PfEngineError):
    """Raised when an input violates a rules constraint.

    Covers invalid levels, empty/excessive/duplicate class lists, illegal
    equipment combinations, unknown ability names and exhausted spell slots.
    The offending input is never mutated.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class NotFoundError(PfEngineError):
    """Raised when a lookup misses.

    Typically an unknown class identifier in the rules catalog or a spell
    level with no entry in a spell-slot table.
    """

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        key: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error with lookup context.

        Args:
            message: Human-readable error description.
            resource: Kind of resource being looked up (e.g. 'class').
            key: The key that was not found.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if resource:
            combined_details["resource"] = resource
        if key is not None:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


class DomainInvariantError(PfEngineError):
    """Raised when a computed state breaks a rules invariant.

    These states are unreachable from valid inputs, so this error signals a
    caller-side contract violation. Values are never clamped to hide it.
    """

    def __init__(
        self,
        message: str,
        *,
        invariant: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invariant error.

        Args:
            message: Human-readable error description.
            invariant: Short name of the violated invariant.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if invariant:
            combined_details["invariant"] = invariant
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(PfEngineError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class CatalogError(ConfigurationError):
    """Raised when a rules catalog file cannot be read or validated."""

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with source file context.

        Args:
            message: Human-readable error description.
            source_file: Path to the catalog file.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        super().__init__(message, config_key="catalog_path", details=combined_details)


__all__ = [
    "PfEngineError",
    "ValidationError",
    "NotFoundError",
    "DomainInvariantError",
    "ConfigurationError",
    "CatalogError",
]
