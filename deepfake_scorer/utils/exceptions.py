"""
Custom Exception Hierarchy
===========================

This module defines the exception hierarchy for the deepfake scoring
engine. The scoring math itself is total (every branch is clamped), so
errors only originate at the edges:
    - Invalid artifact metadata rejected before scoring
    - Invalid weight tables rejected at construction
    - Configuration files that cannot be loaded
    - Caller-level failures such as timeouts

Exception Hierarchy:
    DeepfakeScorerError (base)
    ├── ConfigurationError
    ├── ValidationError
    │   └── InvalidInputError
    ├── ScoringError
    │   └── WeightTableError
    └── AnalysisError
        └── AnalysisTimeoutError

Example Usage:
    >>> from deepfake_scorer.utils.exceptions import InvalidInputError
    >>> try:
    ...     analyzer.analyze("", -1)
    ... except InvalidInputError as e:
    ...     logger.error(f"Rejected artifact: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# =============================================================================
# Base Exception
# =============================================================================

class DeepfakeScorerError(Exception):
    """
    Base exception for all scoring engine errors.

    Attributes:
        message: Human-readable error message.
        code: Error code for programmatic handling.
        details: Additional error details dictionary.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            code: Error code (e.g., "INVALID_INPUT_ERROR").
            details: Additional context about the error.
            cause: The underlying exception.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self._default_code()
        self.details = details or {}
        self.cause = cause

        if cause:
            self.__cause__ = cause

    def _default_code(self) -> str:
        """Generate default error code from class name."""
        # CamelCase -> UPPER_SNAKE_CASE
        name = self.__class__.__name__
        code = ""
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                code += "_"
            code += char.upper()
        return code

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            Dictionary representation of the error.
        """
        result = {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"Details: {details_str}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(DeepfakeScorerError):
    """
    Exception raised for configuration-related errors.

    This includes missing configuration files and unparseable YAML.
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message.
            config_path: Path to the configuration file.
            key: The configuration key that caused the error.
            **kwargs: Additional arguments for base class.
        """
        details = kwargs.pop("details", {})
        if config_path:
            details["config_path"] = config_path
        if key:
            details["key"] = key
        super().__init__(message, details=details, **kwargs)


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(DeepfakeScorerError):
    """
    Exception raised for input validation errors.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message.
            field: Name of the invalid field.
            value: The invalid value.
            **kwargs: Additional arguments.
        """
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]  # Truncate long values
        super().__init__(message, details=details, **kwargs)


class InvalidInputError(ValidationError):
    """
    Exception raised when artifact metadata is rejected at the boundary.

    Raised for a missing or empty name, and for a size that is not an
    integer, is negative, or is larger than the accepted maximum.
    """

    pass


# =============================================================================
# Scoring Errors
# =============================================================================

class ScoringError(DeepfakeScorerError):
    """
    Base exception for scoring engine construction errors.
    """

    pass


class WeightTableError(ScoringError):
    """
    Exception raised when a feature weight table is invalid.
    """

    def __init__(
        self,
        message: str,
        total: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize weight table error.

        Args:
            message: Error message.
            total: Sum of the offending weights.
            **kwargs: Additional arguments.
        """
        details = kwargs.pop("details", {})
        if total is not None:
            details["total"] = total
        super().__init__(message, details=details, **kwargs)


# =============================================================================
# Analysis Errors
# =============================================================================

class AnalysisError(DeepfakeScorerError):
    """
    Base exception for failures around an analysis call.
    """

    pass


class AnalysisTimeoutError(AnalysisError):
    """
    Exception raised when an analysis call exceeds the caller's timeout.
    """

    def __init__(
        self,
        message: str,
        artifact_name: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize analysis timeout error.

        Args:
            message: Error message.
            artifact_name: Name of the artifact being analyzed.
            timeout: Timeout value in seconds.
            **kwargs: Additional arguments.
        """
        details = kwargs.pop("details", {})
        if artifact_name:
            details["artifact_name"] = artifact_name
        if timeout:
            details["timeout"] = timeout
        super().__init__(message, details=details, **kwargs)
