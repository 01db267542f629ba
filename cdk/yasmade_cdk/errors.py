"""
Error handling utilities for stack synthesis.

Configuration problems are raised synchronously while the app is being
built so that a bad deploy never reaches CloudFormation.
"""

from typing import Any, Dict, Optional


class InfraError(Exception):
    """
    Infrastructure error with error code and message.

    Raised during synthesis; the app entry point turns it into a log line
    and a non-zero exit status.
    """

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "errorCode": self.error_code,
            "message": self.message,
            **self.details,
        }


class ErrorCode:
    """Standard error codes for the infrastructure app."""

    # Naming errors
    NAME_TOO_LONG = "NAME_TOO_LONG"

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"
    UNKNOWN_ENVIRONMENT = "UNKNOWN_ENVIRONMENT"
    MISSING_CERTIFICATE = "MISSING_CERTIFICATE"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ConfigError(InfraError):
    """Invalid or incomplete environment configuration."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = ErrorCode.INVALID_CONFIG,
    ):
        super().__init__(error_code, message, details)


class NameTooLongError(ConfigError):
    """A composed resource name exceeds the platform length limit."""

    def __init__(self, name: str, max_length: int):
        super().__init__(
            f'Resource name "{name}" exceeds maximum length of {max_length}',
            {"name": name, "length": len(name), "maxLength": max_length},
            error_code=ErrorCode.NAME_TOO_LONG,
        )
        self.name = name
        self.max_length = max_length


def handle_error(error: Exception) -> Dict[str, Any]:
    """
    Convert exception to standardized error payload.

    Args:
        error: Exception to handle

    Returns:
        Error dictionary suitable for structured logging
    """
    if isinstance(error, InfraError):
        return error.to_dict()

    return {
        "errorCode": ErrorCode.INTERNAL_ERROR,
        "message": f"Unexpected error during synthesis: {error}",
    }
