"""
Custom error handling system.

This module defines the application's exception hierarchy and a few helpers
for consistent error logging across the domain, repository and cluster layers.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardized error codes for the application.
    """

    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Lookup errors
    SHOP_NOT_FOUND = "SHOP_NOT_FOUND"
    ENVIRONMENT_NOT_FOUND = "ENVIRONMENT_NOT_FOUND"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"

    # Cluster errors
    CONTEXT_SWITCH_FAILED = "CONTEXT_SWITCH_FAILED"
    POD_PROVISIONING_FAILED = "POD_PROVISIONING_FAILED"
    CREDENTIAL_RESOLUTION_FAILED = "CREDENTIAL_RESOLUTION_FAILED"
    REMOTE_EXECUTION_FAILED = "REMOTE_EXECUTION_FAILED"
    KUBECTL_COMMAND_FAILED = "KUBECTL_COMMAND_FAILED"


class ErrorSeverity(Enum):
    """
    Severity levels for errors.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base exception for all custom application exceptions.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Standardized error code
            details: Additional error information
            severity: Error severity
            is_retryable: Whether the operation may be retried by the caller
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Exception representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return self.message


class ValidationException(AppException):
    """
    Exception for malformed value object or entity input.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the validation exception.

        Args:
            message: Error message naming the violated rule
            field: Field that failed validation
            invalid_value: Value that caused the error
            expected_format: Expected format, when there is one
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class NotFoundException(AppException):
    """
    Exception for shop, environment or location lookup misses.
    """

    def __init__(
        self,
        message: str,
        resource: str,
        key: str,
        available: Optional[List[str]] = None,
        **kwargs,
    ):
        """
        Initialize the lookup exception.

        Args:
            message: Error message
            resource: Kind of resource looked up (shop, environment, location)
            key: Lookup key that missed
            available: Known keys, for the error report
            **kwargs: Extra arguments for AppException
        """
        error_code = {
            "shop": ErrorCode.SHOP_NOT_FOUND,
            "environment": ErrorCode.ENVIRONMENT_NOT_FOUND,
            "location": ErrorCode.LOCATION_NOT_FOUND,
        }.get(resource, ErrorCode.UNKNOWN_ERROR)

        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.resource = resource
        self.key = key
        self.available = available or []

        self.details.update({"resource": resource, "key": key, "available": self.available})


class ClusterOperationException(AppException):
    """
    Exception for kubectl context, pod, credential or remote execution failures.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        error_code: ErrorCode = ErrorCode.KUBECTL_COMMAND_FAILED,
        command: Optional[List[str]] = None,
        return_code: Optional[int] = None,
        stderr: Optional[str] = None,
        **kwargs,
    ):
        """
        Initialize the cluster exception.

        Args:
            message: Error message
            operation: Broker operation that failed
            error_code: Specific cluster error code
            command: kubectl argument list, secrets already masked
            return_code: Process exit code
            stderr: Captured standard error
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.HIGH,
            is_retryable=True,
            **kwargs,
        )
        self.operation = operation
        self.command = command
        self.return_code = return_code
        self.stderr = stderr

        self.details.update(
            {
                "operation": operation,
                "command": " ".join(command) if command else None,
                "return_code": return_code,
                "stderr": stderr,
            }
        )


class ConfigurationException(AppException):
    """
    Exception for missing or unreadable registry and catalog files.
    """

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.path = path
        self.details.update({"path": path})


# === UTILITY FUNCTIONS ===


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error consistently.

    Args:
        exception: Exception to log
        context: Additional context
        level: Logging level
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        "traceback": traceback.format_exc(),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data)


def describe_exception(exception: Exception) -> str:
    """
    Build the user-facing message carried by structured failure results.

    Args:
        exception: Exception raised below the orchestrator boundary

    Returns:
        str: Message, never empty
    """
    message = str(exception).strip()
    if isinstance(exception, ClusterOperationException) and exception.stderr:
        stderr = exception.stderr.strip()
        if stderr and stderr not in message:
            message = f"{message}: {stderr}"
    return message or "Unknown error occurred"
