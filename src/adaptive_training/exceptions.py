"""
Custom exceptions for the adaptive training engine.

The core operations degrade softly and do not raise on nominal input.
These exceptions cover the boundaries: loading raw payloads into models
and writing results through a persistence port.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error payloads."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    PLAN_VALIDATION_ERROR = "PLAN_VALIDATION_ERROR"
    SNAPSHOT_VALIDATION_ERROR = "SNAPSHOT_VALIDATION_ERROR"
    CONTEXT_VALIDATION_ERROR = "CONTEXT_VALIDATION_ERROR"

    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class AdaptiveTrainingError(Exception):
    """
    Base exception for all adaptive training errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for error output."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class ValidationError(AdaptiveTrainingError):
    """Raised when an input payload fails validation."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        errors: Optional[list] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if errors:
            details["errors"] = errors
        super().__init__(message=message, code=code, details=details)


class PlanValidationError(ValidationError):
    """Raised when a workout plan payload is malformed."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message, code=ErrorCode.PLAN_VALIDATION_ERROR, errors=errors)


class SnapshotValidationError(ValidationError):
    """Raised when a wearable snapshot payload is malformed."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message, code=ErrorCode.SNAPSHOT_VALIDATION_ERROR, errors=errors)


class ContextValidationError(ValidationError):
    """Raised when a training context payload is malformed."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message, code=ErrorCode.CONTEXT_VALIDATION_ERROR, errors=errors)


class PersistenceError(AdaptiveTrainingError):
    """Raised when the persistence port rejects a write."""

    def __init__(
        self,
        message: str,
        plan_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if plan_id:
            details["plan_id"] = plan_id
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message=message, code=ErrorCode.PERSISTENCE_ERROR, details=details)
        self.original_error = original_error
