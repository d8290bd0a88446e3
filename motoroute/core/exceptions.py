"""
Custom exceptions for the trip publication backend.

Every failure of a lifecycle request maps to one of these types; the HTTP
layer turns them into the standard error envelope (see error_handlers).
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Lookup errors
    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"

    # Authentication / authorization errors
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Lifecycle errors
    INVALID_TRANSITION = "INVALID_TRANSITION"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNEXPECTED_FAILURE = "UNEXPECTED_FAILURE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class TripGateException(Exception):
    """Base exception for the trip publication backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class TripNotFoundError(TripGateException):
    """Raised when no trip exists for the requested id."""

    def __init__(self, trip_id: int):
        super().__init__(
            message=f"Trip {trip_id} not found",
            error_code=ErrorCode.TRIP_NOT_FOUND,
            details={"trip_id": trip_id},
            status_code=404
        )
        self.trip_id = trip_id


class AuthenticationRequiredError(TripGateException):
    """Raised when the request carries no valid session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTHENTICATION_REQUIRED,
            status_code=401
        )


class PermissionDeniedError(TripGateException):
    """Raised when the access gate denies an authenticated actor."""

    def __init__(self, reason: str, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            error_code=ErrorCode.PERMISSION_DENIED,
            details={"reason": reason},
            status_code=403
        )
        self.reason = reason


class InvalidTransitionError(TripGateException):
    """Raised when the requested status change is not in the transition table."""

    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            message=f"Cannot move trip from '{current_status}' to '{target_status}'",
            error_code=ErrorCode.INVALID_TRANSITION,
            details={
                "current_status": current_status,
                "target_status": target_status,
            },
            status_code=409
        )
        self.current_status = current_status
        self.target_status = target_status


class ValidationFailedError(TripGateException):
    """Raised when a trip fails the publication checks. Carries every issue found."""

    def __init__(self, issues: List[Dict[str, Any]]):
        super().__init__(
            message="Trip cannot be published",
            error_code=ErrorCode.VALIDATION_FAILED,
            details={"validation_errors": issues},
            status_code=400
        )
        self.issues = issues


class ConcurrentModificationError(TripGateException):
    """Raised when the stored status moved between read and conditional write."""

    def __init__(self, trip_id: int, expected_status: str, actual_status: Optional[str] = None):
        details: Dict[str, Any] = {
            "trip_id": trip_id,
            "expected_status": expected_status,
        }
        if actual_status is not None:
            details["actual_status"] = actual_status

        super().__init__(
            message=f"Trip {trip_id} was modified concurrently; reload and retry",
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            details=details,
            status_code=409
        )
        self.trip_id = trip_id
        self.expected_status = expected_status
        self.actual_status = actual_status


class UnexpectedFailureError(TripGateException):
    """Wraps lower-level storage or parsing faults."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        details: Dict[str, Any] = {"operation": operation}
        if cause is not None:
            details["cause"] = type(cause).__name__

        super().__init__(
            message=f"Unexpected failure during {operation}",
            error_code=ErrorCode.UNEXPECTED_FAILURE,
            details=details,
            status_code=500
        )
