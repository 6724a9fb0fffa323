"""
Custom exceptions for the parcel tracker.

Storage failures of every kind are reported as a single StorageError
carrying the underlying cause.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class StorageError(AppException):
    """
    Raised when a parcel store operation fails.
    
    Covers connection failures, broken statements and missing rows alike;
    callers can only tell that the operation did not succeed.
    """
    
    def __init__(self, operation: str, cause: Optional[BaseException] = None, details: Dict[str, Any] = None):
        message = f"parcel store: {operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        self.operation = operation
        self.cause = cause
        super().__init__(
            message=message,
            error_code="ERR_STORAGE",
            details={"operation": operation, **(details or {})}
        )


class ParcelStateError(AppException):
    """Raised when a parcel's status does not allow the requested change."""
    
    def __init__(self, number: int, status: str, action: str):
        super().__init__(
            message=f"Parcel {number} in status '{status}' cannot {action}",
            error_code="ERR_PARCEL_STATE",
            details={"number": number, "status": status, "action": action}
        )
