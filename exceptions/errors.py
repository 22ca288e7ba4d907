"""
Custom exception classes for the application.

Collaborator failures are wrapped in these before they reach the
display layer; see ProductLinkageViewModel.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.
    
    All custom exceptions inherit from this.
    
    Attributes:
        code: Error code (e.g., "ACCOUNT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP-style status code
        details: Additional context
    """
    
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)
    
    def to_dict(self) -> dict:
        """Convert to response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""
    
    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""
    
    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""
    
    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""
    
    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# ACCOUNT ERRORS
# ===================

class AccountNotFoundError(NotFoundError):
    """Account not found."""
    
    def __init__(self, account_id: str):
        super().__init__(
            resource="Account",
            identifier=account_id,
            code="ACCOUNT_NOT_FOUND"
        )


# ===================
# LINKAGE ERRORS
# ===================

class LoadFailureError(ExternalServiceError):
    """Account snapshot could not be fetched."""
    
    def __init__(self, account_id: str, message: str):
        super().__init__(
            service="data_source",
            code="LOAD_FAILED",
            message=message,
            details={"account_id": account_id}
        )


class MutationFailureError(ExternalServiceError):
    """Link or unlink call failed or returned outcome ERROR."""
    
    def __init__(self, operation: str, message: str, details: Optional[dict] = None):
        super().__init__(
            service="link_service",
            code=f"{operation.upper()}_FAILED",
            message=message,
            details={"operation": operation, **(details or {})}
        )


class EmptySelectionError(ValidationError):
    """Nothing selected to link or unlink."""
    
    def __init__(self, operation: str):
        noun = "products" if operation == "link" else "mandatory products"
        super().__init__(
            code="EMPTY_SELECTION",
            message=f"Select one or more {noun} first",
            details={"operation": operation}
        )


class SelectionModeError(ValidationError):
    """Operation requested from the wrong view mode."""
    
    def __init__(self, operation: str, mode: str, required_mode: str):
        super().__init__(
            code="SELECTION_MODE_MISMATCH",
            message=f"Cannot {operation} while showing {mode} products",
            details={
                "operation": operation,
                "mode": mode,
                "required_mode": required_mode
            }
        )


class InvalidProductStatusError(ValidationError):
    """Status is not one of the known options."""
    
    def __init__(self, status: str, valid: list[str]):
        super().__init__(
            code="PRODUCT_INVALID_STATUS",
            message=f"Status must be one of: {', '.join(valid)}",
            details={"provided": status, "valid": list(valid)}
        )
