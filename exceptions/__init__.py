"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Accounts
    AccountNotFoundError,

    # Linkage
    LoadFailureError,
    MutationFailureError,
    EmptySelectionError,
    SelectionModeError,
    InvalidProductStatusError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Accounts
    "AccountNotFoundError",

    # Linkage
    "LoadFailureError",
    "MutationFailureError",
    "EmptySelectionError",
    "SelectionModeError",
    "InvalidProductStatusError",
]
