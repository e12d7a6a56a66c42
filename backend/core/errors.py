"""
Typed application errors.

Every business-rule violation is raised as one of these classes before any
write happens; ``logistics.exceptions.api_exception_handler`` turns them into
the JSON error envelope.
"""

from __future__ import annotations

from typing import Dict, List, Optional


class AppError(Exception):
    """Base exception for application errors"""

    status_code = 500
    default_code: Optional[str] = None

    def __init__(self, message: str, code: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.errors = errors


class ValidationError(AppError):
    """Raised when input is missing, malformed or breaks a business rule"""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class UnauthenticatedError(AppError):
    status_code = 401


class AuthorizationError(AppError):
    """Raised when a role or ownership check fails"""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Raised on uniqueness violations (duplicate agreement, carrier name...)"""

    status_code = 409


class TransientStoreError(AppError):
    """Lock or timeout from the database; retried by ``run_with_retry``"""

    status_code = 500
    default_code = "TRANSIENT_STORE_ERROR"
