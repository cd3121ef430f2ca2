"""
Application Errors

Business outcomes that are expected (unknown token, wrong password) are
returned as None/False by the services. Only policy violations and
infrastructure faults are raised.
"""

from typing import Any, Dict, List, Optional


class ApplicationError(Exception):
    """Base error carrying a stable code for the API layer"""

    code = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(message)


class ValidationError(ApplicationError):
    code = "VALIDATION_ERROR"


class NotFoundError(ApplicationError):
    code = "NOT_FOUND"


class ConflictError(ApplicationError):
    code = "CONFLICT"


class InvalidCredentialsError(ApplicationError):
    code = "INVALID_CREDENTIALS"


class AccountDisabledError(ApplicationError):
    code = "ACCOUNT_DISABLED"


class AuthenticationRequiredError(ApplicationError):
    code = "UNAUTHORIZED"


class InvalidTokenError(ApplicationError):
    code = "INVALID_TOKEN"


class PasswordPolicyError(ApplicationError):
    """New password violates one or more strength rules"""

    code = "INVALID_PASSWORD"

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            f"Password validation failed: {', '.join(self.errors)}",
            details={"errors": self.errors},
        )


class StorageError(ApplicationError):
    """
    Unexpected persistence fault.

    Carries the operation name and non-secret identifiers. The original
    exception is chained as __cause__.
    """

    code = "STORAGE_ERROR"

    def __init__(self, operation: str, details: Optional[Dict[str, Any]] = None):
        self.operation = operation
        super().__init__(f"Storage operation failed: {operation}", details=details)
