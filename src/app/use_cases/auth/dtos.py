"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import AccountIdentifier, AccountType, ContextType


# ============================================================================
# Command DTOs
# ============================================================================


class LoginCommand(BaseModel):
    """Credentials submitted for a tenant or environment"""

    account_type: AccountType
    context_id: UUID
    identifier: AccountIdentifier
    password: str


class SignupCommand(BaseModel):
    """New environment account"""

    environment_id: UUID
    identifier: AccountIdentifier
    password: str


class ForgotPasswordCommand(BaseModel):
    """Password reset request by identifier"""

    account_type: AccountType
    context_id: UUID
    identifier: AccountIdentifier


class ResetPasswordCommand(BaseModel):
    """Reset token plus the new password"""

    account_type: AccountType
    context_id: UUID
    token: str
    new_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AuthenticatedAccount(BaseModel):
    """Principal and scope a new session should be bound to"""

    account_type: AccountType
    account_id: UUID
    context_type: ContextType
    context_id: UUID


class ForgotPasswordResponse(BaseModel):
    """Identical for existing and unknown accounts"""

    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    success: bool
    message: str


class CleanupResult(BaseModel):
    """Rows removed by the periodic cleanup"""

    sessions_deleted: int
    reset_tokens_deleted: int
