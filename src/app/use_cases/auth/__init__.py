"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .signup_use_case import SignupUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .cleanup_expired_use_case import CleanupExpiredUseCase
from .dtos import (
    LoginCommand,
    SignupCommand,
    ForgotPasswordCommand,
    ResetPasswordCommand,
    AuthenticatedAccount,
    ForgotPasswordResponse,
    ResetPasswordResponse,
    CleanupResult,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "SignupUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "CleanupExpiredUseCase",
    # DTOs - Commands
    "LoginCommand",
    "SignupCommand",
    "ForgotPasswordCommand",
    "ResetPasswordCommand",
    # DTOs - Responses
    "AuthenticatedAccount",
    "ForgotPasswordResponse",
    "ResetPasswordResponse",
    "CleanupResult",
]
