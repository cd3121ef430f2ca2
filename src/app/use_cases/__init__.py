"""
Use Cases

Organized into domain folders:
- auth/: Authentication and credential recovery flows
"""

from .auth import (
    LoginUseCase,
    SignupUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    CleanupExpiredUseCase,
)

__all__ = [
    "LoginUseCase",
    "SignupUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "CleanupExpiredUseCase",
]
