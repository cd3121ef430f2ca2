"""
Auth Service Domain Entities

All domain entities organized by model.
"""

from .enums import AccountType, ContextType, SameSitePolicy

from .tenant import Tenant
from .environment import Environment
from .account import AccountBase, AccountIdentifier, TenantAccount, EnvironmentAccount
from .session import Session
from .password_reset_token import PasswordResetToken

__all__ = [
    # Enums
    "AccountType",
    "ContextType",
    "SameSitePolicy",
    # Entities
    "Tenant",
    "Environment",
    "AccountBase",
    "AccountIdentifier",
    "TenantAccount",
    "EnvironmentAccount",
    "Session",
    "PasswordResetToken",
]
