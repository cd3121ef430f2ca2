"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountType(str, Enum):
    """Principal namespace that owns a session or reset token"""

    tenant_account = "tenant_account"
    environment_account = "environment_account"


class ContextType(str, Enum):
    """Scope a session operates within"""

    tenant = "tenant"
    environment = "environment"


class SameSitePolicy(str, Enum):
    """SameSite attribute of the session cookie"""

    strict = "strict"
    lax = "lax"
    none = "none"
