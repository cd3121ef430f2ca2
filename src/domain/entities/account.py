"""
Account Entities

Tenant accounts (operators of a tenant) and environment accounts (end users
of one environment). Both can sign in with email, phone or username.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel

from src.domain.base import utc_now


class AccountBase(SQLModel):
    """Columns shared by both account namespaces"""

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    username: Optional[str] = Field(default=None, max_length=255)

    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output
    disabled: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TenantAccount(AccountBase, table=True):
    """Account that belongs to a tenant"""

    __tablename__ = "tenant_accounts"

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False)

    __table_args__ = (
        Index("idx_tenant_account_email", "tenant_id", "email"),
        Index("idx_tenant_account_username", "tenant_id", "username"),
    )


class EnvironmentAccount(AccountBase, table=True):
    """Account that belongs to an environment"""

    __tablename__ = "environment_accounts"

    environment_id: UUID = Field(foreign_key="environments.id", nullable=False)

    __table_args__ = (
        Index("idx_environment_account_email", "environment_id", "email"),
        Index("idx_environment_account_username", "environment_id", "username"),
    )


class AccountIdentifier(SQLModel):
    """Sign-in identifier; at least one field must be set"""

    email: Optional[str] = None
    phone: Optional[str] = None
    username: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.email or self.phone or self.username)
