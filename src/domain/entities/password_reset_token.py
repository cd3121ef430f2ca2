"""
PasswordResetToken Entity

Single-use credential recovery tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import AccountType


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - one outstanding recovery attempt.

    Business Rules:
    - Expires after 1 hour by default
    - Single-use: used_at is set on successful reset and never cleared
    - At most one active token per account (older ones are deleted on request)
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(max_length=64, unique=True, index=True)

    account_type: AccountType = Field(nullable=False)
    account_id: UUID = Field(nullable=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_account", "account_type", "account_id"),
    )

    def __repr__(self) -> str:
        return (
            f"PasswordResetToken(id={self.id!s}, account_type={self.account_type.value}, "
            f"account_id={self.account_id!s}, used={self.used_at is not None})"
        )

    __str__ = __repr__
