"""
Session Entity

One authenticated principal-context binding.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import AccountType, ContextType


class Session(SQLModel, table=True):
    """
    Session entity - bearer token bound to an account and a context.

    Business Rules:
    - Token is 64 hex chars and is the only value sent to the client
    - expires_at is fixed at creation (absolute timeout, never extended)
    - last_active_at is refreshed on each successful validation (idle timeout)
    - Expired or revoked sessions are never usable again
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(max_length=64, unique=True, index=True)

    account_type: AccountType = Field(nullable=False)
    account_id: UUID = Field(nullable=False)
    context_type: ContextType = Field(nullable=False)
    context_id: UUID = Field(nullable=False)

    # Provenance, informational only
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_active_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_account", "account_type", "account_id"),
        Index("idx_session_expires_at", "expires_at"),
    )

    def __repr__(self) -> str:
        return (
            f"Session(id={self.id!s}, account_type={self.account_type.value}, "
            f"account_id={self.account_id!s}, expires_at={self.expires_at.isoformat()})"
        )

    __str__ = __repr__
