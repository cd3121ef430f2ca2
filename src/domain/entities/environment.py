"""
Environment Entity

Isolated environment of a tenant, owning its own end-user accounts.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class Environment(SQLModel, table=True):
    """Environment entity - only the fields the auth flows consult."""

    __tablename__ = "environments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    name: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
