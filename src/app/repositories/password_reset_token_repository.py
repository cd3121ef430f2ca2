from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import AccountType, PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken store interface - persistence and time filtering only"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Persist a new password reset token"""
        pass

    @abstractmethod
    async def find_valid_by_token(self, token: str, now: datetime) -> Optional[PasswordResetToken]:
        """Find unused token with expires_at > now"""
        pass

    @abstractmethod
    async def mark_as_used(self, token: str, used_at: datetime) -> bool:
        """Set used_at on a token. Returns True if a row was updated."""
        pass

    @abstractmethod
    async def delete_all_by_account(self, account_type: AccountType, account_id: UUID) -> int:
        """Delete every token of an account. Returns count deleted."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens with expires_at <= now, used or not"""
        pass
