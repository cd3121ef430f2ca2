from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_operation
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import AccountType, PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        with storage_operation(
            "PASSWORD_RESET_CREATE",
            account_type=token.account_type.value,
            account_id=token.account_id,
        ):
            self.session.add(token)
            await self.session.flush()
            await self.session.refresh(token)
        return token

    async def find_valid_by_token(self, token: str, now: datetime) -> Optional[PasswordResetToken]:
        """Find an unused, unexpired token by its value"""
        with storage_operation("PASSWORD_RESET_FIND_VALID_BY_TOKEN"):
            stmt = select(PasswordResetToken).where(
                PasswordResetToken.token == token,
                PasswordResetToken.used_at.is_(None),
                PasswordResetToken.expires_at > now,
            )
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def mark_as_used(self, token: str, used_at: datetime) -> bool:
        """Mark a token as used"""
        with storage_operation("PASSWORD_RESET_MARK_AS_USED"):
            stmt = (
                update(PasswordResetToken)
                .where(PasswordResetToken.token == token)
                .values(used_at=used_at, updated_at=used_at)
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0

    async def delete_all_by_account(self, account_type: AccountType, account_id: UUID) -> int:
        """Delete all tokens for an account"""
        with storage_operation(
            "PASSWORD_RESET_DELETE_ALL_BY_ACCOUNT",
            account_type=account_type.value,
            account_id=account_id,
        ):
            stmt = delete(PasswordResetToken).where(
                PasswordResetToken.account_type == account_type,
                PasswordResetToken.account_id == account_id,
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete expired tokens (cleanup job)"""
        with storage_operation("PASSWORD_RESET_DELETE_EXPIRED"):
            stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at <= now)
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount
