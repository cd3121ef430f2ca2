"""
Password Reset Service

Runs the credential recovery state machine:
Created -> Consumed (used_at set) or Created -> Expired. Both end states
are terminal.
"""

import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.auth_config import PasswordConfig
from src.app.errors import PasswordPolicyError
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.services.password_service import PasswordService
from src.app.services.session_service import SessionService
from src.app.services.token_generator import TokenGenerator
from src.domain.base import utc_now
from src.domain.entities import AccountType, PasswordResetToken

# Persists a new password hash for an account; False when the account store refuses.
UpdateAccountFn = Callable[[UUID, str], Awaitable[bool]]


class ResetRequest(BaseModel):
    """Plaintext token for out-of-band delivery, and its deadline"""

    token: str
    expires_at: datetime


class PasswordResetService:
    """
    Business Rules:
    - At most one active token per account: a new request deletes older ones
    - Tokens expire after reset_token_ttl seconds (1 hour by default)
    - A token is consumed at most once
    - A successful reset revokes every session of the account
    - The service never checks that the account exists; callers must answer
      identically either way
    """

    def __init__(
        self,
        repository: IPasswordResetTokenRepository,
        password_service: PasswordService,
        session_service: SessionService,
        config: Optional[PasswordConfig] = None,
        token_generator: Optional[TokenGenerator] = None,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        self.password_service = password_service
        self.session_service = session_service
        self.config = config or PasswordConfig()
        self.token_generator = token_generator or TokenGenerator()
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    async def request_reset(
        self, account_type: AccountType, account_id: UUID
    ) -> ResetRequest:
        """Replace any outstanding token of the account with a fresh one"""
        now = self.clock()
        token = self.token_generator.generate()
        expires_at = now + timedelta(seconds=self.config.reset_token_ttl)

        await self.repository.delete_all_by_account(account_type, account_id)
        await self.repository.create(
            PasswordResetToken(
                token=token,
                account_type=account_type,
                account_id=account_id,
                expires_at=expires_at,
                created_at=now,
                updated_at=now,
            )
        )

        self.logger.info(
            "Password reset token created for %s %s", account_type.value, account_id
        )
        return ResetRequest(token=token, expires_at=expires_at)

    async def validate_token(self, token: Optional[str]) -> Optional[PasswordResetToken]:
        """Return the token record if unused and unexpired. No side effects."""
        if not token:
            return None

        reset_token = await self.repository.find_valid_by_token(token, self.clock())
        if reset_token is None:
            self.logger.info("Invalid or expired password reset token")
        return reset_token

    async def reset_password(
        self,
        token: Optional[str],
        new_password: str,
        update_account: UpdateAccountFn,
    ) -> bool:
        """
        Reset a password with a valid token.

        Args:
            token: Plaintext reset token
            new_password: New plaintext password
            update_account: Persists the new hash into the owning account store

        Returns:
            True on success. False if the token is invalid or the account store
            refused the update; the token stays unconsumed in both cases.

        Raises:
            PasswordPolicyError: new_password fails the strength rules
        """
        reset_token = await self.validate_token(token)
        if reset_token is None:
            self.logger.info("Password reset failed: invalid or expired token")
            return False

        validation = self.password_service.validate_strength(new_password)
        if not validation.valid:
            self.logger.info(
                "Password reset failed: weak password (%s)", "; ".join(validation.errors)
            )
            raise PasswordPolicyError(validation.errors)

        password_hash = self.password_service.hash(new_password)

        updated = await update_account(reset_token.account_id, password_hash)
        if not updated:
            self.logger.error(
                "Password reset failed: could not update account %s",
                reset_token.account_id,
            )
            return False

        # Mark used before revoking: a crash in between must leave the token spent
        await self.repository.mark_as_used(reset_token.token, self.clock())
        await self.session_service.revoke_all(
            reset_token.account_type, reset_token.account_id
        )

        self.logger.info(
            "Password reset successful for %s %s, all sessions revoked",
            reset_token.account_type.value,
            reset_token.account_id,
        )
        return True

    async def cleanup(self) -> int:
        """Delete tokens past their deadline, used or not"""
        deleted = await self.repository.delete_expired(self.clock())
        if deleted > 0:
            self.logger.info("Cleaned up %d expired password reset tokens", deleted)
        return deleted
