"""
Session Service

Owns the session lifecycle policy: creation, dual expiry validation
(absolute + idle), revocation, enumeration and cleanup. Persistence is
delegated to the session store; nothing is cached between calls.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional
from uuid import UUID

from src.app.auth_config import SessionConfig
from src.app.repositories.session_repository import ISessionRepository
from src.app.services.token_generator import TokenGenerator
from src.domain.base import utc_now
from src.domain.entities import AccountType, ContextType, Session


class SessionService:
    """
    Business Rules:
    - expires_at = created + absolute_timeout, never extended
    - A session idle for idle_timeout or longer is dead, even before expires_at
    - Idle-expired sessions are deleted as soon as validate() sees them
    - Dead sessions never come back
    """

    def __init__(
        self,
        repository: ISessionRepository,
        config: Optional[SessionConfig] = None,
        token_generator: Optional[TokenGenerator] = None,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        self.config = config or SessionConfig()
        self.token_generator = token_generator or TokenGenerator()
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    @property
    def absolute_timeout(self) -> timedelta:
        return timedelta(seconds=self.config.absolute_timeout)

    @property
    def idle_timeout(self) -> timedelta:
        return timedelta(seconds=self.config.idle_timeout)

    def _idle_deadline(self, now: datetime) -> datetime:
        return now - self.idle_timeout

    async def create(
        self,
        account_type: AccountType,
        account_id: UUID,
        context_type: ContextType,
        context_id: UUID,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Session:
        """
        Create a new session for an account.

        The returned record carries the plaintext token; this is the only
        place it leaves the store.
        """
        now = self.clock()
        session = Session(
            token=self.token_generator.generate(),
            account_type=account_type,
            account_id=account_id,
            context_type=context_type,
            context_id=context_id,
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=now + self.absolute_timeout,
            last_active_at=now,
            created_at=now,
            updated_at=now,
        )

        self.logger.info(
            "Creating new session for %s %s", account_type.value, account_id
        )
        return await self.repository.create(session)

    async def validate(
        self,
        token: Optional[str],
        context_type: Optional[ContextType] = None,
        context_id: Optional[UUID] = None,
    ) -> Optional[Session]:
        """
        Return the session if it passes both expiry checks, refreshing
        last_active_at. Idle-expired sessions are deleted and None is returned.

        When a context is given, a session bound to another tenant or
        environment is rejected without touching last_active_at. A session
        revoked between lookup and refresh is treated as gone.
        """
        if not token:
            return None

        now = self.clock()
        # Store filters on the absolute deadline
        session = await self.repository.find_valid_by_token(token, now)
        if session is None:
            return None

        if session.last_active_at <= self._idle_deadline(now):
            self.logger.info(
                "Session %s expired due to inactivity (last active %s)",
                session.id,
                session.last_active_at.isoformat(),
            )
            await self.repository.delete_by_token(token)
            return None

        if context_id is not None and (
            session.context_type != context_type or session.context_id != context_id
        ):
            self.logger.info("Session %s presented outside its context", session.id)
            return None

        refreshed = await self.repository.update_last_active_at(session, now)
        if refreshed is None:
            self.logger.info("Session %s revoked during validation", session.id)
        return refreshed

    async def get_by_token(self, token: Optional[str]) -> Optional[Session]:
        """Raw lookup without expiry checks or side effects. Not for authorization."""
        if not token:
            return None
        return await self.repository.find_by_token(token)

    async def revoke(self, token: Optional[str]) -> bool:
        """Delete a single session. True iff a row was deleted."""
        if not token:
            return False
        revoked = await self.repository.delete_by_token(token)
        if revoked:
            self.logger.info("Session revoked")
        return revoked

    async def revoke_all(self, account_type: AccountType, account_id: UUID) -> int:
        """Delete every session of an account (log out everywhere)"""
        self.logger.info(
            "Revoking all sessions for %s %s", account_type.value, account_id
        )
        return await self.repository.delete_all_by_account(account_type, account_id)

    async def list_by_account(
        self, account_type: AccountType, account_id: UUID
    ) -> List[Session]:
        """Live sessions of an account, most recently active first"""
        now = self.clock()
        return await self.repository.find_all_by_account(
            account_type, account_id, now, self._idle_deadline(now)
        )

    async def cleanup(self) -> int:
        """Delete sessions that are absolute-expired or idle-expired"""
        now = self.clock()
        deleted = await self.repository.delete_expired(now, self._idle_deadline(now))
        self.logger.info("Cleaned up %d expired sessions", deleted)
        return deleted
