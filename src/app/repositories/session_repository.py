from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AccountType, Session


class ISessionRepository(ABC):
    """Session store interface - persistence and time filtering only"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Persist a new session"""
        pass

    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[Session]:
        """Find session by token, regardless of expiry"""
        pass

    @abstractmethod
    async def find_valid_by_token(self, token: str, now: datetime) -> Optional[Session]:
        """Find session by token where expires_at > now"""
        pass

    @abstractmethod
    async def update_last_active_at(
        self, session: Session, last_active_at: datetime
    ) -> Optional[Session]:
        """
        Refresh the activity timestamp of a session. Returns None when the
        row was deleted concurrently (0 rows updated).
        """
        pass

    @abstractmethod
    async def delete_by_token(self, token: str) -> bool:
        """Delete session by token. Returns True if a row was deleted."""
        pass

    @abstractmethod
    async def delete_all_by_account(self, account_type: AccountType, account_id: UUID) -> int:
        """Delete all sessions of an account. Returns count deleted."""
        pass

    @abstractmethod
    async def find_all_by_account(
        self,
        account_type: AccountType,
        account_id: UUID,
        now: datetime,
        idle_deadline: datetime,
    ) -> List[Session]:
        """
        Sessions of an account with expires_at > now and
        last_active_at > idle_deadline, most recently active first.
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime, idle_deadline: datetime) -> int:
        """Delete sessions with expires_at <= now OR last_active_at <= idle_deadline"""
        pass
