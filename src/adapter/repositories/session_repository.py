import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_, update
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_operation
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import AccountType, Session

logger = logging.getLogger(__name__)


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Persist a new session"""
        with storage_operation(
            "SESSION_CREATE",
            account_type=session_obj.account_type.value,
            account_id=session_obj.account_id,
        ):
            self.session.add(session_obj)
            await self.session.flush()
            await self.session.refresh(session_obj)
        return session_obj

    async def find_by_token(self, token: str) -> Optional[Session]:
        """Find session by token"""
        with storage_operation("SESSION_FIND_BY_TOKEN"):
            stmt = select(Session).where(Session.token == token)
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def find_valid_by_token(self, token: str, now: datetime) -> Optional[Session]:
        """Find session by token that has not reached its absolute deadline"""
        with storage_operation("SESSION_FIND_VALID_BY_TOKEN"):
            stmt = select(Session).where(Session.token == token, Session.expires_at > now)
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def update_last_active_at(
        self, session_obj: Session, last_active_at: datetime
    ) -> Optional[Session]:
        """Refresh the activity timestamp. None if the row is already gone."""
        with storage_operation("SESSION_UPDATE_LAST_ACTIVE", session_id=session_obj.id):
            stmt = (
                update(Session)
                .where(Session.id == session_obj.id)
                .values(last_active_at=last_active_at, updated_at=last_active_at)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                return None
        # Mirror the write on the loaded instance without marking it dirty
        set_committed_value(session_obj, "last_active_at", last_active_at)
        set_committed_value(session_obj, "updated_at", last_active_at)
        return session_obj

    async def delete_by_token(self, token: str) -> bool:
        """Delete session by token"""
        with storage_operation("SESSION_DELETE_BY_TOKEN"):
            stmt = delete(Session).where(Session.token == token)
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0

    async def delete_all_by_account(self, account_type: AccountType, account_id: UUID) -> int:
        """Delete all sessions for an account"""
        with storage_operation(
            "SESSION_DELETE_ALL_BY_ACCOUNT",
            account_type=account_type.value,
            account_id=account_id,
        ):
            stmt = delete(Session).where(
                Session.account_type == account_type,
                Session.account_id == account_id,
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount

    async def find_all_by_account(
        self,
        account_type: AccountType,
        account_id: UUID,
        now: datetime,
        idle_deadline: datetime,
    ) -> List[Session]:
        """Live sessions of an account, most recently active first"""
        with storage_operation(
            "SESSION_FIND_ALL_BY_ACCOUNT",
            account_type=account_type.value,
            account_id=account_id,
        ):
            stmt = (
                select(Session)
                .where(
                    Session.account_type == account_type,
                    Session.account_id == account_id,
                    Session.expires_at > now,
                    Session.last_active_at > idle_deadline,
                )
                .order_by(Session.last_active_at.desc())
            )
            result = await self.session.exec(stmt)
            return list(result.all())

    async def delete_expired(self, now: datetime, idle_deadline: datetime) -> int:
        """Delete sessions past the absolute deadline OR idle too long"""
        with storage_operation("SESSION_DELETE_EXPIRED"):
            stmt = delete(Session).where(
                or_(Session.expires_at <= now, Session.last_active_at <= idle_deadline)
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            logger.debug("Deleted %d expired sessions", result.rowcount)
            return result.rowcount
