from uuid import uuid4

import pytest
from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.session_repository import SessionRepository
from src.app.auth_config import SessionConfig
from src.app.services.session_service import SessionService
from src.domain.entities import AccountType, ContextType, Session

DAY = 86400


@pytest.fixture
def session_service(uow, clock):
    config = SessionConfig(absolute_timeout=30 * DAY, idle_timeout=7 * DAY)
    return SessionService(uow.sessions, config, clock=clock)


async def create_session(service, account_id=None, context_id=None):
    return await service.create(
        AccountType.environment_account,
        account_id or uuid4(),
        ContextType.environment,
        context_id or uuid4(),
        ip_address="203.0.113.7",
        user_agent="pytest",
    )


@pytest.mark.asyncio
async def test_create_then_validate(session_service, clock):
    session = await create_session(session_service)

    clock.advance(hours=1)
    validated = await session_service.validate(session.token)

    assert validated is not None
    assert validated.id == session.id
    assert validated.last_active_at == clock.now


@pytest.mark.asyncio
async def test_idle_expiry_deletes_session(session_service, clock):
    session = await create_session(session_service)
    token = session.token

    clock.advance(days=8)

    assert await session_service.validate(token) is None
    assert await session_service.get_by_token(token) is None


@pytest.mark.asyncio
async def test_activity_keeps_session_alive_until_absolute_deadline(session_service, clock):
    session = await create_session(session_service)
    token = session.token

    for _ in range(4):
        clock.advance(days=6)
        assert await session_service.validate(token) is not None

    # 24 days in; the next 6-day step passes the 30-day absolute deadline
    clock.advance(days=6)
    assert await session_service.validate(token) is None


@pytest.mark.asyncio
async def test_get_by_token_ignores_expiry(session_service, clock):
    session = await create_session(session_service)

    clock.advance(days=31)

    raw = await session_service.get_by_token(session.token)
    assert raw is not None
    assert raw.id == session.id


@pytest.mark.asyncio
async def test_revoke(session_service):
    token = (await create_session(session_service)).token

    assert await session_service.revoke(token) is True
    assert await session_service.validate(token) is None
    assert await session_service.revoke(token) is False


@pytest.mark.asyncio
async def test_list_and_revoke_all(session_service, clock):
    account_id = uuid4()
    older = await create_session(session_service, account_id=account_id)
    clock.advance(minutes=5)
    newer = await create_session(session_service, account_id=account_id)
    other = await create_session(session_service)

    sessions = await session_service.list_by_account(
        AccountType.environment_account, account_id
    )
    assert [s.id for s in sessions] == [newer.id, older.id]

    revoked = await session_service.revoke_all(AccountType.environment_account, account_id)

    assert revoked == 2
    assert await session_service.list_by_account(
        AccountType.environment_account, account_id
    ) == []
    assert await session_service.validate(other.token) is not None


@pytest.mark.asyncio
async def test_list_excludes_idle_sessions(session_service, clock):
    account_id = uuid4()
    stale = await create_session(session_service, account_id=account_id)
    clock.advance(days=8)
    fresh = await create_session(session_service, account_id=account_id)

    sessions = await session_service.list_by_account(
        AccountType.environment_account, account_id
    )

    assert [s.id for s in sessions] == [fresh.id]
    assert stale.id not in [s.id for s in sessions]


@pytest.mark.asyncio
async def test_cleanup_removes_only_dead_sessions(session_service, clock):
    idle_token = (await create_session(session_service)).token
    clock.advance(days=8)
    live_token = (await create_session(session_service)).token

    deleted = await session_service.cleanup()

    assert deleted == 1
    assert await session_service.get_by_token(idle_token) is None
    assert await session_service.get_by_token(live_token) is not None
    assert await session_service.cleanup() == 0


class RevokedAfterLookupRepository(SessionRepository):
    """Deletes the row over a second connection right after the lookup"""

    def __init__(self, session, engine):
        super().__init__(session)
        self.engine = engine

    async def find_valid_by_token(self, token, now):
        found = await super().find_valid_by_token(token, now)
        async with AsyncSession(self.engine) as concurrent:
            await concurrent.execute(delete(Session).where(Session.token == token))
            await concurrent.commit()
        return found


@pytest.mark.asyncio
async def test_validate_racing_revoke_returns_none(db_session, engine, session_service, clock):
    token = (await create_session(session_service)).token
    await db_session.commit()

    racing = SessionService(
        RevokedAfterLookupRepository(db_session, engine),
        session_service.config,
        clock=clock,
    )
    clock.advance(minutes=1)

    assert await racing.validate(token) is None
    assert await session_service.get_by_token(token) is None
