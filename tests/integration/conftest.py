from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.auth_config import AuthConfig, PasswordConfig
from src.app.services.password_service import PasswordService
from src.app.services.reset_notifier import IResetTokenNotifier
from src.depends import get_auth_config, get_reset_notifier, get_unit_of_work
from src.domain.entities import (
    Environment,
    EnvironmentAccount,
    Tenant,
    TenantAccount,
)
from tests.fixtures.clock import FakeClock

PASSWORD = "SecurePass123!"


class CapturingNotifier(IResetTokenNotifier):
    """Keeps delivered reset tokens so tests can play the recipient"""

    def __init__(self):
        self.sent = []

    async def send_password_reset(self, account_type, account_id, token, expires_at: datetime):
        self.sent.append(
            {"account_type": account_type, "account_id": account_id, "token": token}
        )

    @property
    def last_token(self) -> str:
        return self.sent[-1]["token"]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_config():
    return AuthConfig(
        secret="integration-test-secret-with-32-plus-chars",
        password=PasswordConfig(salt_rounds=4),
    )


@pytest.fixture
def notifier():
    return CapturingNotifier()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest_asyncio.fixture
async def client(db_session, auth_config, notifier):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_auth_config] = lambda: auth_config
    app.dependency_overrides[get_reset_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# Seed fixtures return ids: rollbacks expire ORM instances held by tests.


@pytest_asyncio.fixture
async def tenant_id(db_session):
    tenant = Tenant(name="Acme Corp")
    db_session.add(tenant)
    await db_session.commit()
    return tenant.id


@pytest_asyncio.fixture
async def environment_id(db_session, tenant_id):
    environment = Environment(tenant_id=tenant_id, name="production")
    db_session.add(environment)
    await db_session.commit()
    return environment.id


@pytest_asyncio.fixture
async def tenant_account_id(db_session, tenant_id, auth_config):
    account = TenantAccount(
        tenant_id=tenant_id,
        email="user@acme.com",
        username="acme-admin",
        password_hash=PasswordService(auth_config.password).hash(PASSWORD),
    )
    db_session.add(account)
    await db_session.commit()
    return account.id


@pytest_asyncio.fixture
async def environment_account_id(db_session, environment_id, auth_config):
    account = EnvironmentAccount(
        environment_id=environment_id,
        email="player@game.com",
        phone="+15550100",
        password_hash=PasswordService(auth_config.password).hash(PASSWORD),
    )
    db_session.add(account)
    await db_session.commit()
    return account.id
