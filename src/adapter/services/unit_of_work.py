from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import (
    EnvironmentAccountRepository,
    TenantAccountRepository,
)
from src.adapter.repositories.environment_repository import EnvironmentRepository
from src.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tenants = TenantRepository(self.session)
        self.environments = EnvironmentRepository(self.session)
        self.tenant_accounts = TenantAccountRepository(self.session)
        self.environment_accounts = EnvironmentAccountRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
