from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.environment_repository import IEnvironmentRepository
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.entities import AccountType, EnvironmentAccount, TenantAccount


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties
    tenants: ITenantRepository
    environments: IEnvironmentRepository
    tenant_accounts: IAccountRepository[TenantAccount]
    environment_accounts: IAccountRepository[EnvironmentAccount]
    sessions: ISessionRepository
    password_reset_tokens: IPasswordResetTokenRepository

    def accounts(self, account_type: AccountType) -> IAccountRepository:
        """Account store that owns the given principal namespace"""
        if account_type == AccountType.tenant_account:
            return self.tenant_accounts
        return self.environment_accounts

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
