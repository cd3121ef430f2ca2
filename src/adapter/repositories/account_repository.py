from typing import Optional, Type
from uuid import UUID

from sqlalchemy import or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_operation
from src.app.repositories.account_repository import AccountT, IAccountRepository
from src.domain.base import utc_now
from src.domain.entities import AccountIdentifier, EnvironmentAccount, TenantAccount


class AccountRepository(IAccountRepository[AccountT]):
    """
    Account repository implementation using SQLModel.

    Subclasses bind the table model and the column holding the context id.
    """

    model: Type[AccountT]
    context_column: str
    operation_prefix: str

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Optional[AccountT]:
        """Get account by ID"""
        with storage_operation(f"{self.operation_prefix}_GET_BY_ID", account_id=account_id):
            stmt = select(self.model).where(self.model.id == account_id)
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def get_by_identifier(
        self, identifier: AccountIdentifier, context_id: UUID
    ) -> Optional[AccountT]:
        """Find account by any of the provided identifiers within its context"""
        conditions = []
        if identifier.email:
            conditions.append(self.model.email == identifier.email)
        if identifier.phone:
            conditions.append(self.model.phone == identifier.phone)
        if identifier.username:
            conditions.append(self.model.username == identifier.username)
        if not conditions:
            return None

        with storage_operation(
            f"{self.operation_prefix}_GET_BY_IDENTIFIER", context_id=context_id
        ):
            stmt = select(self.model).where(
                getattr(self.model, self.context_column) == context_id,
                or_(*conditions),
            )
            result = await self.session.exec(stmt)
            return result.first()

    async def create(self, account: AccountT) -> AccountT:
        """Create a new account"""
        with storage_operation(f"{self.operation_prefix}_CREATE", account_id=account.id):
            self.session.add(account)
            await self.session.flush()
            await self.session.refresh(account)
        return account

    async def update_password_hash_by_id(self, account_id: UUID, password_hash: str) -> bool:
        """Replace the password hash of an account"""
        with storage_operation(
            f"{self.operation_prefix}_UPDATE_PASSWORD_HASH", account_id=account_id
        ):
            stmt = (
                update(self.model)
                .where(self.model.id == account_id)
                .values(password_hash=password_hash, updated_at=utc_now())
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0


class TenantAccountRepository(AccountRepository[TenantAccount]):
    """Tenant accounts, scoped by tenant_id"""

    model = TenantAccount
    context_column = "tenant_id"
    operation_prefix = "TENANT_ACCOUNT"


class EnvironmentAccountRepository(AccountRepository[EnvironmentAccount]):
    """Environment accounts, scoped by environment_id"""

    model = EnvironmentAccount
    context_column = "environment_id"
    operation_prefix = "ENVIRONMENT_ACCOUNT"
