"""
Account namespace helpers shared by the auth use cases.
"""

from uuid import UUID

from src.app.errors import NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccountBase, AccountType, ContextType

CONTEXT_TYPES = {
    AccountType.tenant_account: ContextType.tenant,
    AccountType.environment_account: ContextType.environment,
}


def context_type_for(account_type: AccountType) -> ContextType:
    return CONTEXT_TYPES[account_type]


def account_context_id(account: AccountBase, account_type: AccountType) -> UUID:
    """Tenant id or environment id the account belongs to"""
    if account_type == AccountType.tenant_account:
        return account.tenant_id
    return account.environment_id


async def ensure_context_exists(
    uow: UnitOfWork, account_type: AccountType, context_id: UUID, operation: str
) -> None:
    """Raise NotFoundError when the tenant or environment does not exist"""
    if account_type == AccountType.tenant_account:
        context = await uow.tenants.get_by_id(context_id)
        label = "Tenant"
    else:
        context = await uow.environments.get_by_id(context_id)
        label = "Environment"

    if context is None:
        raise NotFoundError(
            f"{label} not found",
            details={"operation": operation, "context_id": str(context_id)},
        )
