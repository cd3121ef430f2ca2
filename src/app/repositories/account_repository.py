from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from src.domain.entities import AccountBase, AccountIdentifier

AccountT = TypeVar("AccountT", bound=AccountBase)


class IAccountRepository(ABC, Generic[AccountT]):
    """
    Account store interface shared by tenant and environment accounts.

    context_id is the tenant id or the environment id that scopes the account.
    """

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[AccountT]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def get_by_identifier(
        self, identifier: AccountIdentifier, context_id: UUID
    ) -> Optional[AccountT]:
        """Find account by email, phone or username within its context"""
        pass

    @abstractmethod
    async def create(self, account: AccountT) -> AccountT:
        """Create a new account"""
        pass

    @abstractmethod
    async def update_password_hash_by_id(self, account_id: UUID, password_hash: str) -> bool:
        """Replace the password hash. Returns True if the account exists."""
        pass
