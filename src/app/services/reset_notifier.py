from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from src.domain.entities import AccountType


class IResetTokenNotifier(ABC):
    """Delivers a plaintext reset token to the account owner (email, SMS, ...)"""

    @abstractmethod
    async def send_password_reset(
        self,
        account_type: AccountType,
        account_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> None:
        pass
