import logging
from datetime import datetime
from uuid import UUID

from src.app.services.reset_notifier import IResetTokenNotifier
from src.domain.entities import AccountType

logger = logging.getLogger(__name__)


class LoggingResetTokenNotifier(IResetTokenNotifier):
    """
    Placeholder delivery channel used until an email/SMS transport is wired in.

    Logs the request without the token itself.
    """

    async def send_password_reset(
        self,
        account_type: AccountType,
        account_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> None:
        logger.info(
            "Password reset requested for %s %s (expires %s); no delivery transport configured",
            account_type.value,
            account_id,
            expires_at.isoformat(),
        )
