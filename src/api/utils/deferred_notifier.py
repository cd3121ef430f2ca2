from datetime import datetime
from uuid import UUID

from fastapi import BackgroundTasks

from src.app.services.reset_notifier import IResetTokenNotifier
from src.domain.entities import AccountType


class DeferredResetTokenNotifier(IResetTokenNotifier):
    """
    Queues delivery on the request's background tasks so it runs after the
    response is sent, keeping transport latency out of forgot-password timing.
    """

    def __init__(self, notifier: IResetTokenNotifier, background_tasks: BackgroundTasks):
        self.notifier = notifier
        self.background_tasks = background_tasks

    async def send_password_reset(
        self,
        account_type: AccountType,
        account_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> None:
        self.background_tasks.add_task(
            self.notifier.send_password_reset, account_type, account_id, token, expires_at
        )
