"""
Cleanup Expired Use Case

Periodic job removing dead sessions and expired reset tokens.
"""

import logging

from src.app.auth_config import AuthConfig
from src.app.services.password_reset_service import PasswordResetService
from src.app.services.password_service import PasswordService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import CleanupResult

logger = logging.getLogger(__name__)


class CleanupExpiredUseCase:
    """Safe to run repeatedly and alongside normal traffic"""

    def __init__(self, uow: UnitOfWork, config: AuthConfig):
        self.uow = uow
        self.config = config

    async def execute(self) -> CleanupResult:
        async with self.uow:
            session_service = SessionService(self.uow.sessions, self.config.session)
            reset_service = PasswordResetService(
                self.uow.password_reset_tokens,
                PasswordService(self.config.password),
                session_service,
                self.config.password,
            )

            sessions_deleted = await session_service.cleanup()
            reset_tokens_deleted = await reset_service.cleanup()
            await self.uow.commit()

        logger.info(
            "Cleanup removed %d sessions and %d reset tokens",
            sessions_deleted,
            reset_tokens_deleted,
        )
        return CleanupResult(
            sessions_deleted=sessions_deleted,
            reset_tokens_deleted=reset_tokens_deleted,
        )
