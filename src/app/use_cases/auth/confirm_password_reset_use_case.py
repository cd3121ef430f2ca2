"""
Confirm Password Reset Use Case

Consumes a reset token, stores the new password hash and revokes sessions.
"""

from uuid import UUID

from src.app.auth_config import AuthConfig
from src.app.errors import InvalidTokenError
from src.app.services.password_reset_service import PasswordResetService
from src.app.services.password_service import PasswordService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from .context import account_context_id, ensure_context_exists
from .dtos import ResetPasswordCommand, ResetPasswordResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token must be unused and unexpired
    - New password must pass the strength rules (PasswordPolicyError otherwise)
    - Only accounts of the requested tenant/environment can be updated
    - Token is marked used, then all sessions of the account are revoked
    """

    def __init__(self, uow: UnitOfWork, config: AuthConfig):
        self.uow = uow
        self.config = config

    async def execute(self, command: ResetPasswordCommand) -> ResetPasswordResponse:
        """
        Execute confirm password reset use case.

        Raises:
            NotFoundError: tenant/environment does not exist
            InvalidTokenError: token invalid, expired, used, or for another context
            PasswordPolicyError: new password too weak
        """
        async with self.uow:
            await ensure_context_exists(
                self.uow, command.account_type, command.context_id, "AUTH_RESET_PASSWORD"
            )

            accounts = self.uow.accounts(command.account_type)

            async def update_account(account_id: UUID, password_hash: str) -> bool:
                account = await accounts.get_by_id(account_id)
                if account is None:
                    return False
                if account_context_id(account, command.account_type) != command.context_id:
                    return False
                return await accounts.update_password_hash_by_id(account_id, password_hash)

            reset_service = PasswordResetService(
                self.uow.password_reset_tokens,
                PasswordService(self.config.password),
                SessionService(self.uow.sessions, self.config.session),
                self.config.password,
            )

            success = await reset_service.reset_password(
                command.token, command.new_password, update_account
            )
            if not success:
                raise InvalidTokenError("Invalid or expired token")

            await self.uow.commit()

        return ResetPasswordResponse(
            success=True,
            message="Password has been reset successfully. Please log in with your new password.",
        )
