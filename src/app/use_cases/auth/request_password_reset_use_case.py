"""
Request Password Reset Use Case

Issues a reset token for an account found by identifier.
"""

from typing import Optional

from src.app.auth_config import AuthConfig
from src.app.errors import ValidationError
from src.app.services.password_reset_service import PasswordResetService
from src.app.services.password_service import PasswordService
from src.app.services.reset_notifier import IResetTokenNotifier
from src.app.services.session_service import SessionService
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from .context import ensure_context_exists
from .dtos import ForgotPasswordCommand, ForgotPasswordResponse

RESET_REQUESTED_MESSAGE = (
    "If an account exists with this identifier, a reset link has been sent."
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Same response whether or not the account exists (no enumeration)
    - A token is generated on both paths so the miss costs about the same
    - Only existing accounts get a stored token and a notification
    - Older tokens of the account are replaced
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: AuthConfig,
        notifier: IResetTokenNotifier,
        token_generator: Optional[TokenGenerator] = None,
    ):
        self.uow = uow
        self.config = config
        self.notifier = notifier
        self.token_generator = token_generator or TokenGenerator()

    async def execute(self, command: ForgotPasswordCommand) -> ForgotPasswordResponse:
        """
        Execute request password reset use case.

        Raises:
            ValidationError: no identifier provided
            NotFoundError: tenant/environment does not exist
        """
        if command.identifier.is_empty():
            raise ValidationError("Must provide email, phone, or username")

        async with self.uow:
            await ensure_context_exists(
                self.uow, command.account_type, command.context_id, "AUTH_FORGOT_PASSWORD"
            )

            accounts = self.uow.accounts(command.account_type)
            account = await accounts.get_by_identifier(command.identifier, command.context_id)

            if account is None:
                self.token_generator.generate()
            else:
                reset_service = PasswordResetService(
                    self.uow.password_reset_tokens,
                    PasswordService(self.config.password),
                    SessionService(self.uow.sessions, self.config.session),
                    self.config.password,
                    token_generator=self.token_generator,
                )
                account_id = account.id
                reset = await reset_service.request_reset(command.account_type, account_id)
                await self.uow.commit()

                await self.notifier.send_password_reset(
                    command.account_type, account_id, reset.token, reset.expires_at
                )

        return ForgotPasswordResponse(message=RESET_REQUESTED_MESSAGE)
