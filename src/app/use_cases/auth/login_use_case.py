"""
Login Use Case

Verifies credentials of a tenant or environment account.
"""

from src.app.auth_config import AuthConfig
from src.app.errors import AccountDisabledError, InvalidCredentialsError, ValidationError
from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from .context import context_type_for, ensure_context_exists
from .dtos import AuthenticatedAccount, LoginCommand


class LoginUseCase:
    """
    Use case for account login.

    Business Rules:
    - At least one of email, phone or username is required
    - The tenant/environment must exist
    - Unknown account and wrong password produce the same error
    - A bcrypt round is spent even when the account is unknown
    - Disabled accounts are rejected after the password check
    - Session creation is left to the caller (cookie wiring)
    """

    def __init__(self, uow: UnitOfWork, config: AuthConfig):
        self.uow = uow
        self.password_service = PasswordService(config.password)

    async def execute(self, command: LoginCommand) -> AuthenticatedAccount:
        """
        Execute login use case.

        Returns:
            AuthenticatedAccount to bind the new session to

        Raises:
            ValidationError: no identifier provided
            NotFoundError: tenant/environment does not exist
            InvalidCredentialsError: unknown account or wrong password
            AccountDisabledError: account is disabled
        """
        if command.identifier.is_empty():
            raise ValidationError("Must provide email, phone, or username")

        async with self.uow:
            await ensure_context_exists(
                self.uow, command.account_type, command.context_id, "AUTH_LOGIN"
            )

            accounts = self.uow.accounts(command.account_type)
            account = await accounts.get_by_identifier(command.identifier, command.context_id)

            if account is None or not account.password_hash:
                self.password_service.burn_time()
                raise InvalidCredentialsError("Invalid credentials")

            if not self.password_service.verify(command.password, account.password_hash):
                raise InvalidCredentialsError("Invalid credentials")

            if account.disabled:
                raise AccountDisabledError("Account is disabled")

            return AuthenticatedAccount(
                account_type=command.account_type,
                account_id=account.id,
                context_type=context_type_for(command.account_type),
                context_id=command.context_id,
            )
