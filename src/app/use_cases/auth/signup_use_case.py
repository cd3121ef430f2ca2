"""
Signup Use Case

Creates an environment account with a strength-checked password.
"""

from src.app.auth_config import AuthConfig
from src.app.errors import ConflictError, PasswordPolicyError, ValidationError
from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccountType, ContextType, EnvironmentAccount
from .context import ensure_context_exists
from .dtos import AuthenticatedAccount, SignupCommand


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Require at least one identifier
    2. Environment must exist
    3. Identifier must not be taken within the environment
    4. Password must pass the strength rules
    5. Store the account with a bcrypt hash and commit
    """

    def __init__(self, uow: UnitOfWork, config: AuthConfig):
        self.uow = uow
        self.password_service = PasswordService(config.password)

    async def execute(self, command: SignupCommand) -> AuthenticatedAccount:
        if command.identifier.is_empty():
            raise ValidationError("Must provide email, phone, or username")

        validation = self.password_service.validate_strength(command.password)
        if not validation.valid:
            raise PasswordPolicyError(validation.errors)

        async with self.uow:
            await ensure_context_exists(
                self.uow,
                AccountType.environment_account,
                command.environment_id,
                "AUTH_SIGNUP",
            )

            existing = await self.uow.environment_accounts.get_by_identifier(
                command.identifier, command.environment_id
            )
            if existing is not None:
                raise ConflictError("Account already exists")

            account = EnvironmentAccount(
                environment_id=command.environment_id,
                email=command.identifier.email,
                phone=command.identifier.phone,
                username=command.identifier.username,
                password_hash=self.password_service.hash(command.password),
            )
            account = await self.uow.environment_accounts.create(account)
            result = AuthenticatedAccount(
                account_type=AccountType.environment_account,
                account_id=account.id,
                context_type=ContextType.environment,
                context_id=command.environment_id,
            )

            await self.uow.commit()

            return result
