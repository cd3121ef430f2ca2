from functools import lru_cache
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.logging_reset_notifier import LoggingResetTokenNotifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.auth_facade import AuthFacade
from src.api.utils.cookie_signer import CookieSigner
from src.app.auth_config import AuthConfig
from src.app.errors import AuthenticationRequiredError
from src.app.services.password_service import PasswordService
from src.app.services.reset_notifier import IResetTokenNotifier
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ContextType, Session

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_auth_config() -> AuthConfig:
    return AuthConfig.from_application_config(ApplicationConfig)


def get_reset_notifier() -> IResetTokenNotifier:
    return LoggingResetTokenNotifier()


def get_auth_facade(
    uow: UnitOfWork = Depends(get_unit_of_work),
    config: AuthConfig = Depends(get_auth_config),
) -> AuthFacade:
    """Auth facade bound to the request's unit of work"""
    return AuthFacade(
        SessionService(uow.sessions, config.session),
        PasswordService(config.password),
        config.session,
        CookieSigner(config.secret, config.previous_secret),
    )


def require_session_in(context_type: ContextType):
    """
    Build the session dependency for routes under ``{context_id}`` of one
    namespace. A cookie bound to another tenant or environment gets a 401 and
    its idle window is left untouched.
    """

    async def get_current_session(
        context_id: UUID,
        request: Request,
        auth: AuthFacade = Depends(get_auth_facade),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> Session:
        """
        Dependency to validate the session cookie.

        Returns:
            The validated session (last_active_at refreshed and committed)

        Raises:
            ClientError: 401 if there is no valid session in this context
        """
        session = await auth.validate_session(request, context_type, context_id)
        # Persist the activity refresh, or the deletion of an idle-expired row
        await uow.commit()

        if session is None:
            raise ClientError(
                AuthenticationRequiredError("No valid session"), status_code=401
            )
        return session

    return get_current_session


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
