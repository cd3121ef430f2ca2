"""
Shared authentication routes.

Tenant accounts and environment accounts expose the same cookie-session
flows; ``create_auth_router`` builds them for one account namespace.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.utils.auth_facade import AuthFacade
from src.api.utils.deferred_notifier import DeferredResetTokenNotifier
from src.app.auth_config import AuthConfig
from src.app.services.reset_notifier import IResetTokenNotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ConfirmPasswordResetUseCase,
    ForgotPasswordCommand,
    ForgotPasswordResponse,
    LoginCommand,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordCommand,
    ResetPasswordResponse,
)
from src.app.use_cases.auth.context import context_type_for
from src.depends import (
    get_auth_config,
    get_auth_facade,
    get_reset_notifier,
    get_unit_of_work,
    require_session_in,
)
from src.domain.entities import AccountIdentifier, AccountType, ContextType, Session


class IdentifierRequest(BaseModel):
    """At least one of email, phone or username; checked by the use case"""

    email: Optional[EmailStr] = Field(None, description="Account email address")
    phone: Optional[str] = Field(None, max_length=32, description="Account phone number")
    username: Optional[str] = Field(None, max_length=255, description="Account username")

    def to_identifier(self) -> AccountIdentifier:
        return AccountIdentifier(email=self.email, phone=self.phone, username=self.username)


class LoginRequest(IdentifierRequest):
    password: str = Field(..., description="Account password")


class SignupRequest(IdentifierRequest):
    password: str = Field(..., description="Account password")


class ForgotPasswordRequest(IdentifierRequest):
    pass


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., description="Reset token delivered out of band")
    new_password: str = Field(..., description="New password")


class SessionResponse(BaseModel):
    """Session metadata. The token is only ever sent as the signed cookie."""

    id: UUID
    account_type: AccountType
    account_id: UUID
    context_type: ContextType
    context_id: UUID
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    expires_at: datetime
    last_active_at: datetime
    created_at: datetime

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(
            id=session.id,
            account_type=session.account_type,
            account_id=session.account_id,
            context_type=session.context_type,
            context_id=session.context_id,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            expires_at=session.expires_at,
            last_active_at=session.last_active_at,
            created_at=session.created_at,
        )


class AuthResponse(BaseModel):
    account_id: UUID
    session: SessionResponse


class SessionListResponse(BaseModel):
    sessions: List[SessionResponse]


class RevokedResponse(BaseModel):
    revoked: int


def create_auth_router(account_type: AccountType, prefix: str) -> APIRouter:
    """
    Build the login/logout/session/password-reset routes for one account
    namespace. ``prefix`` must contain the ``{context_id}`` path parameter.
    """
    context_type = context_type_for(account_type)
    router = APIRouter(prefix=prefix)
    require_session = require_session_in(context_type)

    @router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
    async def login(
        context_id: UUID,
        payload: LoginRequest,
        request: Request,
        response: Response,
        uow: UnitOfWork = Depends(get_unit_of_work),
        config: AuthConfig = Depends(get_auth_config),
        auth: AuthFacade = Depends(get_auth_facade),
    ):
        """
        Authenticate with an identifier and password, start a session.

        Raises:
            - 400 Bad Request: no identifier
            - 401 Unauthorized: invalid credentials
            - 403 Forbidden: account disabled
            - 404 Not Found: unknown tenant/environment
        """
        command = LoginCommand(
            account_type=account_type,
            context_id=context_id,
            identifier=payload.to_identifier(),
            password=payload.password,
        )
        account = await LoginUseCase(uow, config).execute(command)

        session = await auth.create_session(
            response,
            account.account_type,
            account.account_id,
            account.context_type,
            account.context_id,
            ip_address=auth.get_ip_address(request),
            user_agent=auth.get_user_agent(request),
        )
        await uow.commit()

        return AuthResponse(
            account_id=account.account_id, session=SessionResponse.from_session(session)
        )

    @router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
    async def logout(
        request: Request,
        response: Response,
        uow: UnitOfWork = Depends(get_unit_of_work),
        auth: AuthFacade = Depends(get_auth_facade),
    ):
        """Revoke the current session, if any, and clear the cookie"""
        await auth.signout(request, response)
        await uow.commit()

    @router.get("/session", response_model=SessionResponse)
    async def current_session(session: Session = Depends(require_session)):
        """
        Validate the session cookie.

        Raises:
            - 401 Unauthorized: no valid session
        """
        return SessionResponse.from_session(session)

    @router.get("/sessions", response_model=SessionListResponse)
    async def list_sessions(
        session: Session = Depends(require_session),
        auth: AuthFacade = Depends(get_auth_facade),
    ):
        """Live sessions of the current account, most recently active first"""
        sessions = await auth.list_sessions(session.account_type, session.account_id)
        return SessionListResponse(
            sessions=[SessionResponse.from_session(item) for item in sessions]
        )

    @router.post("/logout-all", response_model=RevokedResponse)
    async def logout_all(
        response: Response,
        session: Session = Depends(require_session),
        uow: UnitOfWork = Depends(get_unit_of_work),
        auth: AuthFacade = Depends(get_auth_facade),
    ):
        """Revoke every session of the current account, this one included"""
        revoked = await auth.signout_all(response, session.account_type, session.account_id)
        await uow.commit()
        return RevokedResponse(revoked=revoked)

    @router.post("/forgot-password", response_model=ForgotPasswordResponse)
    async def forgot_password(
        context_id: UUID,
        payload: ForgotPasswordRequest,
        background_tasks: BackgroundTasks,
        uow: UnitOfWork = Depends(get_unit_of_work),
        config: AuthConfig = Depends(get_auth_config),
        notifier: IResetTokenNotifier = Depends(get_reset_notifier),
    ):
        """
        Request a password reset.

        Always returns the same message, whether or not the account exists.
        Delivery runs after the response is sent.
        """
        command = ForgotPasswordCommand(
            account_type=account_type,
            context_id=context_id,
            identifier=payload.to_identifier(),
        )
        deferred = DeferredResetTokenNotifier(notifier, background_tasks)
        return await RequestPasswordResetUseCase(uow, config, deferred).execute(command)

    @router.post("/reset-password", response_model=ResetPasswordResponse)
    async def reset_password(
        context_id: UUID,
        payload: ResetPasswordRequest,
        uow: UnitOfWork = Depends(get_unit_of_work),
        config: AuthConfig = Depends(get_auth_config),
    ):
        """
        Set a new password with a reset token. Revokes every session of the
        account.

        Raises:
            - 400 Bad Request: INVALID_TOKEN or INVALID_PASSWORD (with errors list)
        """
        command = ResetPasswordCommand(
            account_type=account_type,
            context_id=context_id,
            token=payload.token,
            new_password=payload.new_password,
        )
        return await ConfirmPasswordResetUseCase(uow, config).execute(command)

    return router
