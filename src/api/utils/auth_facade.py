"""
Auth Facade

Request/response glue around the session and password services: reads the
session cookie, calls SessionService, sets and clears the cookie. Holds no
state and no policy beyond cookie wiring.

Works with any request exposing ``headers``, ``cookies`` and ``client`` and any
response exposing ``set_cookie``/``delete_cookie`` (Starlette objects do).
"""

import logging
from typing import Any, List, Mapping, Optional, Protocol
from uuid import UUID

from src.app.auth_config import SessionConfig
from src.app.errors import PasswordPolicyError
from src.app.services.password_service import PasswordService
from src.app.services.session_service import SessionService
from src.api.utils.cookie_signer import CookieSigner
from src.domain.entities import AccountType, ContextType, Session


class RequestLike(Protocol):
    headers: Mapping[str, str]
    cookies: Mapping[str, str]
    client: Any


class ResponseLike(Protocol):
    def set_cookie(self, key: str, value: str = "", **kwargs: Any) -> None: ...

    def delete_cookie(self, key: str, **kwargs: Any) -> None: ...


class AuthFacade:
    def __init__(
        self,
        session_service: SessionService,
        password_service: PasswordService,
        config: SessionConfig,
        signer: CookieSigner,
        logger: Optional[logging.Logger] = None,
    ):
        self.session_service = session_service
        self.password_service = password_service
        self.config = config
        self.signer = signer
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Cookie wiring
    # ------------------------------------------------------------------

    @property
    def cookie_name(self) -> str:
        return self.config.cookie_name

    def cookie_options(self) -> dict:
        return {
            "httponly": True,
            "secure": self.config.secure,
            "samesite": self.config.same_site.value,
            "max_age": self.config.absolute_timeout,
            "path": "/",
        }

    def read_token(self, request: RequestLike) -> Optional[str]:
        """Session token from the signed cookie, None if absent or tampered"""
        return self.signer.unsign(request.cookies.get(self.cookie_name))

    def set_session_cookie(self, response: ResponseLike, token: str) -> None:
        response.set_cookie(self.cookie_name, self.signer.sign(token), **self.cookie_options())

    def clear_session_cookie(self, response: ResponseLike) -> None:
        response.delete_cookie(
            self.cookie_name,
            path="/",
            secure=self.config.secure,
            httponly=True,
            samesite=self.config.same_site.value,
        )

    # ------------------------------------------------------------------
    # Session orchestration
    # ------------------------------------------------------------------

    async def create_session(
        self,
        response: ResponseLike,
        account_type: AccountType,
        account_id: UUID,
        context_type: ContextType,
        context_id: UUID,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Session:
        """Create a session and set the cookie on the response"""
        session = await self.session_service.create(
            account_type,
            account_id,
            context_type,
            context_id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.set_session_cookie(response, session.token)

        self.logger.info("Session %s created for account %s", session.id, account_id)
        return session

    async def validate_session(
        self,
        request: RequestLike,
        context_type: Optional[ContextType] = None,
        context_id: Optional[UUID] = None,
    ) -> Optional[Session]:
        """Validate the session named by the request cookie, optionally within one context"""
        token = self.read_token(request)
        if not token:
            return None
        if context_id is None:
            return await self.session_service.validate(token)
        return await self.session_service.validate(token, context_type, context_id)

    async def get_session(self, request: RequestLike) -> Optional[Session]:
        """Raw session lookup, no expiry checks"""
        token = self.read_token(request)
        if not token:
            return None
        return await self.session_service.get_by_token(token)

    async def signout(self, request: RequestLike, response: ResponseLike) -> None:
        """Revoke the current session and clear the cookie"""
        token = self.read_token(request)
        if token:
            await self.session_service.revoke(token)

        self.clear_session_cookie(response)

    async def signout_all(
        self, response: ResponseLike, account_type: AccountType, account_id: UUID
    ) -> int:
        """Revoke every session of an account and clear the cookie"""
        revoked = await self.session_service.revoke_all(account_type, account_id)
        self.clear_session_cookie(response)

        self.logger.info("All sessions revoked for account %s (%d)", account_id, revoked)
        return revoked

    async def list_sessions(
        self, account_type: AccountType, account_id: UUID
    ) -> List[Session]:
        return await self.session_service.list_by_account(account_type, account_id)

    # ------------------------------------------------------------------
    # Passwords
    # ------------------------------------------------------------------

    def hash_password(self, password: str) -> str:
        """Hash a password for storage, rejecting weak ones"""
        validation = self.password_service.validate_strength(password)
        if not validation.valid:
            raise PasswordPolicyError(validation.errors)
        return self.password_service.hash(password)

    def verify_password(self, password: str, password_hash: Optional[str]) -> bool:
        return self.password_service.verify(password, password_hash)

    # ------------------------------------------------------------------
    # Request metadata
    # ------------------------------------------------------------------

    @staticmethod
    def get_ip_address(request: RequestLike) -> Optional[str]:
        """First X-Forwarded-For entry, falling back to the peer address"""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first_ip = forwarded.split(",")[0].strip()
            if first_ip:
                return first_ip

        client = request.client
        return client.host if client else None

    @staticmethod
    def get_user_agent(request: RequestLike) -> Optional[str]:
        return request.headers.get("user-agent")
