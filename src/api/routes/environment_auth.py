from uuid import UUID

from fastapi import Depends, Request, Response, status

from src.api.routes.auth import AuthResponse, SessionResponse, SignupRequest, create_auth_router
from src.api.utils.auth_facade import AuthFacade
from src.app.auth_config import AuthConfig
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import SignupCommand, SignupUseCase
from src.depends import get_auth_config, get_auth_facade, get_unit_of_work
from src.domain.entities import AccountType

router = create_auth_router(
    AccountType.environment_account, "/auth/environments/{context_id}"
)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    context_id: UUID,
    payload: SignupRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config: AuthConfig = Depends(get_auth_config),
    auth: AuthFacade = Depends(get_auth_facade),
):
    """
    Environment account signup. Creates the account and signs it in.

    Raises:
        - 400 Bad Request: no identifier, or INVALID_PASSWORD
        - 404 Not Found: unknown environment
        - 409 Conflict: account already exists
    """
    command = SignupCommand(
        environment_id=context_id,
        identifier=payload.to_identifier(),
        password=payload.password,
    )
    account = await SignupUseCase(uow, config).execute(command)

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
