from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.auth_config import PasswordConfig
from src.app.errors import PasswordPolicyError
from src.app.services.password_reset_service import PasswordResetService
from src.app.services.password_service import PasswordService
from src.domain.entities import AccountType, PasswordResetToken


@pytest.fixture
def repository():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda token: token)
    repo.find_valid_by_token = AsyncMock(return_value=None)
    repo.mark_as_used = AsyncMock(return_value=True)
    repo.delete_all_by_account = AsyncMock(return_value=0)
    repo.delete_expired = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def session_service():
    service = MagicMock()
    service.revoke_all = AsyncMock(return_value=2)
    return service


@pytest.fixture
def service(repository, session_service, clock):
    config = PasswordConfig(salt_rounds=4)
    return PasswordResetService(
        repository, PasswordService(config), session_service, config, clock=clock
    )


def make_reset_token(clock, account_id=None):
    return PasswordResetToken(
        token="e" * 64,
        account_type=AccountType.tenant_account,
        account_id=account_id or uuid4(),
        expires_at=clock.now + timedelta(hours=1),
    )


@pytest.mark.asyncio
async def test_request_reset_replaces_older_tokens(service, repository, clock):
    account_id = uuid4()

    reset = await service.request_reset(AccountType.tenant_account, account_id)

    repository.delete_all_by_account.assert_awaited_once_with(
        AccountType.tenant_account, account_id
    )
    stored = repository.create.await_args.args[0]
    assert stored.token == reset.token
    assert stored.account_id == account_id
    assert stored.used_at is None
    assert len(reset.token) == 64
    assert reset.expires_at == clock.now + timedelta(hours=1)


@pytest.mark.asyncio
async def test_request_reset_does_not_log_token(service, caplog):
    caplog.set_level("INFO")

    reset = await service.request_reset(AccountType.tenant_account, uuid4())

    assert reset.token not in caplog.text


@pytest.mark.asyncio
async def test_validate_token(service, repository, clock):
    reset_token = make_reset_token(clock)
    repository.find_valid_by_token.return_value = reset_token

    assert await service.validate_token(reset_token.token) is reset_token
    repository.find_valid_by_token.assert_awaited_once_with(reset_token.token, clock.now)


@pytest.mark.asyncio
async def test_validate_empty_token(service, repository):
    assert await service.validate_token("") is None
    repository.find_valid_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_reset_password_success(service, repository, session_service, clock):
    reset_token = make_reset_token(clock)
    repository.find_valid_by_token.return_value = reset_token
    update_account = AsyncMock(return_value=True)

    assert await service.reset_password(reset_token.token, "NewPass123!", update_account)

    account_id, password_hash = update_account.await_args.args
    assert account_id == reset_token.account_id
    assert PasswordService().verify("NewPass123!", password_hash)
    repository.mark_as_used.assert_awaited_once_with(reset_token.token, clock.now)
    session_service.revoke_all.assert_awaited_once_with(
        AccountType.tenant_account, reset_token.account_id
    )


@pytest.mark.asyncio
async def test_reset_password_marks_token_before_revoking(service, repository, session_service, clock):
    repository.find_valid_by_token.return_value = make_reset_token(clock)
    calls = []
    repository.mark_as_used.side_effect = lambda *args: calls.append("mark_as_used") or True
    session_service.revoke_all.side_effect = lambda *args: calls.append("revoke_all") or 1

    await service.reset_password("e" * 64, "NewPass123!", AsyncMock(return_value=True))

    assert calls == ["mark_as_used", "revoke_all"]


@pytest.mark.asyncio
async def test_reset_password_invalid_token(service, repository, session_service):
    update_account = AsyncMock()

    assert await service.reset_password("f" * 64, "NewPass123!", update_account) is False
    update_account.assert_not_awaited()
    repository.mark_as_used.assert_not_awaited()
    session_service.revoke_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_reset_password_weak_password_keeps_token(service, repository, session_service, clock):
    repository.find_valid_by_token.return_value = make_reset_token(clock)
    update_account = AsyncMock()

    with pytest.raises(PasswordPolicyError) as exc_info:
        await service.reset_password("e" * 64, "short", update_account)

    assert exc_info.value.errors == ["Password must be at least 8 characters"]
    update_account.assert_not_awaited()
    repository.mark_as_used.assert_not_awaited()
    session_service.revoke_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_reset_password_account_update_refused(service, repository, session_service, clock):
    repository.find_valid_by_token.return_value = make_reset_token(clock)

    assert (
        await service.reset_password("e" * 64, "NewPass123!", AsyncMock(return_value=False))
        is False
    )
    repository.mark_as_used.assert_not_awaited()
    session_service.revoke_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_cleanup(service, repository, clock):
    repository.delete_expired.return_value = 4

    assert await service.cleanup() == 4
    repository.delete_expired.assert_awaited_once_with(clock.now)
