from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.auth_config import AuthConfig, PasswordConfig
from tests.fixtures.clock import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_config():
    # Low bcrypt cost keeps the suite fast
    return AuthConfig(
        secret="unit-test-secret-key-with-at-least-32-chars",
        password=PasswordConfig(salt_rounds=4),
    )


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock()

    uow.environments = MagicMock()
    uow.environments.get_by_id = AsyncMock()

    for name in ("tenant_accounts", "environment_accounts"):
        accounts = MagicMock()
        accounts.get_by_id = AsyncMock()
        accounts.get_by_identifier = AsyncMock()
        accounts.create = AsyncMock(side_effect=lambda account: account)
        accounts.update_password_hash_by_id = AsyncMock(return_value=True)
        setattr(uow, name, accounts)

    uow.accounts = MagicMock(
        side_effect=lambda account_type: uow.tenant_accounts
        if account_type.value == "tenant_account"
        else uow.environment_accounts
    )

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.find_by_token = AsyncMock()
    uow.sessions.find_valid_by_token = AsyncMock()
    uow.sessions.update_last_active_at = AsyncMock()
    uow.sessions.delete_by_token = AsyncMock(return_value=True)
    uow.sessions.delete_all_by_account = AsyncMock(return_value=0)
    uow.sessions.find_all_by_account = AsyncMock(return_value=[])
    uow.sessions.delete_expired = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.find_valid_by_token = AsyncMock()
    uow.password_reset_tokens.mark_as_used = AsyncMock(return_value=True)
    uow.password_reset_tokens.delete_all_by_account = AsyncMock(return_value=0)
    uow.password_reset_tokens.delete_expired = AsyncMock(return_value=0)

    return uow
