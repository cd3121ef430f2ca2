from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.domain.entities import Tenant
from tests.integration.conftest import PASSWORD
from tests.utils.cookies import cookie_header, session_cookie_value

RESET_MESSAGE = "If an account exists with this identifier, a reset link has been sent."
NEW_PASSWORD = "BrandNewPass789!"


def tenant_url(tenant_id, path):
    return f"/auth/tenants/{tenant_id}{path}"


async def forgot(client, tenant_id, **identifier):
    return await client.post(
        tenant_url(tenant_id, "/forgot-password"),
        json=identifier or {"email": "user@acme.com"},
    )


async def reset(client, tenant_id, token, new_password=NEW_PASSWORD):
    return await client.post(
        tenant_url(tenant_id, "/reset-password"),
        json={"token": token, "new_password": new_password},
    )


@pytest.mark.asyncio
async def test_forgot_password_does_not_reveal_accounts(
    client: AsyncClient, notifier, tenant_id, tenant_account_id
):
    """
    Given one existing and one unknown identifier
    When both request a reset
    Then both get the same response
    And only the existing account receives a token
    """
    existing = await forgot(client, tenant_id)
    unknown = await forgot(client, tenant_id, email="nobody@acme.com")

    assert existing.status_code == unknown.status_code == 200
    assert existing.json() == unknown.json() == {"message": RESET_MESSAGE}
    assert len(notifier.sent) == 1
    assert notifier.sent[0]["account_id"] == tenant_account_id
    assert len(notifier.last_token) == 64


@pytest.mark.asyncio
async def test_forgot_password_unknown_tenant(client: AsyncClient):
    response = await forgot(client, uuid4())

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_reset_password_flow(client: AsyncClient, notifier, tenant_id, tenant_account_id):
    """
    Given a signed-in account that requested a reset
    When it resets its password with the delivered token
    Then existing sessions are revoked
    And only the new password logs in
    """
    login = await client.post(
        tenant_url(tenant_id, "/login"), json={"email": "user@acme.com", "password": PASSWORD}
    )
    cookie = session_cookie_value(login)
    await forgot(client, tenant_id)

    response = await reset(client, tenant_id, notifier.last_token)

    assert response.status_code == 200
    assert response.json()["success"] is True

    session = await client.get(tenant_url(tenant_id, "/session"), headers=cookie_header(cookie))
    assert session.status_code == 401

    old = await client.post(
        tenant_url(tenant_id, "/login"), json={"email": "user@acme.com", "password": PASSWORD}
    )
    assert old.status_code == 401

    new = await client.post(
        tenant_url(tenant_id, "/login"), json={"email": "user@acme.com", "password": NEW_PASSWORD}
    )
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_reset_token_is_single_use(client: AsyncClient, notifier, tenant_id, tenant_account_id):
    await forgot(client, tenant_id)
    token = notifier.last_token

    assert (await reset(client, tenant_id, token)).status_code == 200

    response = await reset(client, tenant_id, token, new_password="AnotherPass000!")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_second_request_invalidates_first_token(
    client: AsyncClient, notifier, tenant_id, tenant_account_id
):
    await forgot(client, tenant_id)
    first = notifier.last_token
    await forgot(client, tenant_id)
    second = notifier.last_token

    assert (await reset(client, tenant_id, first)).status_code == 400
    assert (await reset(client, tenant_id, second)).status_code == 200


@pytest.mark.asyncio
async def test_reset_password_unknown_token(client: AsyncClient, tenant_id):
    response = await reset(client, tenant_id, "0" * 64)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_reset_password_weak_password(
    client: AsyncClient, notifier, tenant_id, tenant_account_id
):
    await forgot(client, tenant_id)
    token = notifier.last_token

    response = await reset(client, tenant_id, token, new_password="short")

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_PASSWORD"
    assert error["details"]["errors"] == ["Password must be at least 8 characters"]

    # The token survives a policy rejection
    assert (await reset(client, tenant_id, token)).status_code == 200


@pytest.mark.asyncio
async def test_reset_token_bound_to_its_tenant(
    client: AsyncClient, db_session, notifier, tenant_id, tenant_account_id
):
    other = Tenant(name="Other Corp")
    db_session.add(other)
    await db_session.commit()
    other_id = other.id

    await forgot(client, tenant_id)
    token = notifier.last_token

    response = await reset(client, other_id, token)

    assert response.status_code == 400
    assert (await reset(client, tenant_id, token)).status_code == 200
