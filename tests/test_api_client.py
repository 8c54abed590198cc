from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from audition_admin.clients import AdminApiClient, AuthApi, TokenRefreshError
from audition_admin.services import CredentialStore, RefreshCoordinator
from audition_admin.utils.http import ApiError
from conftest import FakeAdminBackend, envelope


@pytest.fixture
def client(api_settings, backend: FakeAdminBackend, credential_store: CredentialStore):
    auth_api = AuthApi(api_settings, transport=backend.transport)
    coordinator = RefreshCoordinator(credential_store, auth_api.refresh_access_token)
    return AdminApiClient(api_settings, coordinator, transport=backend.transport)


@pytest.mark.anyio
async def test_call_unwraps_envelope_and_sends_bearer(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("access-1", "refresh-1")
    backend.route("GET", "/admin/settings", envelope([{"id": "s1", "key": "k", "value": "v"}]))

    async with client:
        data = await client.call("GET", "/admin/settings")

    assert data == [{"id": "s1", "key": "k", "value": "v"}]
    sent = backend.requests_to("/admin/settings")[0]
    assert sent.headers["Authorization"] == "Bearer access-1"
    assert str(sent.url) == "http://admin.test/api/admin/settings"


@pytest.mark.anyio
async def test_unset_query_params_are_dropped(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("access-1", "refresh-1")
    backend.route("GET", "/admin/auditions", envelope({"data": [], "total": 0}))

    async with client:
        await client.request("get", "/admin/auditions", params={"status": "PAID", "page": None})

    sent = backend.requests_to("/admin/auditions")[0]
    assert dict(sent.url.params) == {"status": "PAID"}


@pytest.mark.anyio
async def test_error_status_raises_api_error_with_server_message(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("access-1", "refresh-1")
    backend.route(
        "PATCH",
        "/admin/settings/max_age",
        {"success": False, "message": "Value must be numeric", "data": None},
        status=422,
    )

    async with client:
        with pytest.raises(ApiError) as exc_info:
            await client.call("PATCH", "/admin/settings/max_age", json={"value": "old"})

    assert exc_info.value.status_code == 422
    assert exc_info.value.message == "Value must be numeric"
    assert not exc_info.value.is_unauthorized
    assert backend.refresh_calls == []


@pytest.mark.anyio
async def test_expired_access_token_is_refreshed_against_backend(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("stale", "refresh-1")
    backend.route(
        "POST",
        "/admin/users",
        lambda request: httpx.Response(201, json=envelope(json.loads(request.content))),
    )

    async with client:
        data = await client.call("POST", "/admin/users", json={"name": "Kofi"})

    attempts = backend.requests_to("/admin/users")
    assert [r.headers["Authorization"] for r in attempts] == ["Bearer stale", "Bearer access-2"]
    # The replay carries the original body.
    assert data == {"name": "Kofi"}
    assert backend.refresh_calls == ["refresh-1"]
    assert credential_store.get_access_token() == "access-2"
    assert credential_store.get_refresh_token() == "refresh-1"


@pytest.mark.anyio
async def test_parallel_requests_with_stale_token_trigger_one_refresh(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("stale", "refresh-1")
    for name in ("a", "b", "c"):
        backend.route("GET", f"/admin/{name}", envelope(name))

    async with client:
        results = await asyncio.gather(
            client.call("GET", "/admin/a"),
            client.call("GET", "/admin/b"),
            client.call("GET", "/admin/c"),
        )

    assert sorted(results) == ["a", "b", "c"]
    assert len(backend.refresh_calls) == 1


@pytest.mark.anyio
async def test_rejected_refresh_token_ends_session(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("stale", "revoked")

    async with client:
        with pytest.raises(ApiError) as exc_info:
            await client.call("GET", "/admin/profile")

    assert exc_info.value.message == "Invalid refresh token"
    assert credential_store.get_access_token() is None
    assert credential_store.get_refresh_token() is None


@pytest.mark.anyio
async def test_refresh_without_access_token_in_payload_fails(api_settings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=envelope({})))
    auth_api = AuthApi(api_settings, transport=transport)

    with pytest.raises(TokenRefreshError):
        await auth_api.refresh_access_token("refresh-1")


@pytest.mark.anyio
async def test_non_json_error_body_still_produces_api_error(
    client: AdminApiClient, backend: FakeAdminBackend, credential_store: CredentialStore
) -> None:
    credential_store.set_tokens("access-1", "refresh-1")
    backend.route("GET", "/admin/broken", lambda request: httpx.Response(502, text="Bad gateway"))

    async with client:
        with pytest.raises(ApiError) as exc_info:
            await client.request("GET", "/admin/broken")

    assert exc_info.value.status_code == 502
    assert exc_info.value.payload == "Bad gateway"
