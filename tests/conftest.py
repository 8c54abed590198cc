"""Pytest configuration shared across the suite."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import asyncio
import itertools
import json
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
import pytest

from audition_admin.clients import SQLiteStore
from audition_admin.core.config import ApiSettings
from audition_admin.services import CredentialStore

USER_PAYLOAD: Dict[str, Any] = {
    "id": "u-1",
    "name": "Ama Mensah",
    "email": "ama@example.com",
    "status": "active",
    "permissions": ["dashboard.show", "auditions.index"],
    "roles": [
        {
            "id": "r-1",
            "name": "ADMIN",
            "displayName": "Admin",
            "permissions": [
                {"id": "p-1", "name": "settings.index", "displayName": "View settings"}
            ],
        }
    ],
    "createdAt": "2024-05-01T10:00:00Z",
    "updatedAt": "2024-05-02T10:00:00Z",
}


def envelope(data: Any = None, message: str = "OK", **metadata: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "message": message, "data": data}
    if metadata:
        body["metadata"] = metadata
    return body


Route = Callable[[httpx.Request], httpx.Response]


class FakeAdminBackend:
    """In-process stand-in for the admin REST API, served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.valid_access_tokens = {"access-1"}
        self.valid_refresh_tokens = {"refresh-1"}
        self.refresh_fails_with: Optional[int] = None
        self.logout_fails_with: Optional[int] = None
        self.requests: list[httpx.Request] = []
        self.refresh_calls: list[str] = []
        self.logout_calls: list[str] = []
        self._counter = itertools.count(2)
        self._routes: Dict[Tuple[str, str], Route] = {}

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def route(self, method: str, path: str, payload: Any = None, *, status: int = 200) -> None:
        """Answer ``method path`` with ``payload`` (a JSON body or a callable)."""

        def respond(request: httpx.Request) -> httpx.Response:
            if callable(payload):
                return payload(request)
            return httpx.Response(status, json=payload)

        self._routes[(method, path)] = respond

    def expire_access_tokens(self) -> None:
        self.valid_access_tokens.clear()

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if _path(r) == path]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        # Replays reuse the same request object, so record what was on the wire.
        self.requests.append(
            httpx.Request(
                request.method,
                request.url,
                headers=request.headers.copy(),
                content=request.content,
            )
        )
        # Yield like a real network round trip so concurrent requests interleave.
        await asyncio.sleep(0)
        path = _path(request)
        body = json.loads(request.content) if request.content else {}

        if path == "/admin/auth/login":
            if body.get("password") != "correct-horse":
                return httpx.Response(
                    401, json={"success": False, "message": "Invalid credentials", "data": None}
                )
            self.valid_access_tokens.add("access-1")
            return httpx.Response(
                200,
                json=envelope(
                    {"accessToken": "access-1", "refreshToken": "refresh-1", "user": USER_PAYLOAD}
                ),
            )

        if path == "/admin/auth/refresh":
            token = body.get("refreshToken")
            self.refresh_calls.append(token)
            if self.refresh_fails_with is not None:
                return httpx.Response(
                    self.refresh_fails_with,
                    json={"success": False, "message": "Refresh rejected", "data": None},
                )
            if token not in self.valid_refresh_tokens:
                return httpx.Response(
                    401, json={"success": False, "message": "Invalid refresh token", "data": None}
                )
            access = f"access-{next(self._counter)}"
            self.valid_access_tokens.add(access)
            return httpx.Response(200, json=envelope({"accessToken": access}))

        if path == "/admin/auth/logout":
            self.logout_calls.append(body.get("refreshToken"))
            if self.logout_fails_with is not None:
                return httpx.Response(self.logout_fails_with, json={"message": "boom"})
            self.valid_refresh_tokens.discard(body.get("refreshToken"))
            return httpx.Response(200, json=envelope(None, "Logged out"))

        if path.startswith("/admin/auth/"):
            return httpx.Response(200, json=envelope(None))

        header = request.headers.get("Authorization", "")
        token = header.removeprefix("Bearer ")
        if token not in self.valid_access_tokens:
            return httpx.Response(
                401, json={"success": False, "message": "Token expired", "data": None}
            )

        handler = self._routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        return handler(request)


def _path(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/api")


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def api_settings() -> ApiSettings:
    return ApiSettings(ADMIN_API_BASE_URL=_bootstrap.BASE_URL, ADMIN_API_TIMEOUT=5)


@pytest.fixture
def backend() -> FakeAdminBackend:
    return FakeAdminBackend()


@pytest.fixture
def credential_store(tmp_path) -> CredentialStore:
    return CredentialStore(SQLiteStore(str(tmp_path / "credentials.sqlite3")))
