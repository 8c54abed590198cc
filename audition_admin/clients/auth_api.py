"""
Admin authentication endpoints.

These calls are made with a bare HTTP client rather than through the
coordinated client: login and refresh establish credentials, so an
authorization failure here is an answer, not something to recover from.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx

from audition_admin.core.config import ApiSettings
from audition_admin.schemas import LoginRequest, LoginResult
from audition_admin.utils.http import raise_for_api_error, unwrap_envelope


class TokenRefreshError(Exception):
    """Raised when the refresh endpoint succeeds without returning an access token."""


class AuthApi:
    """Login, token refresh, logout and password recovery."""

    LOGIN_PATH = "/admin/auth/login"
    REFRESH_PATH = "/admin/auth/refresh"
    LOGOUT_PATH = "/admin/auth/logout"
    FORGOT_PASSWORD_PATH = "/admin/auth/forgot-password"
    RESET_PASSWORD_PATH = "/admin/auth/reset-password"

    def __init__(
        self,
        api_settings: ApiSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = api_settings
        self._transport = transport

    async def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        async with httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.post(path, json=payload)

        raise_for_api_error(response)
        return unwrap_envelope(response)

    async def login(self, email: str, password: str) -> LoginResult:
        body = LoginRequest(email=email, password=password).model_dump()
        data = await self._post(self.LOGIN_PATH, body)
        return LoginResult.model_validate(data)

    async def refresh_access_token(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token."""
        data = await self._post(self.REFRESH_PATH, {"refreshToken": refresh_token})
        access_token = data.get("accessToken") if isinstance(data, dict) else None
        if not access_token:
            raise TokenRefreshError("Refresh response did not include an access token.")
        return access_token

    async def logout(self, refresh_token: str) -> None:
        """Revoke ``refresh_token`` on the backend."""
        await self._post(self.LOGOUT_PATH, {"refreshToken": refresh_token})

    async def forgot_password(self, email: str) -> None:
        await self._post(self.FORGOT_PASSWORD_PATH, {"email": email})

    async def reset_password(self, token: str, new_password: str) -> None:
        await self._post(
            self.RESET_PASSWORD_PATH,
            {"token": token, "newPassword": new_password},
        )


__all__ = ["AuthApi", "TokenRefreshError"]
