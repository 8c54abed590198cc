"""Signed-in user's own profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

from audition_admin.schemas import PasswordChange, ProfileUpdate, User

if TYPE_CHECKING:
    from audition_admin.clients.api_client import AdminApiClient


class ProfileService:
    _PATH = "/admin/profile"

    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    async def get(self) -> User:
        return User.model_validate(await self._api.call("GET", self._PATH))

    async def update(self, payload: ProfileUpdate) -> User:
        data = await self._api.call("PATCH", self._PATH, json=payload.to_body())
        return User.model_validate(data)

    async def change_password(self, payload: PasswordChange) -> None:
        await self._api.call(
            "POST", f"{self._PATH}/change-password", json=payload.to_body()
        )


__all__ = ["ProfileService"]
