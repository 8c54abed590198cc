"""
Admin user and role management.

The users endpoints report activation as ``status: "active" | "inactive"``;
:class:`~audition_admin.schemas.User` maps that onto ``active_status``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

from audition_admin.schemas import Page, Role, User, UserCreate, UserFilters, UserUpdate

if TYPE_CHECKING:
    from audition_admin.clients.api_client import AdminApiClient


class UserService:
    _PATH = "/admin/users"

    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    def _item_path(self, user_id: str) -> str:
        return f"{self._PATH}/{quote(user_id, safe='')}"

    async def list(self, filters: Optional[UserFilters] = None) -> Page[User]:
        params = filters.to_params() if filters else None
        response = await self._api.request("GET", self._PATH, params=params)
        return Page[User].from_envelope(response.json())

    async def get(self, user_id: str) -> User:
        return User.model_validate(await self._api.call("GET", self._item_path(user_id)))

    async def create(self, payload: UserCreate) -> User:
        data = await self._api.call("POST", self._PATH, json=payload.to_body())
        return User.model_validate(data)

    async def update(self, user_id: str, payload: UserUpdate) -> User:
        data = await self._api.call(
            "PATCH", self._item_path(user_id), json=payload.to_body()
        )
        return User.model_validate(data)

    async def activate(self, user_id: str) -> User:
        data = await self._api.call("PATCH", f"{self._item_path(user_id)}/activate")
        return User.model_validate(data)

    async def deactivate(self, user_id: str) -> User:
        data = await self._api.call("PATCH", f"{self._item_path(user_id)}/deactivate")
        return User.model_validate(data)

    async def delete(self, user_id: str) -> None:
        """Soft-delete a user."""
        await self._api.call("DELETE", self._item_path(user_id))


class RoleService:
    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    async def list(self) -> Page[Role]:
        response = await self._api.request("GET", "/admin/roles")
        return Page[Role].from_envelope(response.json())


__all__ = ["RoleService", "UserService"]
