"""Key/value application settings stored by the backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from urllib.parse import quote

from audition_admin.schemas import Setting, SettingUpdate

if TYPE_CHECKING:
    from audition_admin.clients.api_client import AdminApiClient


class AppSettingsService:
    _PATH = "/admin/settings"

    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    async def list(self) -> List[Setting]:
        data = await self._api.call("GET", self._PATH)
        return [Setting.model_validate(item) for item in data or []]

    async def get(self, key: str) -> Setting:
        data = await self._api.call("GET", f"{self._PATH}/{quote(key, safe='')}")
        return Setting.model_validate(data)

    async def update(
        self, key: str, value: str, description: Optional[str] = None
    ) -> Setting:
        body = SettingUpdate(value=value, description=description).to_body()
        data = await self._api.call(
            "PATCH", f"{self._PATH}/{quote(key, safe='')}", json=body
        )
        return Setting.model_validate(data)


__all__ = ["AppSettingsService"]
