"""Dashboard metrics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from audition_admin.schemas import DashboardStats

if TYPE_CHECKING:
    from audition_admin.clients.api_client import AdminApiClient


class DashboardService:
    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    async def get_stats(self) -> DashboardStats:
        data = await self._api.call("GET", "/admin/dashboard/stats")
        return DashboardStats.model_validate(data)


__all__ = ["DashboardService"]
