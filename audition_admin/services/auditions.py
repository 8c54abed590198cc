"""
Audition entries: listing, detail, SMS resend and CSV export.

Filtering, sorting and pagination are evaluated by the backend; the filters
are passed through as query parameters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

from audition_admin.schemas import Audition, AuditionDetails, EntryFilters, Page

if TYPE_CHECKING:
    from audition_admin.clients.api_client import AdminApiClient


class AuditionService:
    _PATH = "/admin/auditions"

    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    async def list(self, filters: Optional[EntryFilters] = None) -> Page[Audition]:
        params = filters.to_params() if filters else None
        response = await self._api.request("GET", self._PATH, params=params)
        return Page[Audition].from_envelope(response.json())

    async def get(self, audition_id: str) -> AuditionDetails:
        data = await self._api.call("GET", f"{self._PATH}/{quote(audition_id, safe='')}")
        return AuditionDetails.model_validate(data)

    async def resend_sms(self, audition_id: str) -> None:
        await self._api.call(
            "POST", f"{self._PATH}/{quote(audition_id, safe='')}/sms/resend"
        )

    async def export(self, filters: Optional[EntryFilters] = None) -> bytes:
        """Return the backend's CSV export for the filtered entries."""
        params = filters.to_params() if filters else None
        response = await self._api.request("GET", f"{self._PATH}/export", params=params)
        return response.content


__all__ = ["AuditionService"]
