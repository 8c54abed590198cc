"""Payment transactions: listing, detail and CSV export."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

from audition_admin.schemas import Page, Transaction, TransactionFilters

if TYPE_CHECKING:
    from audition_admin.clients.api_client import AdminApiClient


class TransactionService:
    _PATH = "/admin/transactions"

    def __init__(self, api_client: "AdminApiClient") -> None:
        self._api = api_client

    async def list(
        self, filters: Optional[TransactionFilters] = None
    ) -> Page[Transaction]:
        params = filters.to_params() if filters else None
        response = await self._api.request("GET", self._PATH, params=params)
        return Page[Transaction].from_envelope(response.json())

    async def get(self, transaction_id: str) -> Transaction:
        data = await self._api.call(
            "GET", f"{self._PATH}/{quote(transaction_id, safe='')}"
        )
        return Transaction.model_validate(data)

    async def export(self, filters: Optional[TransactionFilters] = None) -> bytes:
        params = filters.to_params() if filters else None
        response = await self._api.request("GET", f"{self._PATH}/export", params=params)
        return response.content


__all__ = ["TransactionService"]
