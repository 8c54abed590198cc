"""
Generic authenticated HTTP layer for the admin backend.

All resource services go through :class:`AdminApiClient`, which hands every
request to a :class:`RefreshCoordinator` for bearer attachment and
refresh-and-replay on authorization failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

import httpx

from audition_admin.core.config import ApiSettings
from audition_admin.utils.http import clean_params, raise_for_api_error, unwrap_envelope

if TYPE_CHECKING:
    from audition_admin.services.token_refresh import RefreshCoordinator


class AdminApiClient:
    """Issue JSON requests against the admin API with coordinated authentication."""

    def __init__(
        self,
        api_settings: ApiSettings,
        coordinator: RefreshCoordinator,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._coordinator = coordinator
        self._http = httpx.AsyncClient(
            base_url=api_settings.base_url,
            timeout=api_settings.timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _dispatch(self, request: httpx.Request) -> httpx.Response:
        response = await self._http.send(request)
        return raise_for_api_error(response)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request and return the successful response.

        Raises :class:`~audition_admin.utils.http.ApiError` for error statuses
        and lets ``httpx`` transport errors (including timeouts) propagate.
        """
        request = self._http.build_request(
            method.upper(),
            path,
            params=clean_params(params),
            json=json,
        )
        return await self._coordinator.send(request, self._dispatch)

    async def call(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Like :meth:`request` but return the envelope's ``data`` member."""
        response = await self.request(method, path, params=params, json=json)
        return unwrap_envelope(response)


__all__ = ["AdminApiClient"]
