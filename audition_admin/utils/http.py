"""HTTP helpers shared by the admin API clients."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional

import httpx


class ApiError(Exception):
    """Raised when the admin backend answers with a non-success status."""

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        *,
        payload: Any = None,
        request: httpx.Request | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.payload = payload
        self.request = request
        super().__init__(message or f"Request failed with status {status_code}")

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == HTTPStatus.UNAUTHORIZED

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        payload: Any = None
        message: Optional[str] = None
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or None
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("detail")
        return cls(
            response.status_code,
            message,
            payload=payload,
            request=response.request,
        )


def raise_for_api_error(response: httpx.Response) -> httpx.Response:
    """Return ``response`` unchanged unless its status is an error."""
    if response.is_error:
        raise ApiError.from_response(response)
    return response


def bearer(token: str) -> str:
    return f"Bearer {token}"


def clean_params(params: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Drop unset query parameters so the backend applies its own defaults."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


def unwrap_envelope(response: httpx.Response) -> Any:
    """Return the ``data`` member of the backend's ``{success, message, data}`` envelope."""
    if not response.content:
        return None
    payload = response.json()
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


__all__ = [
    "ApiError",
    "bearer",
    "clean_params",
    "raise_for_api_error",
    "unwrap_envelope",
]
