"""Expose constructed client wrappers."""

from .api_client import AdminApiClient
from .auth_api import AuthApi, TokenRefreshError
from .sqlite_store import SQLiteStore

__all__ = [
    "AdminApiClient",
    "AuthApi",
    "SQLiteStore",
    "TokenRefreshError",
]
